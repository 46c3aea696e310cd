"""Exception hierarchy for telemetry operations."""

from __future__ import annotations

from typing import Any


class TelemetryError(Exception):
    """Base exception for all telemetry errors."""


class DeviceNotFoundError(TelemetryError, LookupError):
    """The referenced device id does not exist."""

    def __init__(self, device_id: Any) -> None:
        self.device_id = device_id
        super().__init__(f"Device {device_id!r} not found.")


class ReadingValidationError(TelemetryError, ValueError):
    """A reading payload failed validation."""

    def __init__(self, message: str, *, field: str) -> None:
        self.field = field
        super().__init__(message)


class InvalidPowerError(ReadingValidationError):
    def __init__(self, message: str = "powerUsageKw must be a non-negative number.") -> None:
        super().__init__(message, field="powerUsageKw")


class InvalidTimestampError(ReadingValidationError):
    def __init__(self, message: str = "timestamp must be a valid ISO-8601 date-time.") -> None:
        super().__init__(message, field="timestamp")
