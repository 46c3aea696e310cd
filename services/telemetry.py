"""Query and write operations over the device and reading stores."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Optional, Union

from datastore.devices import DeviceStore
from datastore.readings import ReadingStore, normalize_limit
from models.records import Device, DeviceSummary, Reading
from services.errors import DeviceNotFoundError, InvalidPowerError, InvalidTimestampError
from services.seed import seed_devices, seed_readings
from services.status import derive_status
from settings import get_settings

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TelemetryService:
    """Answers device/reading queries and records new readings.

    Holds no state of its own; every read and write goes through the stores.
    """

    def __init__(
        self,
        devices: DeviceStore,
        readings: ReadingStore,
        clock: Clock = _utcnow,
    ) -> None:
        self.devices = devices
        self.readings = readings
        self._clock = clock

    def list_devices_with_status(self) -> list[DeviceSummary]:
        now = self._clock()
        return [self._summarize(device, now) for device in self.devices.list()]

    def get_device_with_status(self, device_id: int) -> DeviceSummary:
        return self._summarize(self._require_device(device_id), self._clock())

    def list_readings_for_device(self, device_id: int, limit: Optional[Any] = None) -> list[Reading]:
        self._require_device(device_id)
        return self.readings.list_by_device(device_id, normalize_limit(limit))

    def record_reading(
        self,
        device_id: int,
        power_usage_kw: Any,
        timestamp: Optional[Union[str, datetime]] = None,
    ) -> Reading:
        """Validate and append a reading for an existing device.

        Checks run in order: power, device existence, timestamp. Nothing is
        written unless all of them pass.
        """
        power = self._validate_power(power_usage_kw)
        self._require_device(device_id)
        if timestamp is None:
            recorded_at = self._clock()
        else:
            recorded_at = self._parse_timestamp(timestamp)

        return self.readings.insert(
            Reading(device_id=device_id, timestamp=recorded_at, power_usage_kw=power)
        )

    def _require_device(self, device_id: int) -> Device:
        device = self.devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device

    def _summarize(self, device: Device, now: datetime) -> DeviceSummary:
        status = derive_status(self.readings.list_by_device(device.id), now)
        return DeviceSummary.from_device(device, status)

    @staticmethod
    def _validate_power(value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidPowerError("powerUsageKw must be a number.")
        power = float(value)
        if not math.isfinite(power) or power < 0:
            raise InvalidPowerError()
        return power

    @staticmethod
    def _parse_timestamp(value: Union[str, datetime]) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str):
            candidate = value.strip()
            if not candidate:
                raise InvalidTimestampError("timestamp must not be empty.")

            if candidate.endswith(("Z", "z")):
                candidate = candidate[:-1] + "+00:00"

            try:
                parsed = datetime.fromisoformat(candidate)
            except ValueError as exc:
                raise InvalidTimestampError() from exc
        else:
            raise InvalidTimestampError()

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)

        return parsed.astimezone(timezone.utc)


@lru_cache
def build_default_service() -> TelemetryService:
    """Factory that wires the service with freshly seeded in-memory stores."""
    settings = get_settings()
    devices = DeviceStore(seed_devices())
    readings = ReadingStore()
    seed_readings(
        readings,
        devices.list(),
        now=_utcnow(),
        per_device=settings.seed_readings_per_device,
        max_age_hours=settings.seed_max_age_hours,
        seed=settings.seed_random_seed,
    )
    return TelemetryService(devices=devices, readings=readings)
