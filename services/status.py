"""Status derivation for devices based on reading recency."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from models.records import DeviceStatus, Reading

WARNING_AFTER_MINUTES = 30
OFFLINE_AFTER_MINUTES = 120


def reading_age_minutes(reading: Reading, now: datetime) -> float:
    return (now - reading.timestamp).total_seconds() / 60


def derive_status(readings: Iterable[Reading], now: datetime) -> DeviceStatus:
    """Map a device's readings to its status at ``now``.

    Only the reading with the latest timestamp matters. Thresholds use
    strict comparisons, so an age of exactly 30 minutes is still online and
    exactly 120 minutes is still a warning. Future readings count as online.
    """
    latest = max(readings, key=lambda reading: reading.timestamp, default=None)
    if latest is None:
        return DeviceStatus.offline

    age = reading_age_minutes(latest, now)
    if age > OFFLINE_AFTER_MINUTES:
        return DeviceStatus.offline
    if age > WARNING_AFTER_MINUTES:
        return DeviceStatus.warning
    return DeviceStatus.online
