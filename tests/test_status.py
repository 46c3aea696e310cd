"""Unit tests for status derivation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from models.records import DeviceStatus, Reading
from services.status import derive_status

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _reading_aged(minutes: float) -> Reading:
    return Reading(device_id=1, timestamp=NOW - timedelta(minutes=minutes), power_usage_kw=1.0)


def test_no_readings_is_offline() -> None:
    assert derive_status([], NOW) is DeviceStatus.offline


@pytest.mark.parametrize(
    ("age_minutes", "expected"),
    [
        (0, DeviceStatus.online),
        (-15, DeviceStatus.online),
        (30, DeviceStatus.online),
        (30.0001, DeviceStatus.warning),
        (45, DeviceStatus.warning),
        (120, DeviceStatus.warning),
        (120.0001, DeviceStatus.offline),
        (600, DeviceStatus.offline),
    ],
)
def test_status_thresholds_use_strict_comparisons(age_minutes: float, expected: DeviceStatus) -> None:
    assert derive_status([_reading_aged(age_minutes)], NOW) is expected


def test_only_latest_reading_counts_regardless_of_order() -> None:
    readings = [_reading_aged(500), _reading_aged(5), _reading_aged(90)]

    assert derive_status(readings, NOW) is DeviceStatus.online
    assert derive_status(list(reversed(readings)), NOW) is DeviceStatus.online


def test_derivation_is_deterministic_and_does_not_mutate_input() -> None:
    readings = [_reading_aged(45), _reading_aged(200)]
    snapshot = list(readings)

    first = derive_status(readings, NOW)
    second = derive_status(readings, NOW)

    assert first is second is DeviceStatus.warning
    assert readings == snapshot


def test_accepts_generators() -> None:
    assert derive_status((r for r in [_reading_aged(10)]), NOW) is DeviceStatus.online
