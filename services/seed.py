"""Initial device set and reading history loaded at process start."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Iterable

from datastore.readings import ReadingStore
from models.records import Device, Reading

_SEED_DEVICES = (
    (1, "Device Alpha", "Building A"),
    (2, "Device Beta", "Building B"),
    (3, "Device Gamma", "Building C"),
    (4, "Device Delta", "Warehouse"),
    (5, "Device Epsilon", "Office"),
)

MIN_SEED_POWER_KW = 10.0
MAX_SEED_POWER_KW = 60.0


def seed_devices() -> list[Device]:
    return [Device(id=device_id, name=name, site=site) for device_id, name, site in _SEED_DEVICES]


def seed_readings(
    store: ReadingStore,
    devices: Iterable[Device],
    now: datetime,
    per_device: int = 5,
    max_age_hours: float = 6.0,
    seed: int = 1,
) -> int:
    """Insert ``per_device`` random readings for each device, returning the total.

    Ages fall in ``[0, max_age_hours)`` before ``now``. The same ``seed``
    yields the same ages and power values on every run.
    """
    rng = random.Random(seed)
    inserted = 0
    for device in devices:
        for _ in range(per_device):
            hours_ago = rng.random() * max_age_hours
            power = MIN_SEED_POWER_KW + rng.random() * (MAX_SEED_POWER_KW - MIN_SEED_POWER_KW)
            store.insert(
                Reading(
                    device_id=device.id,
                    timestamp=now - timedelta(hours=hours_ago),
                    power_usage_kw=round(power, 3),
                )
            )
            inserted += 1
    return inserted
