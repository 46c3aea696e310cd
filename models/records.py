"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class DeviceStatus(str, Enum):
    """Operational state derived from a device's reading history."""

    online = "online"
    warning = "warning"
    offline = "offline"


@dataclass(frozen=True, slots=True)
class Device:
    """A monitored device. Status is never stored here."""

    id: int
    name: str
    site: str


@dataclass(frozen=True, slots=True)
class Reading:
    """A single power-usage sample for one device."""

    device_id: int
    timestamp: datetime
    power_usage_kw: float
    id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DeviceSummary:
    """Device projection carrying the status computed at query time."""

    id: int
    name: str
    site: str
    status: DeviceStatus

    @classmethod
    def from_device(cls, device: Device, status: DeviceStatus) -> "DeviceSummary":
        return cls(id=device.id, name=device.name, site=device.site, status=status)
