from __future__ import annotations

from threading import Lock
from typing import Dict, Iterable, Optional

from models.records import Device


class DeviceStore:
    """Fixed set of devices, kept in seed order."""

    def __init__(self, devices: Iterable[Device] = ()) -> None:
        self._devices: Dict[int, Device] = {}
        self._lock = Lock()
        for device in devices:
            if device.id in self._devices:
                raise ValueError(f"Duplicate device id {device.id!r}.")
            self._devices[device.id] = device

    def list(self) -> list[Device]:
        with self._lock:
            return list(self._devices.values())

    def get(self, device_id: int) -> Optional[Device]:
        with self._lock:
            return self._devices.get(device_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)
