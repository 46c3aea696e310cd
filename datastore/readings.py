"""Append-only in-memory log of power-usage readings."""

from __future__ import annotations

import re
from dataclasses import replace
from itertools import count
from threading import Lock
from typing import Any, Dict, List, Optional, Set, Tuple

from models.records import Reading

DEFAULT_READING_LIMIT = 20

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def normalize_limit(value: Any, default: int = DEFAULT_READING_LIMIT) -> int:
    """Coerce a caller-supplied limit, falling back to ``default``.

    Strings are read up to the first non-digit, so ``"2.5"`` and ``"5abc"``
    both count. Missing, non-positive and unparseable values map to the
    default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


class ReadingStore:

    def __init__(self) -> None:
        # per device: (insertion sequence, reading) in insertion order
        self._entries: Dict[int, List[Tuple[int, Reading]]] = {}
        self._ids: Set[str] = set()
        self._sequence = count(1)
        self._lock = Lock()

    def insert(self, reading: Reading) -> Reading:
        """Store ``reading`` and return the stored record, assigning an id if absent."""
        with self._lock:
            sequence = next(self._sequence)
            if reading.id is None:
                stored = replace(reading, id=self._fresh_id(sequence))
            elif reading.id in self._ids:
                raise ValueError(f"Reading id {reading.id!r} already exists.")
            else:
                stored = reading
            self._ids.add(stored.id)  # type: ignore[arg-type]
            self._entries.setdefault(stored.device_id, []).append((sequence, stored))
            return stored

    def list_by_device(self, device_id: int, limit: Optional[Any] = None) -> list[Reading]:
        """Return readings newest first; ties go to the most recent insert.

        With ``limit`` given, the result is truncated after sorting. A
        non-positive or unparseable limit uses the default of 20.
        """
        with self._lock:
            snapshot = list(self._entries.get(device_id, ()))

        snapshot.sort(key=lambda entry: (entry[1].timestamp, entry[0]), reverse=True)
        readings = [reading for _, reading in snapshot]
        if limit is None:
            return readings
        return readings[: normalize_limit(limit)]

    def count(self, device_id: Optional[int] = None) -> int:
        with self._lock:
            if device_id is not None:
                return len(self._entries.get(device_id, ()))
            return sum(len(entries) for entries in self._entries.values())

    def _fresh_id(self, sequence: int) -> str:
        candidate = f"reading-{sequence}"
        while candidate in self._ids:
            sequence = next(self._sequence)
            candidate = f"reading-{sequence}"
        return candidate
