from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import Event, Thread

import pytest

from datastore.devices import DeviceStore
from datastore.readings import DEFAULT_READING_LIMIT, ReadingStore, normalize_limit
from models.records import Device, Reading

BASE = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _reading(device_id: int, minutes: int, power: float = 1.0) -> Reading:
    return Reading(device_id=device_id, timestamp=BASE + timedelta(minutes=minutes), power_usage_kw=power)


def test_insert_assigns_unique_ids_and_returns_stored_record() -> None:
    store = ReadingStore()

    first = store.insert(_reading(1, 0))
    second = store.insert(_reading(1, 1))

    assert first.id and second.id
    assert first.id != second.id
    assert store.list_by_device(1) == [second, first]


def test_insert_keeps_supplied_id_and_rejects_duplicates() -> None:
    store = ReadingStore()
    original = Reading(device_id=1, timestamp=BASE, power_usage_kw=2.0, id="custom-1")

    stored = store.insert(original)
    assert stored is original

    with pytest.raises(ValueError):
        store.insert(Reading(device_id=1, timestamp=BASE, power_usage_kw=3.0, id="custom-1"))
    assert store.list_by_device(1) == [original]


def test_generated_ids_skip_explicitly_taken_ones() -> None:
    store = ReadingStore()
    store.insert(Reading(device_id=1, timestamp=BASE, power_usage_kw=1.0, id="reading-2"))

    generated = store.insert(_reading(1, 1))

    assert generated.id != "reading-2"


def test_list_by_device_sorts_newest_first_with_insertion_tiebreak() -> None:
    store = ReadingStore()
    older = store.insert(_reading(1, 0))
    tied_first = store.insert(_reading(1, 10, power=1.0))
    newest = store.insert(_reading(1, 20))
    tied_second = store.insert(_reading(1, 10, power=2.0))
    store.insert(_reading(2, 30))

    listed = store.list_by_device(1)

    assert listed == [newest, tied_second, tied_first, older]
    timestamps = [reading.timestamp for reading in listed]
    assert timestamps == sorted(timestamps, reverse=True)


def test_list_by_device_truncates_after_sorting() -> None:
    store = ReadingStore()
    for minutes in (3, 1, 4, 0, 2):
        store.insert(_reading(1, minutes))

    listed = store.list_by_device(1, 2)

    assert [r.timestamp for r in listed] == [BASE + timedelta(minutes=4), BASE + timedelta(minutes=3)]


def test_list_by_device_unknown_device_is_empty() -> None:
    assert ReadingStore().list_by_device(42) == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, DEFAULT_READING_LIMIT),
        (0, DEFAULT_READING_LIMIT),
        (-3, DEFAULT_READING_LIMIT),
        ("", DEFAULT_READING_LIMIT),
        ("abc", DEFAULT_READING_LIMIT),
        ("-1", DEFAULT_READING_LIMIT),
        (True, DEFAULT_READING_LIMIT),
        (5, 5),
        (" 7 ", 7),
        ("2.5", 2),
        ("5abc", 5),
        ("1e1", 1),
        ("+3", 3),
        ("0.9", DEFAULT_READING_LIMIT),
        (100, 100),
    ],
)
def test_normalize_limit(raw, expected: int) -> None:
    assert normalize_limit(raw) == expected


def test_invalid_limit_falls_back_to_default_of_twenty() -> None:
    store = ReadingStore()
    for minutes in range(25):
        store.insert(_reading(1, minutes))

    assert len(store.list_by_device(1, 0)) == 20
    assert len(store.list_by_device(1, "nope")) == 20
    assert len(store.list_by_device(1)) == 25


def test_count_per_device_and_total() -> None:
    store = ReadingStore()
    store.insert(_reading(1, 0))
    store.insert(_reading(1, 1))
    store.insert(_reading(2, 0))

    assert store.count() == 3
    assert store.count(1) == 2
    assert store.count(9) == 0


def test_concurrent_inserts_keep_every_reading() -> None:
    store = ReadingStore()

    def writer(device_id: int) -> None:
        for minutes in range(200):
            store.insert(_reading(device_id, minutes))

    threads = [Thread(target=writer, args=(device_id,)) for device_id in (1, 2, 3, 4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.count() == 800
    ids = {r.id for device_id in (1, 2, 3, 4) for r in store.list_by_device(device_id)}
    assert len(ids) == 800


def test_device_store_preserves_seed_order_and_lookup() -> None:
    devices = [Device(id=3, name="C", site="x"), Device(id=1, name="A", site="y")]
    store = DeviceStore(devices)

    assert store.list() == devices
    assert store.get(1) == devices[1]
    assert store.get(2) is None
    assert len(store) == 2


def test_device_store_rejects_duplicate_ids() -> None:
    with pytest.raises(ValueError):
        DeviceStore([Device(id=1, name="A", site="x"), Device(id=1, name="B", site="y")])


def test_reader_sees_complete_sorted_snapshots_during_concurrent_writes() -> None:
    store = ReadingStore()
    writers_done = Event()
    failures: list[str] = []

    def writer(offset: int) -> None:
        for minutes in range(offset, 600, 3):
            store.insert(_reading(1, minutes))

    def reader() -> None:
        previous_length = 0
        while True:
            finished = writers_done.is_set()
            snapshot = store.list_by_device(1)
            timestamps = [reading.timestamp for reading in snapshot]
            if timestamps != sorted(timestamps, reverse=True):
                failures.append("snapshot not newest-first")
            if any(not reading.id for reading in snapshot):
                failures.append("reading without id")
            if len(snapshot) < previous_length:
                failures.append("snapshot shrank")
            previous_length = len(snapshot)
            if finished:
                return

    reader_thread = Thread(target=reader)
    writer_threads = [Thread(target=writer, args=(offset,)) for offset in range(3)]
    reader_thread.start()
    for thread in writer_threads:
        thread.start()
    for thread in writer_threads:
        thread.join()
    writers_done.set()
    reader_thread.join()

    assert failures == []
    assert len(store.list_by_device(1)) == 600
