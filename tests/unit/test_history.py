# tests/unit/test_history.py

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from textshare.constants import HISTORY_STORAGE_KEY
from textshare.repositories.history_repository import (
    HistoryStore,
    format_entry_date,
    make_preview,
)
from textshare.schemas.share import HistoryEntry


def _entry(n: int) -> HistoryEntry:
    return HistoryEntry(id=n, preview=f"note {n}", date="1/1/2026", link=f"https://x.test/#{n}")


# --- Capacity and ordering ---

def test_append_keeps_five_most_recent_first(history_store):
    for n in range(1, 8):
        history_store.append(_entry(n))

    assert len(history_store) == 5
    assert [e.id for e in history_store.entries] == [7, 6, 5, 4, 3]


def test_append_persists_under_named_key(history_store, storage):
    history_store.append(_entry(1))
    history_store.append(_entry(2))

    stored = json.loads(storage.get_item(HISTORY_STORAGE_KEY))
    assert [item["id"] for item in stored] == [2, 1]
    assert set(stored[0]) == {"id", "preview", "date", "link"}


def test_load_reads_what_append_wrote(storage):
    writer = HistoryStore(storage)
    writer.load()
    for n in range(1, 4):
        writer.append(_entry(n))

    reader = HistoryStore(storage)
    assert [e.id for e in reader.load()] == [3, 2, 1]


def test_custom_capacity(storage):
    store = HistoryStore(storage, capacity=2)
    for n in range(3):
        store.append(_entry(n))
    assert [e.id for e in store.entries] == [2, 1]


def test_capacity_must_be_positive(storage):
    with pytest.raises(ValueError):
        HistoryStore(storage, capacity=0)


# --- Fail open on bad persisted data ---

def test_load_absent_key_is_empty(history_store):
    assert history_store.load() == []


@pytest.mark.parametrize("blob", [
    "not json at all",
    "{\"id\": 1}",
    "[{\"id\": 1}]",
    "[{\"id\": \"one\", \"preview\": \"p\", \"date\": \"d\", \"link\": \"l\"}]",
    "null",
    "[" * 200000,
])
def test_load_malformed_blob_is_empty(storage, blob):
    storage.set_item(HISTORY_STORAGE_KEY, blob)
    store = HistoryStore(storage)
    assert store.load() == []
    assert store.entries == ()


def test_load_truncates_oversized_list(storage):
    items = [_entry(n).model_dump() for n in range(9, 0, -1)]
    storage.set_item(HISTORY_STORAGE_KEY, json.dumps(items))
    store = HistoryStore(storage)
    assert [e.id for e in store.load()] == [9, 8, 7, 6, 5]


def test_read_failure_is_empty(broken_storage):
    store = HistoryStore(broken_storage)
    assert store.load() == []


def test_write_failure_keeps_memory_intact(broken_storage):
    store = HistoryStore(broken_storage)
    store.load()
    store.append(_entry(1))
    store.append(_entry(2))
    assert [e.id for e in store.entries] == [2, 1]


# --- Entries ---

def test_entries_are_immutable():
    entry = _entry(1)
    with pytest.raises(PydanticValidationError):
        entry.preview = "changed"


def test_entries_view_cannot_mutate_store(history_store):
    history_store.append(_entry(1))
    snapshot = history_store.entries
    assert isinstance(snapshot, tuple)


def test_make_preview():
    assert make_preview("short") == "short"
    assert make_preview("x" * 30) == "x" * 30
    assert make_preview("x" * 31) == "x" * 30 + "..."


def test_format_entry_date():
    assert format_entry_date(date(2026, 10, 18)) == "10/18/2026"
    assert format_entry_date(date(2026, 1, 5)) == "1/5/2026"


def test_record_builds_and_prepends_entry(history_store, storage):
    entry = history_store.record("a" * 40, "https://x.test/#tok", now_ms=1_760_000_000_000)

    assert entry.id == 1_760_000_000_000
    assert entry.preview == "a" * 30 + "..."
    assert entry.link == "https://x.test/#tok"
    assert entry.date == format_entry_date(datetime.fromtimestamp(1_760_000_000).date())
    assert history_store.entries == (entry,)
    assert json.loads(storage.get_item(HISTORY_STORAGE_KEY))[0]["id"] == entry.id


def test_record_ids_are_monotonic(history_store):
    history_store.record("one", "l1", now_ms=5_000)
    # clock did not move, or even went backwards
    second = history_store.record("two", "l2", now_ms=4_000)
    assert second.id == 5_001


def test_record_date_comes_from_clock_not_bumped_id(storage):
    head = {"id": 200_000_000_000_000, "preview": "p", "date": "d", "link": "l"}
    storage.set_item(HISTORY_STORAGE_KEY, json.dumps([head]))
    store = HistoryStore(storage)
    store.load()

    entry = store.record("later", "l2", now_ms=1_760_000_000_000)

    assert entry.id == 200_000_000_000_001
    assert entry.date == format_entry_date(datetime.fromtimestamp(1_760_000_000).date())


@pytest.mark.parametrize("bad_id", [-1, 10**20])
def test_load_drops_entries_with_impossible_ids(storage, bad_id):
    items = [
        {"id": bad_id, "preview": "p", "date": "d", "link": "bad"},
        _entry(3).model_dump(),
    ]
    storage.set_item(HISTORY_STORAGE_KEY, json.dumps(items))
    store = HistoryStore(storage)

    assert [e.link for e in store.load()] == [_entry(3).link]
    # still usable afterwards
    assert store.record("next", "l", now_ms=1_760_000_000_000).id == 1_760_000_000_000


def test_concurrent_records_get_distinct_ids(history_store):
    def worker(n):
        return history_store.record(f"note {n}", f"l{n}", now_ms=1_000)

    with ThreadPoolExecutor(max_workers=8) as pool:
        made = list(pool.map(worker, range(5)))

    ids = [e.id for e in made]
    assert sorted(ids) == list(range(1_000, 1_005))
    assert [e.id for e in history_store.entries] == sorted(ids, reverse=True)
