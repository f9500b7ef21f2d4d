from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.core.history import merge_history
from backend.core.schema import WorkItem
from backend.infrastructure import FileKeyValueStore, HistoryStore, InMemoryKeyValueStore


def _item(date: str, name: str, work: str, status: str = "pending") -> WorkItem:
    return WorkItem(date=date, employee_name=name, work=work, status=status)


class RecordingStore(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.writes = 0

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        super().set(key, value)


def test_merge_keeps_existing_and_appends_new():
    a = _item("01-15-24", "Abdullah", "Fix pump")
    b = _item("01-15-24", "Ayesha", "Order parts")

    merged = merge_history([a], [a, b])

    assert merged == [a, b]


def test_merge_is_idempotent():
    history = [_item("01-14-24", "Abdullah", "Inspect line")]
    snapshot = [
        _item("01-15-24", "Abdullah", "Fix pump"),
        _item("01-15-24", "Ayesha", "Order parts", "working"),
    ]

    once = merge_history(history, snapshot)
    twice = merge_history(once, snapshot)

    assert twice == once


def test_merge_ignores_status_changes_for_known_keys():
    first = _item("01-15-24", "Abdullah", "Fix pump", "pending")
    later = _item("01-15-24", "Abdullah", "Fix pump", "finished")

    merged = merge_history([first], [later])

    assert merged == [first]
    assert merged[0].status == "pending"


def test_merge_never_stores_duplicate_keys():
    dup_a = _item("01-15-24", "Abdullah", "Fix pump", "pending")
    dup_b = _item("01-15-24", "Abdullah", "Fix pump", "working")

    merged = merge_history([], [dup_a, dup_b, dup_a])

    keys = [item.identity_key for item in merged]
    assert len(keys) == len(set(keys)) == 1


def test_merge_is_order_independent_on_keys():
    x = [_item("01-15-24", "Abdullah", "Fix pump")]
    y = [_item("01-16-24", "Ayesha", "Call supplier")]

    left = merge_history(merge_history([], x), y)
    right = merge_history(merge_history([], y), x)

    assert {i.identity_key for i in left} == {i.identity_key for i in right}


def test_store_saves_only_when_history_grows():
    storage = RecordingStore()
    store = HistoryStore(storage, key="test-history")
    snapshot = [_item("01-15-24", "Abdullah", "Fix pump")]

    store.merge(snapshot)
    store.merge(snapshot)

    assert storage.writes == 1
    blob = json.loads(storage.get("test-history"))
    assert blob[0]["employeeName"] == "Abdullah"
    assert set(blob[0]) == {"date", "employeeName", "work", "status", "observedAt"}


def test_store_round_trips_through_storage():
    storage = InMemoryKeyValueStore()
    store = HistoryStore(storage)
    store.merge([_item("01-15-24", "Abdullah", "Fix pump", "working")])

    reloaded = HistoryStore(storage)
    items = reloaded.load()

    assert [item.identity_key for item in items] == [("01-15-24", "Abdullah", "Fix pump")]
    assert items[0].status == "working"


def test_store_load_skips_malformed_entries():
    storage = InMemoryKeyValueStore()
    storage.set(
        "sial-dashboard-data",
        json.dumps(
            [
                {"date": "01-15-24", "employeeName": "Abdullah", "work": "Fix pump", "status": "pending"},
                {"date": "01-15-24", "employeeName": "", "work": "broken"},
                "not-an-object",
                {"date": "01-15-24", "employeeName": "Abdullah", "work": "Fix pump", "status": "finished"},
            ]
        ),
    )

    items = HistoryStore(storage).load()

    assert len(items) == 1
    assert items[0].status == "pending"


@pytest.mark.parametrize("blob", ["{not json", json.dumps({"items": []})])
def test_store_load_treats_unreadable_blob_as_empty(blob):
    storage = InMemoryKeyValueStore()
    storage.set("sial-dashboard-data", blob)

    assert HistoryStore(storage).load() == []


def test_clear_is_idempotent():
    storage = InMemoryKeyValueStore()
    store = HistoryStore(storage)
    store.merge([_item("01-15-24", "Abdullah", "Fix pump")])

    store.clear()
    store.clear()

    assert store.items == []
    assert storage.get(store.key) is None


def test_file_store_persists_blobs(tmp_path):
    storage = FileKeyValueStore(tmp_path / "data")
    store = HistoryStore(storage)
    store.merge([_item("01-15-24", "Abdullah", "Fix pump")])

    assert (tmp_path / "data" / "sial-dashboard-data.json").exists()
    assert len(HistoryStore(FileKeyValueStore(tmp_path / "data")).load()) == 1

    storage.remove("sial-dashboard-data")
    storage.remove("sial-dashboard-data")
    assert storage.get("sial-dashboard-data") is None
