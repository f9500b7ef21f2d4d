from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.core import views
from backend.core.schema import WorkItem
from backend.core.stats import summarize


def _item(day: str, name: str, work: str, status: str) -> WorkItem:
    return WorkItem(date=day, employee_name=name, work=work, status=status)


HISTORY = [
    _item("01-10-24", "Abdullah Khan", "Old weld", "finished"),
    _item("01-11-24", "Abdullah Khan", "Old paint", "finished"),
    _item("01-15-24", "Abdullah Khan", "Fix pump", "working"),
    _item("01-15-24", "Ayesha", "Order parts", "finished"),
    _item("01-15-24", "Ayesha", "Call supplier", "pending"),
    _item("01-15-24", "Bilal", "Sweep floor", "pending"),
]


def test_status_counts_partition_the_display_set():
    stats = summarize(HISTORY, HISTORY)

    assert stats.total == 6
    assert (stats.pending, stats.working, stats.finished) == (2, 1, 3)
    assert stats.pending + stats.working + stats.finished == stats.total


def test_person_lists_follow_view_but_completed_counts_use_history():
    display = views.select("live", HISTORY, HISTORY, today=date(2024, 1, 15))

    stats = summarize(display, HISTORY, ["abdullah", "AYESHA"])
    abdullah, ayesha = stats.people

    assert [item.work for item in abdullah.items] == ["Fix pump"]
    assert abdullah.completed == 2
    assert [item.work for item in ayesha.items] == ["Order parts", "Call supplier"]
    assert ayesha.completed == 1
    assert [item.work for item in ayesha.recent] == ["Call supplier", "Order parts"]


def test_empty_display_keeps_history_completed_counts():
    stats = summarize([], HISTORY)

    assert stats.total == 0
    assert [person.completed for person in stats.people] == [2, 1]
    assert all(person.items == [] for person in stats.people)
