"""Derivation of the dashboard record sets from snapshot and history."""
from __future__ import annotations

from datetime import date
from typing import Sequence

from backend.core.dates import format_mmddyy, month_key, normalise_day, parse_mmddyy
from backend.core.schema import WorkItem

PENDING_LIMIT = 50
ACTIVITY_LIMIT = 15
PERSON_LIMIT = 10


def _in_month(item: WorkItem, month: str) -> bool:
    parsed = parse_mmddyy(item.date)
    if parsed is None:
        return False
    return month_key(parsed) == month


def select_live(snapshot: Sequence[WorkItem], *, today: date | None = None) -> list[WorkItem]:
    today_str = format_mmddyy(today or date.today())
    return [item for item in snapshot if item.date == today_str]


def select_monthly(
    history: Sequence[WorkItem],
    month: str | None = None,
    day: date | str | None = None,
    *,
    today: date | None = None,
) -> list[WorkItem]:
    month = month or month_key(today or date.today())
    items = [item for item in history if _in_month(item, month)]
    day_str = normalise_day(day)
    if day_str:
        items = [item for item in items if item.date == day_str]
    return items


def select_pending(history: Sequence[WorkItem], limit: int = PENDING_LIMIT) -> list[WorkItem]:
    return [item for item in history if item.status == "pending"][:limit]


def select(
    mode: str | None,
    snapshot: Sequence[WorkItem],
    history: Sequence[WorkItem],
    month: str | None = None,
    day: date | str | None = None,
    *,
    today: date | None = None,
) -> list[WorkItem]:
    """Return the display record set for ``mode``.

    ``live`` reads the snapshot, ``monthly`` and ``pending`` read history.
    Unknown modes return the snapshot unfiltered.
    """

    if mode == "live":
        return select_live(snapshot, today=today)
    if mode == "monthly":
        return select_monthly(history, month, day, today=today)
    if mode == "pending":
        return select_pending(history)
    return list(snapshot)


def available_dates(history: Sequence[WorkItem], month: str) -> list[str]:
    """Distinct dates with history in ``month``, newest first."""

    dated: dict[str, date] = {}
    for item in history:
        parsed = parse_mmddyy(item.date)
        if parsed is not None and month_key(parsed) == month:
            dated[item.date] = parsed
    return sorted(dated, key=lambda value: dated[value], reverse=True)


def latest_date(snapshot: Sequence[WorkItem]) -> str | None:
    dated = [(parsed, item.date) for item in snapshot if (parsed := parse_mmddyy(item.date)) is not None]
    if not dated:
        return None
    return max(dated)[1]


def recent(items: Sequence[WorkItem], limit: int = ACTIVITY_LIMIT) -> list[WorkItem]:
    """Last ``limit`` items, newest first."""

    if limit <= 0:
        return []
    return list(reversed(items[-limit:]))
