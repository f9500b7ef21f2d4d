from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from backend.core.schema import DashboardStats, PersonSummary, WorkItem
from backend.core.views import PERSON_LIMIT, recent

DEFAULT_PEOPLE: tuple[str, ...] = ("abdullah", "ayesha")


def matches_person(item: WorkItem, name: str) -> bool:
    return name.strip().lower() in item.employee_name.lower()


def summarize(
    display: Sequence[WorkItem],
    history: Sequence[WorkItem],
    people: Iterable[str] = DEFAULT_PEOPLE,
) -> DashboardStats:
    """Reduce a display set to status counts and per-person slices.

    Per-person work lists follow the display set, while completed counts are
    taken from the full history regardless of the view.
    """

    counts = Counter(item.status for item in display)
    summaries: list[PersonSummary] = []
    for name in people:
        items = [item for item in display if matches_person(item, name)]
        completed = sum(1 for item in history if matches_person(item, name) and item.status == "finished")
        summaries.append(
            PersonSummary(
                name=name,
                completed=completed,
                items=items,
                recent=recent(items, PERSON_LIMIT),
            )
        )

    return DashboardStats(
        total=len(display),
        pending=counts.get("pending", 0),
        working=counts.get("working", 0),
        finished=counts.get("finished", 0),
        people=summaries,
    )
