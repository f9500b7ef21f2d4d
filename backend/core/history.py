"""Pure helpers for accumulating work items without duplicates."""
from __future__ import annotations

from typing import Iterable

from backend.core.schema import WorkItem


def identity_key(item: WorkItem) -> tuple[str, str, str]:
    """Return the ``(date, employee_name, work)`` triple; status is ignored."""

    return item.identity_key


def merge_history(history: Iterable[WorkItem], snapshot: Iterable[WorkItem]) -> list[WorkItem]:
    """Append the snapshot items whose identity key has not been seen yet.

    The first observation of a key wins, so a later status change for an
    already stored key is dropped.
    """

    merged = list(history)
    seen = {identity_key(item) for item in merged}
    for item in snapshot:
        key = identity_key(item)
        if key in seen:
            continue
        seen.add(key)
        merged.append(item)
    return merged
