"""Domain entities for the live dashboard state."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backend.core.schema import WorkItem


@dataclass(slots=True)
class FetchRecord:
    """Outcome of the most recent feed fetch."""

    status: str = "never"
    started_at: datetime | None = None
    finished_at: datetime | None = None
    error: str | None = None
    items: int = 0


@dataclass(slots=True)
class DashboardState:
    """What the feed currently reports plus fetch bookkeeping."""

    snapshot: list[WorkItem] = field(default_factory=list)
    last_fetch: FetchRecord = field(default_factory=FetchRecord)
    last_success_at: datetime | None = None
    fetch_count: int = 0
    failure_count: int = 0
