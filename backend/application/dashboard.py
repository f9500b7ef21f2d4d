"""Application service layer for the team dashboard."""
from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Iterable

from backend.core.csvio import records_to_csv_text
from backend.core.dates import today_string
from backend.core.parser import parse_feed
from backend.core.schema import DashboardStats, WorkItem
from backend.core.stats import DEFAULT_PEOPLE, summarize
from backend.core import views
from backend.domain import DashboardState, FetchRecord
from backend.infrastructure import FeedClient, FeedError, HistoryStore, InMemoryKeyValueStore

logger = logging.getLogger(__name__)


class DashboardService:
    """Owns the current snapshot and the persisted history."""

    def __init__(
        self,
        history: HistoryStore,
        feed: FeedClient | None = None,
        *,
        people: Iterable[str] = DEFAULT_PEOPLE,
    ) -> None:
        self._history = history
        self._feed = feed
        self._people = list(people)
        self._state = DashboardState()

    @property
    def snapshot(self) -> list[WorkItem]:
        return list(self._state.snapshot)

    @property
    def history(self) -> list[WorkItem]:
        return self._history.items

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def start(self, *, reset_on_start: bool) -> None:
        """Prepare history at process start: wipe it or reload the persisted copy."""

        if reset_on_start:
            self._history.clear()
            logger.info("history reset on start")
        else:
            loaded = self._history.load()
            logger.info("loaded %d history item(s)", len(loaded))

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------
    def fetch_feed_text(self) -> str:
        if self._feed is None:
            raise FeedError("feed is not configured")
        return self._feed.fetch_text()

    def ingest_text(self, text: str, *, now: datetime | None = None) -> dict[str, int]:
        """Replace the snapshot with ``text`` and merge it into history."""

        snapshot = parse_feed(text, now=now)
        before = len(self._history)
        self._state.snapshot = snapshot
        self._history.merge(snapshot)
        return {
            "items": len(snapshot),
            "added": len(self._history) - before,
            "history": len(self._history),
        }

    def _begin_fetch(self) -> FetchRecord:
        self._state.fetch_count += 1
        return FetchRecord(status="running", started_at=datetime.now(timezone.utc))

    def _fail_fetch(self, record: FetchRecord, exc: Exception) -> None:
        record.status = "failed"
        record.error = str(exc)
        record.finished_at = datetime.now(timezone.utc)
        self._state.failure_count += 1
        self._state.last_fetch = record

    def _complete_fetch(self, record: FetchRecord, text: str) -> dict[str, int]:
        summary = self.ingest_text(text)
        record.status = "completed"
        record.items = summary["items"]
        record.finished_at = datetime.now(timezone.utc)
        self._state.last_fetch = record
        self._state.last_success_at = record.finished_at
        logger.info(
            "feed refreshed: %d item(s), %d new, %d in history",
            summary["items"],
            summary["added"],
            summary["history"],
        )
        return summary

    def refresh(self) -> dict[str, int]:
        """Fetch the feed and apply it. Raises :class:`FeedError` on failure."""

        record = self._begin_fetch()
        try:
            text = self.fetch_feed_text()
        except FeedError as exc:
            self._fail_fetch(record, exc)
            raise
        return self._complete_fetch(record, text)

    async def refresh_async(self) -> dict[str, int]:
        """Like :meth:`refresh` but performs the network call in a worker thread."""

        record = self._begin_fetch()
        try:
            text = await asyncio.to_thread(self.fetch_feed_text)
        except FeedError as exc:
            self._fail_fetch(record, exc)
            raise
        return self._complete_fetch(record, text)

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------
    def get_view(
        self,
        mode: str | None,
        month: str | None = None,
        day: date | str | None = None,
        *,
        today: date | None = None,
    ) -> list[WorkItem]:
        return views.select(mode, self._state.snapshot, self._history.items, month, day, today=today)

    def get_stats(
        self,
        mode: str | None,
        month: str | None = None,
        day: date | str | None = None,
        *,
        today: date | None = None,
    ) -> DashboardStats:
        display = self.get_view(mode, month, day, today=today)
        return summarize(display, self._history.items, self._people)

    def get_activity(
        self,
        mode: str | None,
        month: str | None = None,
        day: date | str | None = None,
        *,
        today: date | None = None,
    ) -> list[WorkItem]:
        return views.recent(self.get_view(mode, month, day, today=today), views.ACTIVITY_LIMIT)

    def available_dates(self, month: str) -> list[str]:
        return views.available_dates(self._history.items, month)

    def get_status(self, *, today: date | None = None) -> dict[str, object]:
        last = self._state.last_fetch
        return {
            "today": today_string(today),
            "latest_date": views.latest_date(self._state.snapshot),
            "snapshot_items": len(self._state.snapshot),
            "history_items": len(self._history),
            "fetch_count": self._state.fetch_count,
            "failure_count": self._state.failure_count,
            "last_success_at": self._state.last_success_at.isoformat() if self._state.last_success_at else None,
            "last_fetch": {
                "status": last.status,
                "started_at": last.started_at.isoformat() if last.started_at else None,
                "finished_at": last.finished_at.isoformat() if last.finished_at else None,
                "error": last.error,
                "items": last.items,
            },
        }

    # ------------------------------------------------------------------
    # history maintenance
    # ------------------------------------------------------------------
    def clear_history(self) -> None:
        self._history.clear()

    def export_history_csv(self) -> str:
        return records_to_csv_text(item.to_blob() for item in self._history.items)

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._history.clear()
        self._state = DashboardState()


_service = DashboardService(HistoryStore(InMemoryKeyValueStore()))


def configure_dashboard_service(service: DashboardService) -> None:
    """Install the service used by the HTTP routes and the poller."""

    global _service
    _service = service


def get_dashboard_service() -> DashboardService:
    """Return the dashboard service for the process."""

    return _service


def reset_dashboard_state() -> None:
    """Reset snapshot and history (used in tests)."""

    _service.reset()
