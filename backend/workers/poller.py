from __future__ import annotations

import asyncio
import logging

from backend.application import DashboardService
from backend.infrastructure import FeedError

logger = logging.getLogger(__name__)


class FeedPoller:
    """Refreshes the dashboard once on start and then every ``interval`` seconds.

    Each tick runs its refresh as a separate task so a slow request never
    delays the next tick. Overlapping refreshes are harmless: the snapshot is
    replaced wholesale and merging into history is idempotent.
    """

    def __init__(self, service: DashboardService, *, interval: float = 30.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._service = service
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="feed-poller")

    async def stop(self) -> None:
        tasks = list(self._inflight)
        if self._task is not None:
            tasks.append(self._task)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._task = None
        self._inflight.clear()

    async def _run(self) -> None:
        while True:
            self._spawn_refresh()
            await asyncio.sleep(self._interval)

    def _spawn_refresh(self) -> None:
        task = asyncio.create_task(self.refresh_once())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def refresh_once(self) -> bool:
        """Run one refresh; failures are logged and leave the last good state."""

        try:
            await self._service.refresh_async()
        except FeedError as exc:
            logger.warning("feed refresh failed: %s", exc)
            return False
        except Exception:
            logger.exception("unexpected error while refreshing the feed")
            return False
        return True
