"""Persisted, de-duplicated history of every work item seen on the feed."""
from __future__ import annotations

import json
import logging
from typing import Iterable

from pydantic import ValidationError

from backend.core.history import merge_history
from backend.core.schema import WorkItem
from backend.core.settings import DEFAULT_STORAGE_KEY

from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class HistoryStore:
    """Append-only history serialised as one JSON array under a fixed key."""

    def __init__(self, storage: KeyValueStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._items: list[WorkItem] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def items(self) -> list[WorkItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> list[WorkItem]:
        """Replace the in-memory history with the persisted blob."""

        raw = self._storage.get(self._key)
        if raw is None:
            self._items = []
            return self.items

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("ignoring unreadable history blob %s: %s", self._key, exc)
            self._items = []
            return self.items

        if not isinstance(payload, list):
            logger.warning("ignoring history blob %s: expected a JSON array", self._key)
            self._items = []
            return self.items

        parsed: list[WorkItem] = []
        for entry in payload:
            try:
                parsed.append(WorkItem.model_validate(entry))
            except ValidationError as exc:
                logger.warning("skipping malformed history entry: %s", exc.errors()[:1])
        self._items = merge_history([], parsed)
        return self.items

    def save(self) -> None:
        blob = json.dumps([item.to_blob() for item in self._items], ensure_ascii=False)
        self._storage.set(self._key, blob)

    def merge(self, snapshot: Iterable[WorkItem]) -> list[WorkItem]:
        """Add unseen items from ``snapshot``; persist only when something was added."""

        before = len(self._items)
        self._items = merge_history(self._items, snapshot)
        added = len(self._items) - before
        if added:
            self.save()
            logger.info("history grew by %d item(s) to %d", added, len(self._items))
        return self.items

    def clear(self) -> None:
        self._storage.remove(self._key)
        self._items = []
