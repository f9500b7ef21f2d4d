"""Parsing of the comma separated sheet export into :class:`WorkItem` rows.

The export is split naively on commas. Quoted fields containing a comma are
not supported, which matches the sheet we ingest: it never quotes commas.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from backend.core.dates import today_string
from backend.core.schema import STATUSES, WorkItem

logger = logging.getLogger(__name__)

MIN_FIELDS = 4


def _clean(value: str) -> str:
    return value.strip().replace('"', "").strip()


def split_fields(line: str) -> list[str]:
    return [_clean(value) for value in line.split(",")]


def parse_header(line: str) -> list[str]:
    return split_fields(line)


def normalise_status(raw: str | None) -> str:
    status = (raw or "").strip().lower()
    return status if status in STATUSES else "pending"


def parse_line(header: list[str] | None, line: str, *, now: datetime | None = None) -> WorkItem | None:
    """Turn one data line into a :class:`WorkItem`, or ``None`` when rejected.

    Columns are positional (date, employee name, work, status); ``header`` is
    only used for diagnostics.
    """

    values = split_fields(line)
    if len(values) < MIN_FIELDS:
        logger.debug("rejected feed line with %d fields (header=%s)", len(values), header)
        return None

    raw_date, employee_name, work, raw_status = values[:MIN_FIELDS]
    if not employee_name or not work:
        logger.debug("rejected feed line without employee or work: %r", line)
        return None

    observed_at = now or datetime.now(timezone.utc)
    return WorkItem(
        date=raw_date or today_string(observed_at.astimezone().date()),
        employee_name=employee_name,
        work=work,
        status=normalise_status(raw_status),
        observed_at=observed_at,
    )


def parse_feed(text: str, *, now: datetime | None = None) -> list[WorkItem]:
    """Parse a full export; line 0 is the header and blank lines are skipped."""

    if not text:
        return []

    lines = text.split("\n")
    header = parse_header(lines[0])
    observed_at = now or datetime.now(timezone.utc)
    items: list[WorkItem] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        item = parse_line(header, line, now=observed_at)
        if item is not None:
            items.append(item)
    return items
