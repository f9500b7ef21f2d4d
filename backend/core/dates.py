"""Date helpers for the ``MM-DD-YY`` strings used by the sheet feed."""
from __future__ import annotations

import re
from datetime import date, datetime


MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
ISO_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_mmddyy(value: date) -> str:
    """Render ``value`` the way the sheet stores dates, e.g. ``01-15-24``."""

    return f"{value.month:02d}-{value.day:02d}-{value.year % 100:02d}"


def parse_mmddyy(raw: str) -> date | None:
    """Parse ``MM-DD-YY`` into a calendar date, assuming the 2000s.

    Returns ``None`` for anything that is not a valid calendar date.
    """

    parts = str(raw or "").strip().split("-")
    if len(parts) != 3:
        return None
    try:
        month, day, year = (int(part) for part in parts)
    except ValueError:
        return None
    if year < 0 or year > 99:
        return None
    try:
        return date(2000 + year, month, day)
    except ValueError:
        return None


def today_string(today: date | None = None) -> str:
    return format_mmddyy(today or date.today())


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def is_month_key(raw: str) -> bool:
    match = MONTH_KEY_PATTERN.match(str(raw or ""))
    return bool(match) and 1 <= int(match.group(2)) <= 12


def normalise_day(value: date | datetime | str | None) -> str | None:
    """Coerce a day filter to its ``MM-DD-YY`` rendering.

    Accepts a ``date``, an ISO ``YYYY-MM-DD`` string or an ``MM-DD-YY``
    string. Raises ``ValueError`` for anything else.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return format_mmddyy(value.date())
    if isinstance(value, date):
        return format_mmddyy(value)

    raw = str(value).strip()
    if not raw:
        return None
    if ISO_DAY_PATTERN.match(raw):
        return format_mmddyy(date.fromisoformat(raw))
    parsed = parse_mmddyy(raw)
    if parsed is None:
        raise ValueError(f"unrecognised day: {raw!r}")
    return format_mmddyy(parsed)
