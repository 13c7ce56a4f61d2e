# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for Educasem.

All Python datetimes produced here are timezone-aware UTC. Calendar dates
(birth dates) are plain ``date`` objects.

Usage:
------
    from educasem.utils.datetime import utc_now

    created_at: datetime = Field(default_factory=utc_now)
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get today's calendar date in UTC."""
    return utc_now().date()


def utc_from_timestamp(timestamp: float) -> datetime:
    """Create a timezone-aware UTC datetime from a Unix timestamp.

    Args:
        timestamp: Unix timestamp (seconds since epoch).

    Returns:
        Timezone-aware UTC datetime.
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as ISO 8601 string.

    Args:
        dt: Datetime to format.

    Returns:
        ISO 8601 formatted string or None if input is None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def parse_date(value: str | date | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` calendar date.

    Datetime strings are accepted and truncated to their date part.

    Args:
        value: Date string, date object, or None. Any other type is
            treated as malformed.

    Returns:
        Parsed date, or None when the value is empty or malformed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def whole_years_between(start: date, end: date) -> int:
    """Count complete years elapsed from start to end.

    A year only counts once its anniversary has been reached, so the day
    before a birthday still reports the previous age.

    Args:
        start: Earlier date (e.g. a birth date).
        end: Later date (e.g. today).

    Returns:
        Number of whole years, negative if start is after end.
    """
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
