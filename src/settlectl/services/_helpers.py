"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (the default clock)."""
    return datetime.now(UTC)


def day_start(day: date) -> datetime:
    """Midnight UTC at the start of *day*.

    Examples:
        >>> day_start(date(2020, 8, 15)).isoformat()
        '2020-08-15T00:00:00+00:00'
    """
    return datetime.combine(day, time.min, tzinfo=UTC)


# SQLite INTEGER is a signed 64-bit value; larger ids cannot be bound.
MAX_ROW_ID = 2**63 - 1


def is_row_id(value: int) -> bool:
    """True when *value* can name a row (a positive 64-bit integer)."""
    return 1 <= value <= MAX_ROW_ID
