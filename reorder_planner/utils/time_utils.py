"""
Time and date utilities for recency scoring and export file naming.

All datetimes handled by the scorer are timezone-aware UTC.  Spreadsheet
cells and free-text dates carry no zone, so naive values are taken as UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

SECONDS_PER_YEAR: float = 60 * 60 * 24 * 365


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime | date) -> datetime:
    """Coerce a ``date`` or naive/aware ``datetime`` into an aware UTC datetime.

    A bare ``date`` becomes midnight UTC of that day.
    """
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def years_between(earlier: datetime, later: datetime) -> float:
    """Return ``later - earlier`` in 365-day years (negative if reversed)."""
    return (as_utc(later) - as_utc(earlier)).total_seconds() / SECONDS_PER_YEAR


def date_suffix(run_date: date | None = None) -> str:
    """Return ``run_date`` (default: today, UTC) as ``YYYY-MM-DD`` for filenames."""
    if run_date is None:
        run_date = utcnow().date()
    return run_date.isoformat()
