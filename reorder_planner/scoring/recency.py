"""
Recency estimation for free-text "last event" fields.

The stock system exports ``Last Sale`` / ``Last Delivery`` as a date followed
by a quantity, e.g. ``"03/14/2025 Qty. 2"``.  Only the text before the first
literal ``" Qty. "`` is parsed; the whole string is used when the separator is
absent.  Anything that does not parse yields no recency signal (score 0),
never an error.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from reorder_planner.utils.time_utils import as_utc, years_between

QTY_SEPARATOR = " Qty. "

# Tried in order after datetime.fromisoformat().  Month-first, no locale handling.
_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
)


def parse_date_prefix(value: Any) -> Optional[datetime]:
    """Parse the date before ``" Qty. "`` into an aware UTC datetime.

    Native ``datetime`` / ``date`` cell values are accepted as-is.

    Returns:
        UTC datetime, or ``None`` for empty, unparsable or out-of-range input.
    """
    if isinstance(value, (datetime, date)):
        return _to_utc_or_none(value)
    if not isinstance(value, str) or not value:
        return None

    prefix = value.split(QTY_SEPARATOR)[0].strip()
    if not prefix:
        return None

    try:
        return _to_utc_or_none(datetime.fromisoformat(prefix.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return _to_utc_or_none(datetime.strptime(prefix, fmt))
        except ValueError:
            continue
    return None


def _to_utc_or_none(value: datetime | date) -> Optional[datetime]:
    """``as_utc``, or ``None`` when the UTC shift leaves the datetime range."""
    try:
        return as_utc(value)
    except OverflowError:
        return None


def recency_score(now: datetime, when: Optional[datetime]) -> float:
    """Normalized recency in [0, 1]: 1.0 today, linearly 0.0 at one year and older.

    Future dates clamp to 1.0; a missing date scores 0.0.
    """
    if when is None:
        return 0.0
    age_years = years_between(when, now)
    return 1.0 - min(max(age_years, 0.0), 1.0)
