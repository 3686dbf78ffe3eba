"""
Total field coercion over open-ended inventory records.

Source sheets vary in their header names and cell types, so every read from
an ``InventoryRecord`` goes through these helpers.  None of them raise:
unusable values collapse to ``0.0`` (numbers) or ``""`` (strings).
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

InventoryRecord = Mapping[str, Any]

_MISSING = object()


def to_number(value: Any) -> float:
    """Parse ``value`` as a number; anything non-finite or unparsable is 0.0.

    Rules:
      - ``None`` and empty/whitespace strings → 0.0
      - ``True`` / ``False`` → 1.0 / 0.0
      - int, float, Decimal → float (NaN / ±inf → 0.0)
      - numeric strings (surrounding whitespace allowed) → float
      - everything else (dates, text, containers) → 0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_string_safe(value: Any) -> str:
    """Stringify ``value``; ``None`` becomes ``""``.

    Integral floats render without a trailing ``.0`` so that barcode cells
    stored as numbers (``9780000000002.0``) come back as ``"9780000000002"``.
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def first_present(
    record: InventoryRecord,
    keys: Sequence[str],
    default: Any = None,
) -> Any:
    """Return the value of the first key in ``keys`` that is present and not ``None``.

    Empty strings count as present, matching how the reader fills blank cells.

    Args:
        record:  Source record.
        keys:    Candidate keys in priority order.
        default: Returned when no key yields a value.
    """
    for key in keys:
        value = record.get(key, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return default


def number_field(record: InventoryRecord, *keys: str) -> float:
    """``to_number`` over the first present of ``keys``."""
    return to_number(first_present(record, keys))


def string_field(record: InventoryRecord, *keys: str) -> str:
    """``to_string_safe`` over the first present of ``keys``."""
    return to_string_safe(first_present(record, keys))
