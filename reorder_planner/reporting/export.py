"""
Delimited-text export of order files.

The order-file format is headerless two-column CSV, one ``ISBN,Quantity``
row per line, each line terminated by ``\\n``::

    9780000000002,1
    "ISBN, with comma",1

Fields containing a comma, quote, CR or LF are quoted with internal quotes
doubled.  An empty row list produces empty text (no header, no newline).

Files are named ``{prefix}_{YYYY-MM-DD}.csv`` and a same-day rerun overwrites
the previous file.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any

from reorder_planner.reporting.assembler import EXPORT_COLUMNS
from reorder_planner.utils.time_utils import date_suffix

_QUOTE_TRIGGERS = (",", '"', "\r", "\n")


def to_csv_text(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render ``{"ISBN", "Quantity"}`` rows as headerless CSV text.

    Missing or ``None`` values are written as empty fields; keys other than
    the two export columns are ignored.
    """
    return "".join(
        ",".join(_escape_field(row.get(col)) for col in EXPORT_COLUMNS) + "\n"
        for row in rows
    )


def _escape_field(value: Any) -> str:
    """Quote ``value`` if it holds a comma, quote, CR or LF; double inner quotes."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def export_filename(prefix: str, run_date: date | None = None) -> str:
    """Return ``{prefix}_{YYYY-MM-DD}.csv``."""
    return f"{prefix}_{date_suffix(run_date)}.csv"


def write_export_csv(
    rows: Sequence[Mapping[str, Any]],
    path: Path,
) -> Path:
    """Write ``rows`` to ``path`` as UTF-8 order-file CSV.

    Args:
        rows: ``{"ISBN", "Quantity"}`` row dicts.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv_text(rows), encoding="utf-8", newline="")
    return path
