"""
Spreadsheet reader for inventory/sales exports.

Reads the FIRST worksheet of an ``.xlsx`` workbook with ``openpyxl`` and
returns one dict per data row, keyed by the header row.

Conventions
-----------
  - Row 1 is the header; later rows are records.
  - Missing / empty cells are returned as ``""`` (never ``None``).
  - Fully blank rows are skipped.
  - Blank header cells become ``__EMPTY``, ``__EMPTY_1``, ...
  - Repeated header names get ``_1``, ``_2``, ... suffixes in column order.
  - Cell values keep their native type (int, float, str, datetime).

A workbook that opens but holds only a header row (or nothing) yields ``[]``;
deciding whether that is an error is the caller's job.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from reorder_planner.errors import ParseFailureError
from reorder_planner.scoring.fields import to_string_safe

logger = logging.getLogger(__name__)

EMPTY_HEADER = "__EMPTY"

_READ_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    KeyError,
    OSError,
    ValueError,
    EOFError,
)


def read_first_sheet(source: Path | str | bytes) -> list[dict[str, Any]]:
    """Read the first worksheet of an ``.xlsx`` workbook into row dicts.

    Args:
        source: Path to the workbook, or its raw bytes.

    Returns:
        List of ``{header: value}`` dicts, one per non-blank data row.

    Raises:
        ParseFailureError: If the file cannot be opened as a workbook or the
            workbook contains no worksheets.
    """
    if isinstance(source, (bytes, bytearray)):
        label = "<bytes>"
        handle: Any = io.BytesIO(source)
    else:
        label = str(source)
        handle = label

    try:
        workbook = load_workbook(handle, read_only=True, data_only=True)
    except _READ_ERRORS as exc:
        raise ParseFailureError(label, str(exc) or exc.__class__.__name__) from exc

    try:
        if not workbook.worksheets:
            raise ParseFailureError(label, "workbook contains no sheets")
        sheet = workbook.worksheets[0]
        records = _sheet_to_records(sheet.iter_rows(values_only=True))
    except _READ_ERRORS as exc:
        raise ParseFailureError(label, str(exc) or exc.__class__.__name__) from exc
    finally:
        workbook.close()

    logger.info(
        "Read %d row(s) from sheet '%s' of %s", len(records), sheet.title, label
    )
    return records


# ── Private helpers ────────────────────────────────────────────────────────────

def _sheet_to_records(rows) -> list[dict[str, Any]]:
    """Convert an iterator of row tuples (header first) into row dicts."""
    header = next(rows, None)
    if header is None:
        return []
    keys = _header_keys(header)

    records: list[dict[str, Any]] = []
    for row in rows:
        if _is_blank(row):
            continue
        records.append(
            {
                key: (row[i] if i < len(row) and row[i] is not None else "")
                for i, key in enumerate(keys)
            }
        )
    return records


def _header_keys(header: tuple) -> list[str]:
    """Build unique dict keys from the header row cells."""
    seen: dict[str, int] = {}
    keys: list[str] = []
    for cell in header:
        base = to_string_safe(cell) or EMPTY_HEADER
        count = seen.get(base, 0)
        keys.append(base if count == 0 else f"{base}_{count}")
        seen[base] = count + 1
    return keys


def _is_blank(row: tuple) -> bool:
    return all(cell is None or cell == "" for cell in row)
