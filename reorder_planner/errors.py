"""
User-facing error kinds for a reorder run.

Every error here is recoverable at the caller boundary: the CLI prints the
message and exits non-zero, and the user reruns with a different file or
budget.  Scoring and allocation never raise for malformed record data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ReorderPlannerError(Exception):
    """Base class for all reorder run errors."""


class InputMissingError(ReorderPlannerError):
    """Raised when no input file was supplied or the path does not exist.

    Attributes:
        path: The path that was requested, or ``None`` if none was given.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = path
        if path is None:
            message = "No input file supplied. Upload an XLSX file first."
        else:
            message = f"Input file not found: {path}"
        super().__init__(message)


class InvalidBudgetError(ReorderPlannerError, ValueError):
    """Raised when the budget is not a finite, non-negative number.

    Attributes:
        budget: The rejected value, as supplied.
    """

    def __init__(self, budget: Any) -> None:
        self.budget = budget
        super().__init__(
            f"Budget must be a non-negative number, got {budget!r}."
        )


class ParseFailureError(ReorderPlannerError):
    """Raised when the tabular-file reader cannot extract rows.

    Attributes:
        source: Description of the file that failed (path or ``"<bytes>"``).
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read spreadsheet {source}: {reason}")


class EmptyInputError(ReorderPlannerError):
    """Raised when the reader succeeded but produced zero rows."""

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"No rows found in the first sheet{where}.")
