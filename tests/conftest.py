"""
Shared pytest fixtures for the Reorder Planner test suite.

Provides:
  - ``fixed_now``: a fixed UTC reference time so recency terms are stable.
  - ``make_xlsx``: factory that writes a one-sheet workbook with openpyxl.
  - ``scenario_records``: the two-record A/B example used across modules.
  - ``app_config``: an ``AppConfig`` whose output/log paths live in tmp_path.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest
from openpyxl import Workbook

from reorder_planner.config import AppConfig, DataConfig, LoggingConfig


@pytest.fixture
def fixed_now() -> datetime:
    """2025-06-01T00:00:00Z."""
    return datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory ``make_xlsx(header, rows, name="sales.xlsx") -> Path``.

    ``header`` is written as row 1 and each entry of ``rows`` as a following
    row.  Pass ``header=None`` for a sheet with no cells at all.
    """

    def _make(
        header: list[Any] | None,
        rows: list[list[Any]] | None = None,
        name: str = "sales.xlsx",
    ) -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = "Sales"
        if header is not None:
            ws.append(header)
        for row in rows or []:
            ws.append(row)
        path = tmp_path / name
        wb.save(path)
        return path

    return _make


@pytest.fixture
def scenario_records() -> list[dict[str, Any]]:
    """A scores 4.5 (no stock, SW=5); B scores -1.85 (QoH=2 penalty, SW=1)."""
    return [
        {"EAN": "A", "Cost": 10, "QoH": 0, "QoO": 0, "SW": 5},
        {"EAN": "B", "Cost": 8, "QoH": 2, "QoO": 0, "SW": 1},
    ]


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """AppConfig writing exports under tmp_path and logging to stdout only."""
    return AppConfig(
        data=DataConfig(
            input_dir=str(tmp_path / "input"),
            output_dir=str(tmp_path / "outputs"),
        ),
        logging=LoggingConfig(log_file=""),
    )
