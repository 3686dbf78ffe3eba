"""
Report assembly: shapes scored records into display/export rows and totals.

ISBN lookup order: ``EAN`` → ``ean`` → ``ISBN`` → ``Isbn`` → ``""``.
Title lookup order: ``Title`` → ``TITLE`` → ``""``.

Quantities are shown as provided (a negative QoH stays negative here even
though the scorer clamps it to 0).
"""

from __future__ import annotations

from collections.abc import Iterable

from reorder_planner.allocation.ranker import ScoredRecord
from reorder_planner.models.report import AllocationResult, ReportLine
from reorder_planner.scoring.fields import number_field, string_field, to_number

ISBN_KEYS: tuple[str, ...] = ("EAN", "ean", "ISBN", "Isbn")
TITLE_KEYS: tuple[str, ...] = ("Title", "TITLE")

EXPORT_COLUMNS: tuple[str, str] = ("ISBN", "Quantity")


def build_report_line(scored: ScoredRecord) -> ReportLine:
    """Project one scored record onto the fixed ReportLine shape."""
    record = scored.record
    return ReportLine(
        isbn=string_field(record, *ISBN_KEYS),
        title=string_field(record, *TITLE_KEYS),
        unit_cost=to_number(record.get("Cost")),
        on_hand=number_field(record, "QoH", "OnHand"),
        on_order=number_field(record, "QoO", "OnOrder"),
        sold_this_week=number_field(record, "SW", "SoldThisWeek"),
        sold_this_month=number_field(record, "SM", "SoldThisMonth"),
        composite_score=scored.composite_score,
    )


def to_export_rows(
    lines: Iterable[ReportLine],
    quantity: int = 1,
) -> list[dict[str, object]]:
    """Return ``{"ISBN", "Quantity"}`` rows for the order-file export."""
    return [{"ISBN": line.isbn, "Quantity": quantity} for line in lines]


def summarize(result: AllocationResult) -> dict[str, float | int]:
    """Summary totals for display, costs rounded to 2 dp.

    Keys: ``lines_to_reorder``, ``total_cost``, ``backlog_lines``,
    ``backlog_cost``, ``total_lines``.
    """
    return {
        "lines_to_reorder": result.lines_to_reorder,
        "total_cost":       round(result.total_cost, 2),
        "backlog_lines":    result.backlog_lines,
        "backlog_cost":     round(result.backlog_cost, 2),
        "total_lines":      result.total_lines,
    }
