"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept in-memory results and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Backlog rows are listed after the reorders in the same table and marked with
a ``~`` in the first column, so the cut-off point of the budget is visible
at a glance::

        ISBN            Title                       Cost   OnHand  ...
      ---------------------------------------------------------------
        9780000000002   Some Title                 10.00        0  ...
      ~ 9780000000019   Another Title               8.00        2  ...
"""

from __future__ import annotations

from collections.abc import Sequence

from reorder_planner.allocation.ranker import ScoredRecord
from reorder_planner.models.report import AllocationResult, ReportLine
from reorder_planner.reporting.assembler import build_report_line

BACKLOG_MARK = "~"
_TITLE_WIDTH = 32


# ── Summary ───────────────────────────────────────────────────────────────────


def format_summary(summary: dict[str, float | int], budget: float) -> str:
    """Format the output of ``assembler.summarize()`` as a short block."""
    lines = [
        "",
        "=== Reorder Summary ===",
        f"  Budget:             {budget:.2f}",
        f"  Lines to reorder:   {summary['lines_to_reorder']}",
        f"  Total reorder cost: {summary['total_cost']:.2f}",
        f"  Backlog lines:      {summary['backlog_lines']}",
        f"  Backlog cost:       {summary['backlog_cost']:.2f}",
    ]
    return "\n".join(lines)


# ── Result table ──────────────────────────────────────────────────────────────


def format_report_table(result: AllocationResult, limit: int | None = None) -> str:
    """Format reorders followed by backlog as one ASCII table.

    Args:
        result: AllocationResult from ``process()``.
        limit:  Max rows to show in total; ``None`` shows every row.

    Returns:
        Multi-line string.
    """
    rows: list[tuple[str, ReportLine]] = [(" ", line) for line in result.reorders]
    rows += [(BACKLOG_MARK, line) for line in result.backlog]

    lines: list[str] = ["", "=== Recommended Reorders ==="]
    if not rows:
        lines.append("  (no rows)")
        return "\n".join(lines)

    header = (
        f"  {' ':1} {'ISBN':<15}  {'Title':<{_TITLE_WIDTH}}  {'Cost':>8}  "
        f"{'OnHand':>6}  {'OnOrder':>7}  {'SW':>4}  {'SM':>4}  {'Score':>7}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    shown = rows if limit is None else rows[:limit]
    for mark, line in shown:
        lines.append(
            f"  {mark:1} {line.isbn[:15]:<15}  {line.title[:_TITLE_WIDTH]:<{_TITLE_WIDTH}}  "
            f"{line.unit_cost:>8.2f}  {_fmt_qty(line.on_hand):>6}  "
            f"{_fmt_qty(line.on_order):>7}  {_fmt_qty(line.sold_this_week):>4}  "
            f"{_fmt_qty(line.sold_this_month):>4}  {line.composite_score:>7.2f}"
        )

    if limit is not None and len(rows) > limit:
        lines.append(f"  ... and {len(rows) - limit} more row(s).")
    if result.backlog:
        lines.append(f"  ({BACKLOG_MARK} = backlog, over budget)")
    return "\n".join(lines)


# ── Score breakdown ───────────────────────────────────────────────────────────


def format_score_breakdown(ranked: Sequence[ScoredRecord], top: int = 10) -> str:
    """Format the per-term score breakdown for the top ``top`` ranked records.

    Only non-zero terms are listed; a customer-order override is called out
    explicitly since it hides every other term.
    """
    lines: list[str] = ["", f"=== Score Breakdown (top {min(top, len(ranked))}) ==="]
    if not ranked:
        lines.append("  (no rows)")
        return "\n".join(lines)

    for rank, scored in enumerate(ranked[:top], start=1):
        line = build_report_line(scored)
        lines.append("")
        lines.append(
            f"  {rank:>3}. {line.isbn or '(no ISBN)'}  {line.title[:_TITLE_WIDTH]}"
            f"  score={scored.composite_score:.2f}"
        )
        if scored.components.customer_order:
            lines.append("       customer order outstanding (C = *): score forced to 0")
            continue
        terms = [(k, v) for k, v in scored.components.terms.items() if v != 0.0]
        if not terms:
            lines.append("       (no contributing terms)")
        for name, value in terms:
            lines.append(f"       {name:<24} {value:+8.3f}")

    return "\n".join(lines)


# ── Helpers ───────────────────────────────────────────────────────────────────


def _fmt_qty(value: float) -> str:
    """Render whole quantities without a decimal point."""
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"
