"""
Greedy budget allocation over priority-sorted records.

One pass, one irrevocable decision per record, in the order given:

    if total_cost + unit_cost <= budget:  admit to reorders
    else:                                 push to backlog

There is no backtracking and no look-ahead for cheaper records that would
still fit.  The result is only as good as the ordering supplied by the
ranker; as a bin-packing solution it is knowingly suboptimal.

Unit costs that are missing or non-numeric count as 0, so bad cost data never
rejects a record and never consumes budget.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from reorder_planner.allocation.ranker import ScoredRecord
from reorder_planner.errors import InvalidBudgetError
from reorder_planner.models.report import AllocationResult, ReportLine
from reorder_planner.reporting.assembler import build_report_line

logger = logging.getLogger(__name__)


def validate_budget(budget: Any) -> float:
    """Return ``budget`` as a float, or raise if it is not usable.

    A usable budget is a real number (not a bool), finite, and >= 0.

    Raises:
        InvalidBudgetError: For ``None``, non-numbers, NaN, ±inf or negatives.
    """
    if isinstance(budget, bool) or not isinstance(budget, (int, float, Decimal)):
        raise InvalidBudgetError(budget)
    value = float(budget)
    if not math.isfinite(value) or value < 0:
        raise InvalidBudgetError(budget)
    return value


def allocate(
    sorted_scored_records: Iterable[ScoredRecord],
    budget: float,
) -> AllocationResult:
    """Partition records into reorders and backlog under ``budget``.

    Args:
        sorted_scored_records: Records already sorted by descending score.
        budget:                Maximum total unit cost for the reorders.

    Returns:
        AllocationResult with both partitions in input order.

    Raises:
        InvalidBudgetError: If ``budget`` is missing, NaN, infinite or negative.
    """
    limit = validate_budget(budget)

    reorders: list[ReportLine] = []
    backlog: list[ReportLine] = []
    total_cost = 0.0
    backlog_cost = 0.0

    for scored in sorted_scored_records:
        line = build_report_line(scored)
        unit_cost = line.unit_cost

        if total_cost + unit_cost <= limit:
            reorders.append(line)
            total_cost += unit_cost
        else:
            backlog.append(line)
            backlog_cost += unit_cost

    logger.debug(
        "Allocated %d reorder(s) (cost %.2f) and %d backlog line(s) (cost %.2f) "
        "under budget %.2f",
        len(reorders), total_cost, len(backlog), backlog_cost, limit,
    )

    return AllocationResult(
        reorders=reorders,
        backlog=backlog,
        total_cost=total_cost,
        backlog_cost=backlog_cost,
        lines_to_reorder=len(reorders),
    )
