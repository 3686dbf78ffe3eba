"""
Composite reorder-priority scoring for one inventory record.

Score formula (weighted sum, higher = reorder sooner)
------------------------------------------------------
    score = (
        -1.00 * on_hand            # QoH, clamped at 0
        -0.50 * on_order           # QoO, clamped at 0
        +0.05 * lifetime_sales     # Tot Sales
        +0.00 * sold_today         # ST (excluded)
        +0.90 * sold_this_week     # SW
        +0.60 * sold_this_month    # SM
        +0.02 * sold_this_year     # STY
        -0.75 if on_hand > 0
        -0.50 if on_order > 0
        +0.75 if Gard Disc > 40
        +0.05 * recency(Last Sale)
        +0.05 * recency(Last Delivery)
        +0.20 if Core == "Y"
        +0.20 if Bg == "P"
    )

Weights are tuned for typical ranges (QoH usually <= 3, weekly sales
usually < 5): recent sales dominate and any stock on hand or on order is
disfavoured.

Customer-order override
-----------------------
``C == "*"`` forces the final score to exactly 0.  Such records still take
part in sorting and allocation; they land below every positive-scoring
record and above any record with a negative score.

``compute_score`` is total: missing or non-numeric fields count as 0 and
missing strings as ``""``.  It never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from reorder_planner.scoring.fields import InventoryRecord, number_field, string_field
from reorder_planner.scoring.recency import parse_date_prefix, recency_score
from reorder_planner.utils.time_utils import utcnow

SCORE_WEIGHTS: dict[str, float] = {
    "qty_on_hand":     -1.0,
    "qty_on_order":    -0.5,
    "qty_sold":         0.05,
    "sold_today":       0.0,
    "sold_this_week":   0.9,
    "sold_this_month":  0.6,
    "sold_this_year":   0.02,
    "last_sale":        0.05,
    "last_delivery":    0.05,
    "core_stock":       0.2,
    "paperback":        0.2,
}

SCORE_PENALTIES: dict[str, float] = {
    "has_on_hand":  0.75,
    "has_on_order": 0.5,
}

SCORE_BONUSES: dict[str, float] = {
    "gard_disc_over_40": 0.75,
}

GARD_DISC_THRESHOLD = 40.0
CORE_STOCK_FLAG = "Y"
PAPERBACK_FLAG = "P"
CUSTOMER_ORDER_FLAG = "*"

# Source column for each velocity/stock weight.
_NUMERIC_COLUMNS: dict[str, str] = {
    "qty_on_hand":     "QoH",
    "qty_on_order":    "QoO",
    "qty_sold":        "Tot Sales",
    "sold_today":      "ST",
    "sold_this_week":  "SW",
    "sold_this_month": "SM",
    "sold_this_year":  "STY",
}


@dataclass(frozen=True)
class ScoreComponents:
    """Per-term breakdown of a composite score.

    Attributes:
        terms:          Ordered mapping of term name → signed contribution.
                        Penalties appear as negative values.
        customer_order: True when ``C == "*"``; forces ``total`` to 0.
    """

    terms:          dict[str, float] = field(default_factory=dict)
    customer_order: bool = False

    @property
    def total(self) -> float:
        """Sum of all terms in order, or exactly 0.0 under the customer-order override."""
        if self.customer_order:
            return 0.0
        score = 0.0
        for contribution in self.terms.values():
            score += contribution
        return score


def score_components(
    record: InventoryRecord,
    now: Optional[datetime] = None,
) -> ScoreComponents:
    """Compute every scoring term for ``record``.

    Args:
        record: Open-ended inventory record (header → cell value).
        now:    Reference time for recency. Defaults to the current UTC time.

    Returns:
        ScoreComponents whose ``total`` is the composite score.
    """
    if now is None:
        now = utcnow()

    values = {name: number_field(record, col) for name, col in _NUMERIC_COLUMNS.items()}
    values["qty_on_hand"] = max(0.0, values["qty_on_hand"])
    values["qty_on_order"] = max(0.0, values["qty_on_order"])
    gard_disc = number_field(record, "Gard Disc")

    terms: dict[str, float] = {
        name: SCORE_WEIGHTS[name] * value for name, value in values.items()
    }

    terms["has_on_hand_penalty"] = (
        -SCORE_PENALTIES["has_on_hand"] if values["qty_on_hand"] > 0 else 0.0
    )
    terms["has_on_order_penalty"] = (
        -SCORE_PENALTIES["has_on_order"] if values["qty_on_order"] > 0 else 0.0
    )
    terms["gard_disc_bonus"] = (
        SCORE_BONUSES["gard_disc_over_40"] if gard_disc > GARD_DISC_THRESHOLD else 0.0
    )

    last_sale = parse_date_prefix(record.get("Last Sale"))
    last_delivery = parse_date_prefix(record.get("Last Delivery"))
    terms["last_sale_recency"] = SCORE_WEIGHTS["last_sale"] * recency_score(now, last_sale)
    terms["last_delivery_recency"] = (
        SCORE_WEIGHTS["last_delivery"] * recency_score(now, last_delivery)
    )

    terms["core_stock"] = (
        SCORE_WEIGHTS["core_stock"]
        if string_field(record, "Core") == CORE_STOCK_FLAG else 0.0
    )
    terms["paperback"] = (
        SCORE_WEIGHTS["paperback"]
        if string_field(record, "Bg") == PAPERBACK_FLAG else 0.0
    )

    return ScoreComponents(
        terms=terms,
        customer_order=string_field(record, "C") == CUSTOMER_ORDER_FLAG,
    )


def compute_score(record: InventoryRecord, now: Optional[datetime] = None) -> float:
    """Return the composite reorder-priority score for ``record``."""
    return score_components(record, now=now).total
