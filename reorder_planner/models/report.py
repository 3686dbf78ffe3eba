"""
Report and allocation output models.

``ReportLine`` is the fixed-shape projection of one inventory record used for
display and export.  ``AllocationResult`` is the outcome of one budget run:
the admitted reorders, the overflow backlog, and their running cost totals.

Both models are frozen: a run's result is built once and then only read.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReportLine(BaseModel):
    """One display/export row.

    Attributes:
        isbn:            EAN/ISBN identifier (empty string when absent).
        title:           Title text (empty string when absent).
        unit_cost:       Unit cost; 0.0 for non-numeric cost data.
        on_hand:         Quantity on hand as provided (not clamped).
        on_order:        Quantity on order as provided (not clamped).
        sold_this_week:  Units sold this week.
        sold_this_month: Units sold this month.
        composite_score: Reorder-priority score (may be negative).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    isbn:            str = Field(default="", alias="ISBN")
    title:           str = Field(default="", alias="Title")
    unit_cost:       float = Field(default=0.0, alias="Unit Cost")
    on_hand:         float = Field(default=0.0, alias="On Hand")
    on_order:        float = Field(default=0.0, alias="On Order")
    sold_this_week:  float = Field(default=0.0, alias="Sold This Week")
    sold_this_month: float = Field(default=0.0, alias="Sold This Month")
    composite_score: float = Field(default=0.0, alias="Composite Score")


class AllocationResult(BaseModel):
    """Budget partition of one run.

    Attributes:
        reorders:         Admitted lines, in priority order.
        backlog:          Lines that did not fit the budget, in priority order.
        total_cost:       Sum of ``unit_cost`` over ``reorders``.
        backlog_cost:     Sum of ``unit_cost`` over ``backlog``.
        lines_to_reorder: Number of admitted lines.
    """

    model_config = ConfigDict(frozen=True)

    reorders:         list[ReportLine] = Field(default_factory=list)
    backlog:          list[ReportLine] = Field(default_factory=list)
    total_cost:       float = 0.0
    backlog_cost:     float = 0.0
    lines_to_reorder: int = 0

    @model_validator(mode="after")
    def validate_counts(self) -> "AllocationResult":
        if self.lines_to_reorder != len(self.reorders):
            raise ValueError(
                f"lines_to_reorder ({self.lines_to_reorder}) must equal "
                f"len(reorders) ({len(self.reorders)})."
            )
        return self

    @property
    def backlog_lines(self) -> int:
        return len(self.backlog)

    @property
    def total_lines(self) -> int:
        return len(self.reorders) + len(self.backlog)
