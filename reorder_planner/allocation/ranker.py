"""
Reorder ranker: attaches composite scores to raw records and orders them.

Usage flow
----------
1. score_records(records, now)
   -> list[ScoredRecord]  (input order, one per record)

2. sort_by_score(scored)
   -> list[ScoredRecord]  (score descending; ties keep input order)

``rank_records`` does both.  The budget allocator requires this ordering and
never re-sorts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from reorder_planner.scoring.fields import InventoryRecord
from reorder_planner.scoring.scorer import ScoreComponents, score_components
from reorder_planner.utils.time_utils import utcnow


@dataclass(frozen=True)
class ScoredRecord:
    """An inventory record paired with its composite score.

    Attributes:
        record:          Read-only view of a copy of the source record.
        composite_score: Reorder-priority score (may be negative).
        components:      Per-term breakdown behind ``composite_score``.
        index:           Position of the record in the input sequence.
    """

    record:          Mapping[str, Any]
    composite_score: float
    components:      ScoreComponents
    index:           int


def score_records(
    records: Iterable[InventoryRecord],
    now:     Optional[datetime] = None,
) -> list[ScoredRecord]:
    """Score every record against a single reference time.

    Source records are copied, so callers' mappings are never mutated.

    Args:
        records: Raw inventory records.
        now:     Reference time for recency terms. Defaults to current UTC.

    Returns:
        One ScoredRecord per input record, in input order.
    """
    if now is None:
        now = utcnow()

    scored: list[ScoredRecord] = []
    for i, record in enumerate(records):
        components = score_components(record, now=now)
        scored.append(
            ScoredRecord(
                record=MappingProxyType(dict(record)),
                composite_score=components.total,
                components=components,
                index=i,
            )
        )
    return scored


def sort_by_score(scored: Iterable[ScoredRecord]) -> list[ScoredRecord]:
    """Return ``scored`` ordered by composite score, highest first.

    The sort is stable: records with equal scores keep their input order.
    """
    return sorted(scored, key=lambda sr: sr.composite_score, reverse=True)


def rank_records(
    records: Iterable[InventoryRecord],
    now:     Optional[datetime] = None,
) -> list[ScoredRecord]:
    """Score and sort ``records`` in one step."""
    return sort_by_score(score_records(records, now=now))
