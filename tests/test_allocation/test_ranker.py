"""
Tests for reorder_planner/allocation/ranker.py.

What we test
------------
score_records():
  - One ScoredRecord per input, in input order, with its input index.
  - Source records are copied and exposed read-only.

sort_by_score():
  - Orders by composite_score descending.
  - Ties keep their input order (stable sort).

rank_records():
  - Customer-order records sit at score 0 between positive and negative rows.
"""

from __future__ import annotations

import pytest

from reorder_planner.allocation.ranker import rank_records, score_records, sort_by_score


class TestScoreRecords:
    def test_input_order_and_index(self, fixed_now, scenario_records):
        scored = score_records(scenario_records, now=fixed_now)
        assert [sr.record["EAN"] for sr in scored] == ["A", "B"]
        assert [sr.index for sr in scored] == [0, 1]
        assert scored[0].composite_score == pytest.approx(4.5)
        assert scored[1].composite_score == pytest.approx(-1.85)

    def test_source_record_not_mutated(self, fixed_now):
        source = {"EAN": "X", "SW": 1}
        scored = score_records([source], now=fixed_now)
        source["SW"] = 99
        assert scored[0].record["SW"] == 1

    def test_record_view_is_read_only(self, fixed_now):
        scored = score_records([{"EAN": "X"}], now=fixed_now)
        with pytest.raises(TypeError):
            scored[0].record["EAN"] = "Y"

    def test_empty_input(self, fixed_now):
        assert score_records([], now=fixed_now) == []


class TestSortByScore:
    def test_descending(self, fixed_now):
        records = [{"EAN": "low", "SW": 1}, {"EAN": "high", "SW": 5}, {"EAN": "mid", "SW": 3}]
        ranked = sort_by_score(score_records(records, now=fixed_now))
        assert [sr.record["EAN"] for sr in ranked] == ["high", "mid", "low"]

    def test_ties_keep_input_order(self, fixed_now):
        records = [
            {"EAN": "first", "SW": 2},
            {"EAN": "top", "SW": 4},
            {"EAN": "second", "SW": 2},
            {"EAN": "third", "SW": 2},
        ]
        ranked = rank_records(records, now=fixed_now)
        assert [sr.record["EAN"] for sr in ranked] == ["top", "first", "second", "third"]

    def test_scores_non_increasing(self, fixed_now):
        records = [{"SW": sw, "QoH": qoh} for sw, qoh in [(1, 2), (0, 0), (3, 1), (2, 5), (0, 1)]]
        scores = [sr.composite_score for sr in rank_records(records, now=fixed_now)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_customer_order_rows_rank_at_zero(fixed_now) -> None:
    records = [
        {"EAN": "neg", "QoH": 3},
        {"EAN": "cust", "C": "*", "SW": 20},
        {"EAN": "pos", "SW": 1},
    ]
    ranked = rank_records(records, now=fixed_now)
    assert [sr.record["EAN"] for sr in ranked] == ["pos", "cust", "neg"]
    assert ranked[1].composite_score == 0.0
