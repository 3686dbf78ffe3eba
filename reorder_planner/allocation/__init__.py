"""
Ranking and budget allocation.

Modules
-------
ranker    : ScoredRecord + score_records() / sort_by_score() / rank_records().
allocator : validate_budget() + allocate(): greedy single-pass partition
            into reorders and backlog.
"""
