"""
Reorder-priority scoring.

Modules
-------
fields  : total numeric/string coercion and ordered-fallback key lookup.
recency : " Qty. " date-prefix parsing + linear one-year recency score.
scorer  : SCORE_WEIGHTS / SCORE_PENALTIES / SCORE_BONUSES, ScoreComponents,
          score_components() and compute_score(): pure functions, no I/O.
"""
