"""
Recommendation engine: ranks catalog items against user constraints and
weights, and explains each pick in plain language.

Modules
-------
normalize : clamp() + min-max helpers — pure functions.
scorer    : ScoreComponents + normalize_weights() + compute_components().
ranker    : ScoredItem + filter_catalog() + rank() + rank_candidates() + top_n().
explainer : Explanation + explain() — rule-based bullets and trade-offs.
"""

from phone_picker.recommendations.explainer import Explanation, explain
from phone_picker.recommendations.ranker import ScoredItem, rank

__all__ = ["Explanation", "ScoredItem", "explain", "rank"]
