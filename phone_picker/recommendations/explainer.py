"""
Rule-based explanations for a single ranked item.

``explain()`` sees only the one scored item plus the caller's constraints
and weights.  It does not re-run the ranker, so the budget-fit bullet is
stated rather than re-verified (a fully relaxed ranking can surface items
above budget; the "near budget ceiling" trade-off still fires for those).

Bullets (fixed order)
---------------------
    1. Budget fit, naming the used price.               always
    2. OS match, naming the OS.                          os != "Any"
    3. Strongest prioritized criteria (top 1–2 weights). always

Trade-offs (fixed order)
------------------------
    1. screen_in > large_screen_in          one-handed-use caveat
    2. price > near_budget_ratio * budget   near budget ceiling
    3. reliability <= midrange_reliability  mid-range reliability
    4. none of the above                    "no major compromises"
"""

from __future__ import annotations

from dataclasses import dataclass, field

from phone_picker.config import ExplainConfig
from phone_picker.models.preferences import Constraints, WeightMap, validate_weights
from phone_picker.recommendations.ranker import ScoredItem
from phone_picker.taxonomy.criteria import Criterion, criterion_label

NO_COMPROMISES = "No major compromises for your stated preferences."


@dataclass(frozen=True)
class Explanation:
    """Justifications and caveats for one recommendation.

    Both lists are complete; display truncation is up to the caller.
    ``tradeoffs`` is never empty.
    """

    bullets:   list[str] = field(default_factory=list)
    tradeoffs: list[str] = field(default_factory=list)


def top_factors(weights: WeightMap, count: int = 2) -> list[str]:
    """Criterion keys with the highest weights, best first.

    Ties keep the weight map's own key order (stable sort).  Criteria
    missing from the map count as weight 0 and follow the given keys in
    ``Criterion`` order, so even an empty map yields ``count`` keys.
    """
    checked = validate_weights(weights)
    for criterion in Criterion:
        checked.setdefault(criterion.value, 0.0)
    ordered = sorted(checked.items(), key=lambda kv: -kv[1])
    return [key for key, _ in ordered[:count]]


def build_bullets(
    scored:      ScoredItem,
    constraints: Constraints,
    weights:     WeightMap,
    settings:    ExplainConfig,
) -> list[str]:
    item = scored.item
    bullets = [f"Fits your budget target (about ${item.price_used_usd:,.0f} used)."]

    if not constraints.any_os:
        bullets.append(f"Matches your OS preference: {constraints.os}.")

    labels = [criterion_label(k) for k in top_factors(weights, settings.top_factor_count)]
    if labels:
        bullets.append(f"Strong on what you prioritize most: {_join_labels(labels)}.")
    return bullets


def build_tradeoffs(
    scored:      ScoredItem,
    constraints: Constraints,
    settings:    ExplainConfig,
) -> list[str]:
    item = scored.item
    tradeoffs: list[str] = []

    if item.screen_in > settings.large_screen_in:
        tradeoffs.append("Large phone, might be less comfortable one-handed.")
    if item.price_used_usd > constraints.budget_usd * settings.near_budget_ratio:
        tradeoffs.append("Near your budget ceiling.")
    if item.reliability <= settings.midrange_reliability_max:
        tradeoffs.append("Reliability score is only mid-range (check warranty/condition).")

    return tradeoffs or [NO_COMPROMISES]


def explain(
    scored:      ScoredItem,
    constraints: Constraints,
    weights:     WeightMap,
    settings:    ExplainConfig | None = None,
) -> Explanation:
    """Build the explanation for one ranked item.

    Args:
        scored:      A ScoredItem returned by ``rank()``.
        constraints: The same constraints passed to ``rank()``.
        weights:     The same weights passed to ``rank()``.
        settings:    Thresholds; defaults to ``ExplainConfig()``.

    Returns:
        Explanation with non-empty ``bullets`` and ``tradeoffs``.
    """
    settings = settings or ExplainConfig()
    return Explanation(
        bullets=build_bullets(scored, constraints, weights, settings),
        tradeoffs=build_tradeoffs(scored, constraints, settings),
    )


def _join_labels(labels: list[str]) -> str:
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + f" and {labels[-1]}"
