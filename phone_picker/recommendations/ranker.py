"""
Recommendation ranker: filters the catalog by the user's hard constraints,
scores the survivors and returns them best-first.

Usage flow
----------
1. filter_catalog(catalog, constraints)
   -> FilterResult  (candidate items + which relaxation stage produced them)

2. rank(catalog, constraints, weights)
   -> list[ScoredItem]  (descending score; catalog order on ties)

   rank_candidates(filter_result, weights) does the scoring and sorting
   alone, for callers that also need the FilterResult stage.

3. top_n(ranked, n=3)
   -> list[ScoredItem]

Relaxation
----------
Hard filters are applied in order: budget (inclusive), OS, screen size.
When fewer than ``min_results`` items survive, the size filter is dropped
and budget + OS are re-applied to the full catalog.  When that still leaves
fewer than ``min_results``, every filter is dropped.  The order is fixed
regardless of which filter caused the shortfall.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from phone_picker.config import RankingConfig
from phone_picker.models.item import Item
from phone_picker.models.preferences import Constraints, WeightMap
from phone_picker.recommendations.normalize import clamp
from phone_picker.recommendations.scorer import (
    ScoreComponents,
    compute_components,
    normalize_weights,
)
from phone_picker.taxonomy.criteria import SizePreference

logger = logging.getLogger(__name__)


class FilterStage(StrEnum):
    """Which relaxation stage produced the candidate set."""

    STRICT = "strict"
    SIZE_RELAXED = "size_relaxed"
    UNFILTERED = "unfiltered"


@dataclass(frozen=True)
class FilterResult:
    """Candidate items after hard filtering and relaxation.

    Attributes:
        items: Surviving items in catalog order.
        stage: The relaxation stage that produced ``items``.
    """

    items: list[Item]
    stage: FilterStage


@dataclass(frozen=True)
class ScoredItem:
    """A catalog item coupled with its ranking score.

    Attributes:
        item:       The underlying catalog Item.
        score:      Weighted score in [0, 1].
        components: Per-criterion normalized scores.
    """

    item:       Item
    score:      float
    components: ScoreComponents


def screen_ceiling(max_size: SizePreference, settings: RankingConfig) -> Optional[float]:
    """Screen-size ceiling in inches for a size preference; None = no ceiling."""
    if max_size == SizePreference.SMALL:
        return settings.small_max_screen_in
    if max_size == SizePreference.MEDIUM:
        return settings.medium_max_screen_in
    return None


def _matches_budget_and_os(item: Item, constraints: Constraints) -> bool:
    if item.price_used_usd > constraints.budget_usd:
        return False
    return constraints.any_os or item.os == constraints.os


def filter_catalog(
    catalog:     Sequence[Item],
    constraints: Constraints,
    settings:    RankingConfig | None = None,
) -> FilterResult:
    """Apply hard filters with two-stage relaxation.

    Args:
        catalog:     Full catalog, in its canonical order.
        constraints: The user's hard constraints.
        settings:    Thresholds; defaults to ``RankingConfig()``.

    Returns:
        FilterResult with the candidate items and the stage used.
    """
    settings = settings or RankingConfig()

    base = [p for p in catalog if _matches_budget_and_os(p, constraints)]
    ceiling = screen_ceiling(constraints.max_size, settings)
    strict = base if ceiling is None else [p for p in base if p.screen_in <= ceiling]

    if len(strict) >= settings.min_results:
        return FilterResult(items=strict, stage=FilterStage.STRICT)

    logger.debug(
        "Strict filters left %d item(s) (< %d); dropping size filter.",
        len(strict), settings.min_results,
    )
    if len(base) >= settings.min_results:
        return FilterResult(items=base, stage=FilterStage.SIZE_RELAXED)

    logger.info(
        "Budget/OS filters left %d item(s) (< %d); ranking the full catalog.",
        len(base), settings.min_results,
    )
    return FilterResult(items=list(catalog), stage=FilterStage.UNFILTERED)


def score_items(items: Sequence[Item], weights: WeightMap) -> list[ScoredItem]:
    """Score candidate items without reordering them.

    The value component is normalized against the price range of ``items``
    itself, so the same phone can score differently under different filters.
    """
    effective = normalize_weights(weights)
    if not items:
        return []

    prices = [p.price_used_usd for p in items]
    min_price, max_price = min(prices), max(prices)

    scored: list[ScoredItem] = []
    for item in items:
        components = compute_components(item, min_price, max_price)
        total = clamp(components.weighted_total(effective), 0.0, 1.0)
        scored.append(ScoredItem(item=item, score=total, components=components))
    return scored


def rank(
    catalog:     Sequence[Item],
    constraints: Constraints,
    weights:     WeightMap,
    settings:    RankingConfig | None = None,
) -> list[ScoredItem]:
    """Filter, score and sort the catalog.

    Args:
        catalog:     Full catalog.  Never mutated.
        constraints: Hard constraints for this call.
        weights:     Criterion weights; any non-negative scale.
        settings:    Thresholds; defaults to ``RankingConfig()``.

    Returns:
        ScoredItem list, descending by score.  Equal scores keep catalog
        order.  An empty catalog returns an empty list.

    Raises:
        ValueError: If ``weights`` has unknown keys, or values that are
            negative or not finite.
    """
    return rank_candidates(filter_catalog(catalog, constraints, settings), weights)


def rank_candidates(result: FilterResult, weights: WeightMap) -> list[ScoredItem]:
    """Score and sort an already filtered candidate set.

    Raises:
        ValueError: If ``weights`` has unknown keys or invalid values.
    """
    scored = score_items(result.items, weights)
    # sorted() is stable: ties keep catalog order.
    ranked = sorted(scored, key=lambda s: -s.score)
    logger.debug("Ranked %d item(s) (stage=%s).", len(ranked), result.stage.value)
    return ranked


def top_n(ranked: Sequence[ScoredItem], n: int = 3) -> list[ScoredItem]:
    """Return the first ``n`` ranked items (all of them when fewer)."""
    if n <= 0:
        return []
    return list(ranked[:n])
