"""
Recommendation scoring: converts an Item into six normalized criterion
scores and combines them with the user's weights.

Score formula (weighted sum, range 0–1)
---------------------------------------
    total = Σ effective_weight[k] * component[k]
    effective_weight[k] = weights[k] / (sum(weights) or 1)

Component explanations
----------------------
value (0–1):
    Price relative to the candidate set's own price spread.
    Cheapest candidate → 1, most expensive → 0.  The range is recomputed
    from the filtered set on every call, never fixed globally.

reliability, performance, camera, battery, safetyPrivacy (0–1):
    The 1–10 rating on a fixed absolute scale: 1 → 0, 10 → 1.

Zero-sum weights
----------------
A weight map that sums to 0 divides by 1 instead ("sum-or-one"): every
effective weight is 0 and every total is 0.0.  Ranking then falls back to
catalog order through the stable sort.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from phone_picker.models.item import RATING_MAX, RATING_MIN, Item
from phone_picker.models.preferences import WeightMap, validate_weights
from phone_picker.recommendations.normalize import norm_higher_better, norm_lower_better
from phone_picker.taxonomy.criteria import Criterion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreComponents:
    """Per-criterion normalized scores for one item, each in [0, 1]."""

    value:          float
    reliability:    float
    performance:    float
    camera:         float
    battery:        float
    safety_privacy: float

    def as_dict(self) -> dict[str, float]:
        """Components keyed by ``Criterion`` value."""
        return {
            Criterion.VALUE.value:          self.value,
            Criterion.RELIABILITY.value:    self.reliability,
            Criterion.PERFORMANCE.value:    self.performance,
            Criterion.CAMERA.value:         self.camera,
            Criterion.BATTERY.value:        self.battery,
            Criterion.SAFETY_PRIVACY.value: self.safety_privacy,
        }

    def weighted_total(self, effective_weights: dict[str, float]) -> float:
        """Combine components with already-normalized weights."""
        components = self.as_dict()
        return sum(
            effective_weights.get(key, 0.0) * score
            for key, score in components.items()
        )


def normalize_weights(weights: WeightMap) -> dict[str, float]:
    """Divide every weight by the total so the result sums to 1.

    Returns a dict in the input's key order.  When the total is 0 the
    divisor falls back to 1 and every effective weight is 0.

    Raises:
        ValueError: From ``validate_weights`` on unknown keys or negatives.
    """
    checked = validate_weights(weights)
    total = sum(checked.values())
    if total == 0:
        logger.warning("All criterion weights are zero; every score will be 0.0.")
    divisor = total or 1.0
    return {key: w / divisor for key, w in checked.items()}


def compute_components(item: Item, min_price: float, max_price: float) -> ScoreComponents:
    """Normalize one item's raw attributes.

    Args:
        item:      The catalog item.
        min_price: Cheapest price in the candidate set.
        max_price: Most expensive price in the candidate set.
    """
    return ScoreComponents(
        value=norm_lower_better(item.price_used_usd, min_price, max_price),
        reliability=norm_higher_better(item.reliability, RATING_MIN, RATING_MAX),
        performance=norm_higher_better(item.performance, RATING_MIN, RATING_MAX),
        camera=norm_higher_better(item.camera, RATING_MIN, RATING_MAX),
        battery=norm_higher_better(item.battery, RATING_MIN, RATING_MAX),
        safety_privacy=norm_higher_better(item.safety_privacy, RATING_MIN, RATING_MAX),
    )
