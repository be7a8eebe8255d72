"""
Tests for phone_picker/recommendations/scorer.py and normalize.py.

What we test
------------
normalize helpers:
  - clamp() bounds values.
  - norm_higher_better() maps lo -> 0, hi -> 1 and clamps outside the range.
  - norm_lower_better() is its mirror.
  - Degenerate range (hi == lo) returns 1 for both.

normalize_weights():
  - Effective weights sum to 1 for any positive total.
  - Key order is preserved.
  - Zero-sum map gives all zeros (sum-or-one) without raising.
  - Missing criteria are allowed; unknown or negative raise ValueError.

compute_components() / ScoreComponents:
  - Quality metrics use the fixed 1–10 scale.
  - Value uses the supplied price range.
  - weighted_total() follows the weighted-sum formula.
"""

from __future__ import annotations

import pytest

from phone_picker.models.item import Item
from phone_picker.recommendations.normalize import (
    clamp,
    norm_higher_better,
    norm_lower_better,
)
from phone_picker.recommendations.scorer import (
    ScoreComponents,
    compute_components,
    normalize_weights,
)


def _item(price: float = 300.0, **ratings: float) -> Item:
    base = dict(reliability=8, performance=8, camera=8, battery=8, safety_privacy=8)
    base.update(ratings)
    return Item(
        item_id="x", name="X", os="Android",
        price_used_usd=price, screen_in=6.1, **base,
    )


# ── normalize helpers ──────────────────────────────────────────────────────────

class TestNormalizeHelpers:
    def test_clamp(self):
        assert clamp(-0.5, 0.0, 1.0) == 0.0
        assert clamp(1.5, 0.0, 1.0) == 1.0
        assert clamp(0.3, 0.0, 1.0) == 0.3

    def test_higher_better_endpoints(self):
        assert norm_higher_better(1, 1, 10) == 0.0
        assert norm_higher_better(10, 1, 10) == 1.0
        assert norm_higher_better(5.5, 1, 10) == pytest.approx(0.5)

    def test_higher_better_clamps(self):
        assert norm_higher_better(0, 1, 10) == 0.0
        assert norm_higher_better(12, 1, 10) == 1.0

    def test_lower_better_mirrors(self):
        assert norm_lower_better(100, 100, 500) == 1.0
        assert norm_lower_better(500, 100, 500) == 0.0
        assert norm_lower_better(200, 100, 500) == pytest.approx(0.75)

    def test_degenerate_range_returns_one(self):
        assert norm_higher_better(7, 4, 4) == 1.0
        assert norm_lower_better(7, 4, 4) == 1.0


# ── normalize_weights ──────────────────────────────────────────────────────────

class TestNormalizeWeights:
    def test_sums_to_one(self, default_weights):
        effective = normalize_weights(default_weights)
        assert sum(effective.values()) == pytest.approx(1.0)
        assert effective["value"] == pytest.approx(0.20)
        assert effective["safetyPrivacy"] == pytest.approx(0.10)

    def test_arbitrary_scale(self):
        effective = normalize_weights({"camera": 3, "battery": 1})
        assert effective == pytest.approx({"camera": 0.75, "battery": 0.25})

    def test_preserves_key_order(self):
        weights = {"battery": 1, "value": 2, "camera": 3}
        assert list(normalize_weights(weights)) == ["battery", "value", "camera"]

    def test_zero_sum_gives_zeros(self):
        effective = normalize_weights({"value": 0, "camera": 0})
        assert effective == {"value": 0.0, "camera": 0.0}

    def test_zero_sum_logs_warning(self, caplog):
        with caplog.at_level("WARNING"):
            normalize_weights({"value": 0})
        assert "zero" in caplog.text

    def test_empty_map(self):
        assert normalize_weights({}) == {}

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            normalize_weights({"value": -5})

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError):
            normalize_weights({"price": 5})


# ── compute_components ─────────────────────────────────────────────────────────

class TestComputeComponents:
    def test_fixed_scale_for_quality_metrics(self):
        c = compute_components(
            _item(reliability=10, performance=1, camera=5.5, battery=10, safety_privacy=1),
            min_price=100, max_price=500,
        )
        assert c.reliability == 1.0
        assert c.performance == 0.0
        assert c.camera == pytest.approx(0.5)
        assert c.battery == 1.0
        assert c.safety_privacy == 0.0

    def test_value_uses_price_range(self):
        assert compute_components(_item(price=100), 100, 500).value == 1.0
        assert compute_components(_item(price=500), 100, 500).value == 0.0
        assert compute_components(_item(price=300), 100, 500).value == pytest.approx(0.5)

    def test_value_full_when_single_price(self):
        assert compute_components(_item(price=300), 300, 300).value == 1.0

    def test_as_dict_uses_criterion_keys(self):
        c = compute_components(_item(), 100, 500)
        assert list(c.as_dict()) == [
            "value", "reliability", "performance", "camera", "battery", "safetyPrivacy",
        ]


class TestWeightedTotal:
    def test_formula(self):
        c = ScoreComponents(
            value=1.0, reliability=0.5, performance=0.0,
            camera=1.0, battery=0.0, safety_privacy=0.5,
        )
        effective = {"value": 0.5, "reliability": 0.25, "safetyPrivacy": 0.25}
        assert c.weighted_total(effective) == pytest.approx(0.5 + 0.125 + 0.125)

    def test_missing_weights_count_as_zero(self):
        c = ScoreComponents(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)
        assert c.weighted_total({"camera": 0.4}) == pytest.approx(0.4)

    def test_all_ones_with_full_weights_is_one(self, default_weights):
        c = ScoreComponents(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)
        assert c.weighted_total(normalize_weights(default_weights)) == pytest.approx(1.0)
