"""
Shared pytest fixtures for the Phone Picker test suite.

Provides:
  - ``default_weights``: the default criterion weights, in canonical order.
  - ``sample_catalog``: a five-phone catalog spanning both OS families,
    all sizes and a price exactly at the default budget.
  - ``any_constraints``: budget 600, no OS or size preference.
"""

from __future__ import annotations

import pytest

from phone_picker.models.item import Item, PurchaseLink
from phone_picker.models.preferences import Constraints


# ── Weights and constraints ───────────────────────────────────────────────────

@pytest.fixture
def default_weights() -> dict[str, float]:
    """Default weights (sum 100)."""
    return {
        "value":         20,
        "reliability":   20,
        "performance":   20,
        "camera":        15,
        "battery":       15,
        "safetyPrivacy": 10,
    }


@pytest.fixture
def any_constraints() -> Constraints:
    """Budget 600, any OS, any size."""
    return Constraints(budget_usd=600)


# ── Catalog ───────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_catalog() -> list[Item]:
    """Five phones; ``flagship`` is priced exactly at the 600 budget."""
    return [
        Item(
            item_id="compact", name="Compact Phone", os="iOS",
            price_used_usd=250, screen_in=5.4,
            reliability=8, performance=7, camera=7, battery=5, safety_privacy=9,
            links=(PurchaseLink(label="Shop", url="https://example.com/compact"),),
        ),
        Item(
            item_id="midrange", name="Midrange Phone", os="Android",
            price_used_usd=200, screen_in=6.4,
            reliability=7, performance=6, camera=7, battery=8, safety_privacy=7,
        ),
        Item(
            item_id="flagship", name="Flagship Phone", os="Android",
            price_used_usd=600, screen_in=6.8,
            reliability=9, performance=10, camera=10, battery=9, safety_privacy=8,
        ),
        Item(
            item_id="standard", name="Standard Phone", os="iOS",
            price_used_usd=400, screen_in=6.1,
            reliability=9, performance=8, camera=8, battery=7, safety_privacy=9,
        ),
        Item(
            item_id="budget", name="Budget Phone", os="Android",
            price_used_usd=150, screen_in=6.5,
            reliability=6, performance=5, camera=5, battery=8, safety_privacy=5,
        ),
    ]
