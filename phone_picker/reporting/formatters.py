"""
ASCII terminal formatters for the ``recommend`` CLI command.

All formatters accept ranked results / explanations and return plain
multi-line strings suitable for ``typer.echo()``.

Display limits
--------------
``explain()`` returns complete bullet and trade-off lists.  Truncation to
``max_bullets`` / ``max_tradeoffs`` happens here and nowhere else.

Relaxation banner
-----------------
When the ranker had to relax filters, the report starts with a banner so the
reader knows the picks do not satisfy every constraint::

  [SIZE RELAXED] Too few phones matched your size preference; size ignored.
  [UNFILTERED]   Too few phones matched budget/OS; showing the full catalog.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from phone_picker.models.preferences import Constraints
from phone_picker.recommendations.explainer import Explanation
from phone_picker.recommendations.ranker import FilterStage, ScoredItem
from phone_picker.taxonomy.criteria import criterion_label

_STAGE_BANNERS: dict[FilterStage, str] = {
    FilterStage.SIZE_RELAXED: (
        "[SIZE RELAXED] Too few phones matched your size preference; size ignored."
    ),
    FilterStage.UNFILTERED: (
        "[UNFILTERED] Too few phones matched budget/OS; showing the full catalog."
    ),
}


def format_stage_banner(stage: FilterStage) -> str:
    """One-line relaxation notice; empty string for strict filtering."""
    return _STAGE_BANNERS.get(stage, "")


def format_constraints(constraints: Constraints, weights: Mapping[str, float]) -> str:
    """Summarize the request on two lines."""
    total = sum(weights.values())
    weight_str = ", ".join(
        f"{criterion_label(k)} {v:g}" for k, v in weights.items()
    )
    return (
        f"  Budget: ${constraints.budget_usd:,.0f}  |  OS: {constraints.os}  |  "
        f"Size: {constraints.max_size}\n"
        f"  Weights (total {total:g}): {weight_str}"
    )


def format_pick(
    rank:          int,
    scored:        ScoredItem,
    explanation:   Explanation,
    max_bullets:   int = 3,
    max_tradeoffs: int = 2,
) -> str:
    """Format one ranked pick with its truncated explanation::

        #1  Google Pixel 7 (Android)   score 0.812
            $280 used | 6.3"
            + Fits your budget target (about $280 used).
            - No major compromises for your stated preferences.
    """
    item = scored.item
    lines = [
        f"#{rank:<2} {item.name} ({item.os})   score {scored.score:.3f}",
        f"    ${item.price_used_usd:,.0f} used | {item.screen_in:g}\"",
    ]
    lines.extend(f"    + {b}" for b in explanation.bullets[:max_bullets])
    lines.extend(f"    - {t}" for t in explanation.tradeoffs[:max_tradeoffs])
    for link in item.links:
        lines.append(f"    > {link.label}: {link.url}")
    return "\n".join(lines)


def format_recommendations(
    picks:         Sequence[tuple[ScoredItem, Explanation]],
    constraints:   Constraints,
    weights:       Mapping[str, float],
    stage:         FilterStage,
    max_bullets:   int = 3,
    max_tradeoffs: int = 2,
) -> str:
    """Format the full recommendation report.

    Args:
        picks:         (ScoredItem, Explanation) pairs in rank order.
        constraints:   Request constraints (header).
        weights:       Request weights (header).
        stage:         Relaxation stage reported by ``filter_catalog()``.
        max_bullets:   Bullets shown per pick.
        max_tradeoffs: Trade-offs shown per pick.

    Returns:
        Multi-line string.
    """
    lines = ["Top picks", "=" * 60, format_constraints(constraints, weights)]
    banner = format_stage_banner(stage)
    if banner:
        lines.append(f"  {banner}")
    lines.append("-" * 60)

    if not picks:
        lines.append("  (no phones in the catalog)")
        return "\n".join(lines)

    blocks = [
        format_pick(i, scored, expl, max_bullets, max_tradeoffs)
        for i, (scored, expl) in enumerate(picks, start=1)
    ]
    lines.append("\n\n".join(blocks))
    return "\n".join(lines)
