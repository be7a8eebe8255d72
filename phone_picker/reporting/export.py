"""
Recommendation export: JSON and CSV files for the top picks.

All functions write to disk and return the written ``Path``.  Parent
directories are created when missing.

The JSON file nests full explanations; the CSV is flat (one row per pick,
bullets and trade-offs joined with `` | ``) so it opens directly in a
spreadsheet.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path

from phone_picker.models.preferences import Constraints
from phone_picker.recommendations.explainer import Explanation
from phone_picker.recommendations.ranker import FilterStage, ScoredItem

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"

CSV_FIELDNAMES = [
    "rank", "item_id", "name", "os", "price_used_usd", "screen_in",
    "score", "bullets", "tradeoffs",
]


def build_recommendation_records(
    picks: Sequence[tuple[ScoredItem, Explanation]],
) -> list[dict]:
    """One dict per pick, in rank order, with components and explanation."""
    records: list[dict] = []
    for rank, (scored, expl) in enumerate(picks, start=1):
        item = scored.item
        records.append(
            {
                "rank":           rank,
                "item_id":        item.item_id,
                "name":           item.name,
                "os":             item.os.value,
                "price_used_usd": item.price_used_usd,
                "screen_in":      item.screen_in,
                "score":          round(scored.score, 4),
                "components":     {
                    k: round(v, 4) for k, v in scored.components.as_dict().items()
                },
                "bullets":        list(expl.bullets),
                "tradeoffs":      list(expl.tradeoffs),
                "links":          [link.model_dump() for link in item.links],
            }
        )
    return records


def write_recommendations_json(
    picks:       Sequence[tuple[ScoredItem, Explanation]],
    constraints: Constraints,
    weights:     Mapping[str, float],
    stage:       FilterStage,
    output_dir:  Path,
    run_date:    date | None = None,
) -> Path:
    """Write the picks plus the request that produced them to JSON.

    Returns:
        Path to ``recommendations_{date}.json``.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{run_date}.json"

    payload = {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   run_date.isoformat(),
        "constraints":    constraints.model_dump(mode="json"),
        "weights":        dict(weights),
        "filter_stage":   stage.value,
        "picks":          build_recommendation_records(picks),
    }
    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Recommendation JSON written: %s (%d picks)", json_path, len(picks))
    return json_path


def write_recommendations_csv(
    picks:      Sequence[tuple[ScoredItem, Explanation]],
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write the picks as a flat CSV.

    Returns:
        Path to ``recommendations_{date}.csv``.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{run_date}.csv"

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDNAMES, extrasaction="ignore")
        writer.writeheader()
        for rec in build_recommendation_records(picks):
            rec["bullets"] = " | ".join(rec["bullets"])
            rec["tradeoffs"] = " | ".join(rec["tradeoffs"])
            writer.writerow(rec)

    logger.info("Recommendation CSV written: %s", csv_path)
    return csv_path
