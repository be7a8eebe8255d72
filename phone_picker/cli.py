"""
Phone Picker — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (rank + explain, config check, catalog check).
  5. Report result to stdout.

Install and run::

    pip install -e .
    phone-picker --help
    phone-picker recommend --budget 600 --os Android --size Medium
    phone-picker recommend --budget 450 --weight camera=40 --weight value=10
    phone-picker validate-config
    phone-picker validate-catalog --file data/phones.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="phone-picker",
    help="Phone Picker — rank used phones against your budget and priorities.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from phone_picker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from phone_picker.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(path: Path):
    """Load the catalog, printing a friendly error and exiting on failure."""
    from phone_picker.catalog.loader import CatalogError, load_catalog

    try:
        return load_catalog(path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except CatalogError as exc:
        typer.echo(f"[ERROR] Catalog invalid:\n{exc}", err=True)
        raise typer.Exit(code=1)


def parse_weight_overrides(
    defaults:  dict[str, float],
    overrides: list[str],
) -> dict[str, float]:
    """Apply ``criterion=weight`` overrides on top of the default weights.

    Overridden criteria keep their position in the default key order;
    criteria absent from the defaults are appended.

    Raises:
        ValueError: On malformed entries or non-numeric weights.
    """
    weights = dict(defaults)
    for entry in overrides:
        key, sep, raw = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid weight '{entry}'. Expected criterion=number.")
        try:
            weights[key] = float(raw)
        except ValueError:
            raise ValueError(f"Weight for '{key}' must be a number, got '{raw}'.")
    return weights


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    budget: float = typer.Option(
        ...,
        "--budget",
        "-b",
        help="Maximum used price in USD (inclusive).",
    ),
    os_pref: str = typer.Option(
        "Any",
        "--os",
        help="OS preference: Any, iOS or Android.",
    ),
    size: str = typer.Option(
        "Any",
        "--size",
        help="Max size preference: Any, Small, Medium or Large.",
    ),
    weight: Optional[list[str]] = typer.Option(
        None,
        "--weight",
        "-w",
        help="Override one criterion weight, e.g. camera=30. Repeatable.",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Number of picks to show (default: config display.top_n).",
    ),
    catalog_file: Optional[str] = typer.Option(
        None,
        "--catalog",
        help="Catalog file (.json or .csv). Defaults to config catalog.path.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Also write recommendations JSON + CSV to this directory.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank the catalog and explain the top picks.

    Filters by budget, OS and size.  When fewer than three phones match,
    the size filter is dropped first, then every filter.
    """
    from pydantic import ValidationError

    from phone_picker.models.preferences import Constraints, validate_weights
    from phone_picker.recommendations.explainer import explain
    from phone_picker.recommendations.ranker import filter_catalog, rank_candidates, top_n
    from phone_picker.reporting.export import (
        write_recommendations_csv,
        write_recommendations_json,
    )
    from phone_picker.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        constraints = Constraints(budget_usd=budget, os=os_pref, max_size=size)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid constraints: {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        weights = validate_weights(
            parse_weight_overrides(config.weights.defaults, weight or [])
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    catalog_path = Path(catalog_file) if catalog_file else Path(config.catalog.path)
    catalog = _load_catalog_or_exit(catalog_path)

    n = top if top is not None else config.display.top_n
    candidates = filter_catalog(catalog, constraints, config.ranking)
    stage = candidates.stage
    ranked = rank_candidates(candidates, weights)
    picks = [
        (scored, explain(scored, constraints, weights, config.explain))
        for scored in top_n(ranked, n)
    ]

    typer.echo(
        format_recommendations(
            picks,
            constraints,
            weights,
            stage,
            max_bullets=config.display.max_bullets,
            max_tradeoffs=config.display.max_tradeoffs,
        )
    )

    if output_dir:
        out = Path(output_dir)
        json_path = write_recommendations_json(picks, constraints, weights, stage, out)
        csv_path = write_recommendations_csv(picks, out)
        typer.echo("")
        typer.echo(f"  JSON: {json_path}")
        typer.echo(f"  CSV:  {csv_path}")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog path:     {config.catalog.path}")
    typer.echo(f"  Min results:      {config.ranking.min_results}")
    typer.echo(
        f"  Size ceilings:    Small <= {config.ranking.small_max_screen_in:g}\", "
        f"Medium <= {config.ranking.medium_max_screen_in:g}\""
    )
    weights_str = ", ".join(f"{k}={v:g}" for k, v in config.weights.defaults.items())
    typer.echo(f"  Default weights:  {weights_str}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-catalog")
def validate_catalog(
    catalog_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Catalog file (.json or .csv). Defaults to config catalog.path.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Validate a catalog file and list its items.

    Exits with code 1 if any item fails validation.
    """
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog_path = Path(catalog_file) if catalog_file else Path(config.catalog.path)
    typer.echo(f"Loading catalog from: {catalog_path}")
    catalog = _load_catalog_or_exit(catalog_path)

    typer.echo(f"  Validated {len(catalog)} item(s).")
    for item in catalog:
        typer.echo(
            f"  {item.item_id} | {item.os} | ${item.price_used_usd:,.0f} | "
            f"{item.screen_in:g}\""
        )
    typer.echo("[OK] Catalog valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
