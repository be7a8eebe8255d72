"""
Catalog loader: JSON or CSV → validated ``Item`` list.

JSON format
-----------
An array of item objects using the catalog's camelCase keys::

    [
      {
        "id": "pixel-7", "name": "Google Pixel 7", "os": "Android",
        "priceUsedUSD": 280, "screenIn": 6.3,
        "reliability": 8, "performance": 8, "camera": 9,
        "battery": 7, "safetyPrivacy": 9,
        "links": [{"label": "Swappa", "url": "https://swappa.com/..."}]
      }
    ]

Entries without an ``id`` key (e.g. ``{"_comment": "..."}``) are skipped.

CSV format
----------
Header row with the same keys as the JSON objects.  ``links`` is optional;
each link is ``label|url`` and multiple links are separated by ``;``.

Validation rules
----------------
- Every row must validate as an ``Item`` (positive finite price/screen,
  1–10 ratings, known OS, well-formed links).
- Duplicate ids are rejected.
- All failures are collected and raised together in one ``CatalogError``.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from phone_picker.models.item import Item

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({
    "id", "name", "os", "priceUsedUSD", "screenIn",
    "reliability", "performance", "camera", "battery", "safetyPrivacy",
})

_MAX_ERRORS_SHOWN = 10


class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into valid items."""


def load_catalog(path: Path) -> list[Item]:
    """Load a catalog file, dispatching on its extension (.json or .csv).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: On parse errors, unsupported format, or invalid rows.
    """
    path = Path(path)
    fmt = path.suffix.lower()
    if fmt == ".json":
        return load_catalog_json(path)
    if fmt == ".csv":
        return parse_catalog_csv(path)
    raise CatalogError(f"Unsupported catalog format '{fmt}'. Use .json or .csv.")


def load_catalog_json(path: Path) -> list[Item]:
    """Load and validate a JSON catalog.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: If the file is not a JSON array or any entry is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"JSON parse error in {path.name}: {exc}") from exc

    if not isinstance(raw, list):
        raise CatalogError(f"Catalog file must contain a JSON array: {path}")

    records = [r for r in raw if isinstance(r, dict) and "id" in r]
    items = build_items(records, source=path.name, first_index=0, label="Entry")
    logger.info("Loaded %d catalog item(s) from %s", len(items), path.name)
    return items


def parse_catalog_csv(path: Path) -> list[Item]:
    """Parse and validate a CSV catalog.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: If required columns are missing or any row is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise CatalogError(f"CSV file is empty or has no header row: {path}")

        actual_cols = set(reader.fieldnames)
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise CatalogError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = list(reader)

    if not rows:
        logger.warning("Catalog CSV is empty (header only): %s", path)
        return []

    records = [_csv_row_to_record(row) for row in rows]
    # Row numbers are 1-based and skip the header.
    items = build_items(records, source=path.name, first_index=2, label="Row")
    logger.info("Parsed %d catalog item(s) from %s", len(items), path.name)
    return items


def build_items(
    records:     list[dict[str, Any]],
    source:      str = "<memory>",
    first_index: int = 0,
    label:       str = "Entry",
) -> list[Item]:
    """Validate raw records into Items, rejecting duplicates.

    Raises:
        CatalogError: Listing the first failures if any record is invalid.
    """
    items: list[Item] = []
    errors: list[tuple[int, str]] = []
    seen_ids: set[str] = set()

    for i, rec in enumerate(records, start=first_index):
        try:
            item = Item.model_validate(rec)
        except ValidationError as exc:
            errors.append((i, _summarize_validation_error(exc)))
            continue
        if item.item_id in seen_ids:
            errors.append((i, f"Duplicate item id '{item.item_id}'."))
            continue
        seen_ids.add(item.item_id)
        items.append(item)

    if errors:
        detail = "\n".join(f"  {label} {n}: {msg}" for n, msg in errors[:_MAX_ERRORS_SHOWN])
        more = len(errors) - _MAX_ERRORS_SHOWN
        suffix = f"\n  ... and {more} more" if more > 0 else ""
        raise CatalogError(
            f"{len(errors)} catalog record(s) failed validation in {source}:\n{detail}{suffix}"
        )
    return items


# ── Private helpers ────────────────────────────────────────────────────────────

def _csv_row_to_record(row: dict[str, str]) -> dict[str, Any]:
    """Turn a CSV row into the same shape as a JSON catalog entry."""
    record: dict[str, Any] = {
        key: (value.strip() if isinstance(value, str) else value)
        for key, value in row.items()
        if key is not None and key != "links"
    }
    # Item parses the "label|url;..." form.
    record["links"] = row.get("links") or ""
    return record


def _summarize_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
