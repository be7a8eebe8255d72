"""
Catalog item models.

``Item`` is a single phone in the catalog: identity, OS, used-market price,
screen size and five quality ratings on a fixed 1–10 scale.

``PurchaseLink`` is passthrough presentation data — the ranker never reads it.

Both models are frozen. A catalog is loaded once and shared read-only between
any number of ranking calls.

Field names are snake_case; the catalog file's camelCase keys
(``priceUsedUSD``, ``screenIn``, ``safetyPrivacy``) are accepted as aliases.
``links`` also accepts the flat CSV form ``label|url;label|url``.

Numeric fields reject NaN and infinity.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from phone_picker.taxonomy.criteria import OperatingSystem

RATING_MIN = 1.0
RATING_MAX = 10.0


class PurchaseLink(BaseModel):
    """A labelled link to a seller listing."""

    model_config = ConfigDict(frozen=True)

    label: str
    url: str


class Item(BaseModel):
    """A phone in the catalog.

    Attributes:
        item_id: Stable catalog identifier, e.g. ``"iphone-13"``.
        name: Display name.
        os: OS family.
        price_used_usd: Typical used-market price in USD (> 0).
        screen_in: Screen diagonal in inches (> 0).
        reliability: 1–10 rating.
        performance: 1–10 rating.
        camera: 1–10 rating.
        battery: 1–10 rating.
        safety_privacy: 1–10 rating.
        links: Purchase links, shown as-is by the presentation layer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    item_id: str = Field(alias="id")
    name: str
    os: OperatingSystem
    price_used_usd: float = Field(alias="priceUsedUSD")
    screen_in: float = Field(alias="screenIn")
    reliability: float
    performance: float
    camera: float
    battery: float
    safety_privacy: float = Field(alias="safetyPrivacy")
    links: tuple[PurchaseLink, ...] = ()

    @field_validator("item_id", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string.")
        return v

    @field_validator("price_used_usd", "screen_in")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}.")
        return v

    @field_validator("reliability", "performance", "camera", "battery", "safety_privacy")
    @classmethod
    def validate_rating(cls, v: float) -> float:
        if not RATING_MIN <= v <= RATING_MAX:
            raise ValueError(
                f"rating must be in [{RATING_MIN:g}, {RATING_MAX:g}], got {v}."
            )
        return v

    @field_validator("links", mode="before")
    @classmethod
    def parse_link_string(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_links(v)
        return v


def parse_links(raw: str) -> list[PurchaseLink]:
    """Parse ``label|url;label|url`` into PurchaseLink objects.

    Empty chunks are ignored, so ``""`` gives no links.

    Raises:
        ValueError: If a chunk has no ``|`` or an empty url.
    """
    links: list[PurchaseLink] = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        label, sep, url = chunk.partition("|")
        if not sep or not url.strip():
            raise ValueError(f"Invalid link '{chunk}'. Expected 'label|url'.")
        links.append(PurchaseLink(label=label.strip(), url=url.strip()))
    return links
