"""
Criterion and preference taxonomy for phone recommendations.

Three enums describe every ranking request:
  - ``Criterion``       — the six weighted scoring dimensions.
  - ``OperatingSystem`` — the OS family a catalog item runs.
  - ``SizePreference``  — the user's maximum comfortable phone size.

Criterion values use the catalog file's key spelling (``safetyPrivacy``) so
that weight maps round-trip between JSON, TOML and Python unchanged.

This module has NO imports from any other ``phone_picker`` package.
"""

from enum import StrEnum


class Criterion(StrEnum):
    """A weighted scoring dimension."""

    VALUE = "value"
    """Price relative to the other candidates; cheaper scores higher."""

    RELIABILITY = "reliability"
    PERFORMANCE = "performance"
    CAMERA = "camera"
    BATTERY = "battery"

    SAFETY_PRIVACY = "safetyPrivacy"
    """Update policy, security track record, privacy defaults."""


class OperatingSystem(StrEnum):
    """OS family of a catalog item."""

    IOS = "iOS"
    ANDROID = "Android"


class SizePreference(StrEnum):
    """Maximum phone size the user is comfortable with.

    ``LARGE`` is offered for symmetry with the question form; like ``ANY``
    it imposes no screen-size ceiling.
    """

    ANY = "Any"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


ANY_OS = "Any"
"""Sentinel OS preference meaning "no preference"."""

CRITERION_LABELS: dict[Criterion, str] = {
    Criterion.VALUE:          "value for money",
    Criterion.RELIABILITY:    "reliability",
    Criterion.PERFORMANCE:    "speed/performance",
    Criterion.CAMERA:         "camera quality",
    Criterion.BATTERY:        "battery life",
    Criterion.SAFETY_PRIVACY: "safety & privacy",
}


def criterion_label(key: str) -> str:
    """Human-readable label for a criterion key; unknown keys echo back."""
    try:
        return CRITERION_LABELS[Criterion(key)]
    except ValueError:
        return key
