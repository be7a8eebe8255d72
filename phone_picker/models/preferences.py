"""
User preference models: hard constraints and criterion weights.

``Constraints`` is a frozen snapshot of the question-form answers.  The
presentation layer builds a fresh one for every ranking call.

Weights are a plain ``Mapping[str, float]`` keyed by ``Criterion`` value.
Key order is meaningful: the explainer breaks ties between equally weighted
criteria by it.  ``validate_weights()`` is the single gate for weight maps.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator

from phone_picker.taxonomy.criteria import ANY_OS, Criterion, OperatingSystem, SizePreference

OSPreference = Union[OperatingSystem, str]

WeightMap = Mapping[str, float]

_VALID_CRITERIA: frozenset[str] = frozenset(c.value for c in Criterion)


class Constraints(BaseModel):
    """Hard filters for one ranking call.

    Attributes:
        budget_usd: Budget ceiling in USD; items priced exactly at the
            ceiling pass.
        os: ``"Any"`` or an ``OperatingSystem`` value.
        max_size: Size preference; mapped to a screen ceiling by the ranker.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    budget_usd: float
    os: OSPreference = ANY_OS
    max_size: SizePreference = SizePreference.ANY

    @field_validator("budget_usd")
    @classmethod
    def validate_budget(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"budget_usd must be positive, got {v}.")
        return v

    @field_validator("os", mode="before")
    @classmethod
    def validate_os(cls, v: object) -> OSPreference:
        if v == ANY_OS:
            return ANY_OS
        try:
            return OperatingSystem(v)
        except ValueError:
            valid = [ANY_OS] + [o.value for o in OperatingSystem]
            raise ValueError(f"Invalid os preference '{v}'. Valid values: {valid}")

    @property
    def any_os(self) -> bool:
        return self.os == ANY_OS


def validate_weights(weights: WeightMap) -> dict[str, float]:
    """Check a weight map and return it as a plain dict in the same key order.

    Missing criteria are allowed and count as weight 0.

    Raises:
        ValueError: On unknown criterion keys, or weights that are negative,
            NaN or infinite.
    """
    unknown = [k for k in weights if k not in _VALID_CRITERIA]
    if unknown:
        raise ValueError(
            f"Unknown criteria {unknown}. Valid criteria: {sorted(_VALID_CRITERIA)}"
        )
    negative = {k: v for k, v in weights.items() if v < 0}
    if negative:
        raise ValueError(f"Weights must be non-negative, got {negative}.")
    non_finite = {k: v for k, v in weights.items() if not math.isfinite(v)}
    if non_finite:
        raise ValueError(f"Weights must be finite numbers, got {non_finite}.")
    return {str(k): float(v) for k, v in weights.items()}
