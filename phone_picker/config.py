"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``PHONE_PICKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The ranking engine itself never loads config.  ``rank()`` and ``explain()``
take an optional ``RankingConfig`` / ``ExplainConfig`` and fall back to the
model defaults, so library callers need no config file at all.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from phone_picker.models.preferences import validate_weights
from phone_picker.taxonomy.criteria import Criterion

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Where the static phone catalog lives."""

    model_config = ConfigDict(frozen=True)

    path: str = "data/phones.json"


class RankingConfig(BaseModel):
    """Hard-filter and relaxation parameters for the ranker.

    ``min_results`` is the relaxation threshold: fewer survivors than this
    triggers the next relaxation stage.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min_results: int = 3
    small_max_screen_in: float = 6.3
    medium_max_screen_in: float = 6.7

    @field_validator("min_results")
    @classmethod
    def validate_min_results(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"min_results must be >= 0, got {v}.")
        return v

    @field_validator("small_max_screen_in", "medium_max_screen_in")
    @classmethod
    def validate_ceiling(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Screen-size ceiling must be positive, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_ceiling_order(self) -> "RankingConfig":
        if self.small_max_screen_in > self.medium_max_screen_in:
            raise ValueError(
                "small_max_screen_in must not exceed medium_max_screen_in "
                f"({self.small_max_screen_in} > {self.medium_max_screen_in})."
            )
        return self


class ExplainConfig(BaseModel):
    """Thresholds for the rule-based explanation generator."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    large_screen_in: float = 6.6
    near_budget_ratio: float = 0.9
    midrange_reliability_max: float = 7.0
    top_factor_count: int = 2

    @field_validator("near_budget_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"near_budget_ratio must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("top_factor_count")
    @classmethod
    def validate_top_factor_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_factor_count must be >= 1, got {v}.")
        return v


class WeightsConfig(BaseModel):
    """Default criterion weights offered before the user adjusts anything."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    defaults: dict[str, float] = {
        Criterion.VALUE.value:          20.0,
        Criterion.RELIABILITY.value:    20.0,
        Criterion.PERFORMANCE.value:    20.0,
        Criterion.CAMERA.value:         15.0,
        Criterion.BATTERY.value:        15.0,
        Criterion.SAFETY_PRIVACY.value: 10.0,
    }

    @field_validator("defaults")
    @classmethod
    def validate_defaults(cls, v: dict[str, float]) -> dict[str, float]:
        return validate_weights(v)


class DisplayConfig(BaseModel):
    """How many results and explanation lines the CLI shows."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 3
    max_bullets: int = 3
    max_tradeoffs: int = 2


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    ranking: RankingConfig = RankingConfig()
    explain: ExplainConfig = ExplainConfig()
    weights: WeightsConfig = WeightsConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PHONE_PICKER_* env vars to the raw config dict.

    Supported overrides:
      PHONE_PICKER_CATALOG_PATH → raw["catalog"]["path"]
      PHONE_PICKER_LOG_LEVEL    → raw["logging"]["level"]
      PHONE_PICKER_DEBUG        → raw["debug"]
    """
    if catalog_path := os.environ.get("PHONE_PICKER_CATALOG_PATH"):
        raw.setdefault("catalog", {})["path"] = catalog_path

    if log_level := os.environ.get("PHONE_PICKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("PHONE_PICKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    weights_raw = raw.get("weights", {})
    weights = WeightsConfig(defaults=weights_raw) if weights_raw else WeightsConfig()

    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        ranking=RankingConfig(**raw.get("ranking", {})),
        explain=ExplainConfig(**raw.get("explain", {})),
        weights=weights,
        display=DisplayConfig(**raw.get("display", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
