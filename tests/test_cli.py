"""
Tests for phone_picker/cli.py via typer's CliRunner.

Covers:
  - recommend: default run against the demo catalog, OS filter, weight
    overrides, --top, file output, invalid inputs exit with code 1.
  - parse_weight_overrides(): order preservation and malformed entries.
  - validate-config and validate-catalog commands.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from phone_picker.cli import app, parse_weight_overrides

ROOT = Path(__file__).resolve().parents[1]
DEMO_CATALOG = str(ROOT / "data" / "phones.json")
DEFAULT_CONFIG = str(ROOT / "config" / "default.toml")

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    """configure_logging() binds handlers to the runner's streams; drop them."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


def _recommend(*args: str):
    return runner.invoke(
        app,
        ["recommend", "--catalog", DEMO_CATALOG, "--config", DEFAULT_CONFIG, *args],
    )


# ── parse_weight_overrides ────────────────────────────────────────────────────

class TestParseWeightOverrides:
    def test_override_keeps_position(self):
        result = parse_weight_overrides({"value": 20, "camera": 15}, ["camera=40"])
        assert result == {"value": 20, "camera": 40.0}
        assert list(result) == ["value", "camera"]

    def test_new_key_appended(self):
        result = parse_weight_overrides({"value": 20}, ["battery=5"])
        assert list(result) == ["value", "battery"]

    def test_no_overrides_copies_defaults(self):
        defaults = {"value": 20.0}
        result = parse_weight_overrides(defaults, [])
        assert result == defaults
        assert result is not defaults

    @pytest.mark.parametrize("entry", ["camera", "=5", "camera=high"])
    def test_malformed(self, entry):
        with pytest.raises(ValueError):
            parse_weight_overrides({}, [entry])


# ── recommend ─────────────────────────────────────────────────────────────────

class TestRecommend:
    def test_default_run(self):
        result = _recommend("--budget", "600")
        assert result.exit_code == 0, result.output
        assert "Top picks" in result.output
        assert "#1" in result.output
        assert "#3" in result.output
        assert "#4" not in result.output

    def test_os_filter(self):
        result = _recommend("--budget", "500", "--os", "iOS")
        assert result.exit_code == 0, result.output
        assert "OS: iOS" in result.output
        assert "(Android)" not in result.output
        assert "Matches your OS preference: iOS." in result.output

    def test_top_option(self):
        result = _recommend("--budget", "800", "--top", "5")
        assert result.exit_code == 0, result.output
        assert "#5" in result.output

    def test_weight_override_changes_priorities(self):
        result = _recommend("--budget", "800", "--weight", "camera=90")
        assert result.exit_code == 0, result.output
        assert "Strong on what you prioritize most: camera quality" in result.output

    def test_relaxation_banner(self):
        result = _recommend("--budget", "100")
        assert result.exit_code == 0, result.output
        assert "[UNFILTERED]" in result.output

    def test_output_dir(self, tmp_path):
        result = _recommend("--budget", "600", "--output-dir", str(tmp_path))
        assert result.exit_code == 0, result.output
        json_files = list(tmp_path.glob("recommendations_*.json"))
        csv_files = list(tmp_path.glob("recommendations_*.csv"))
        assert len(json_files) == 1
        assert len(csv_files) == 1
        payload = json.loads(json_files[0].read_text(encoding="utf-8"))
        assert len(payload["picks"]) == 3

    def test_invalid_os(self):
        result = _recommend("--budget", "600", "--os", "Windows")
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_invalid_budget(self):
        result = _recommend("--budget", "0")
        assert result.exit_code == 1

    def test_unknown_weight(self):
        result = _recommend("--budget", "600", "--weight", "style=10")
        assert result.exit_code == 1
        assert "Unknown criteria" in result.output

    @pytest.mark.parametrize("entry", ["camera=nan", "camera=inf"])
    def test_non_finite_weight(self, entry):
        result = _recommend("--budget", "600", "--weight", entry)
        assert result.exit_code == 1
        assert "finite" in result.output

    def test_missing_catalog(self, tmp_path):
        result = runner.invoke(
            app,
            ["recommend", "--budget", "600", "--catalog", str(tmp_path / "x.json"),
             "--config", DEFAULT_CONFIG],
        )
        assert result.exit_code == 1
        assert "not found" in result.output


# ── validate-config / validate-catalog ────────────────────────────────────────

class TestValidateCommands:
    def test_validate_config(self):
        result = runner.invoke(app, ["validate-config", "--config", DEFAULT_CONFIG])
        assert result.exit_code == 0, result.output
        assert "[OK] Config valid." in result.output
        assert "safetyPrivacy=10" in result.output

    def test_validate_config_missing(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1

    def test_validate_catalog(self):
        result = runner.invoke(
            app, ["validate-catalog", "--file", DEMO_CATALOG, "--config", DEFAULT_CONFIG]
        )
        assert result.exit_code == 0, result.output
        assert "Validated 10 item(s)" in result.output
        assert "pixel-7" in result.output

    def test_validate_catalog_invalid(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('[{"id": "a", "name": "A"}]', encoding="utf-8")
        result = runner.invoke(
            app, ["validate-catalog", "--file", str(bad), "--config", DEFAULT_CONFIG]
        )
        assert result.exit_code == 1
        assert "Catalog invalid" in result.output
