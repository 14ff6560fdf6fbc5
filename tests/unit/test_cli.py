"""Tests for the tax-calc CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from taxcalc.cli.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCalculate:
    """tax-calc calculate INCOME"""

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["calculate", "2000000", "--regime", "old", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["regime"] == "old"
        assert data["taxable_income"] == 1950000
        assert data["total_tax"] == 413400
        assert data["annual_take_home"] == 1586600
        assert len(data["breakdown"]) == 4
        assert data["breakdown"][-1]["bracket_label"] == "₹10,00,000 - Above"

    def test_defaults_to_new_regime(self, runner):
        result = runner.invoke(cli, ["calculate", "1500000", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["regime"] == "new"

    def test_default_regime_setting(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text(json.dumps({"default_regime": "old"}))

        result = runner.invoke(cli, ["calculate", "1500000", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["regime"] == "old"

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["calculate", "1000000"])

        assert result.exit_code == 0, result.output
        assert "Under the New Tax Regime:" in result.output
        assert "Rebate u/s 87A" in result.output

    def test_compare_flag(self, runner):
        result = runner.invoke(cli, ["calculate", "1500000", "--compare", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["savings"] == 159900
        assert data["recommendation_text"] == "The New Tax Regime saves you ₹1,59,900 annually."

    @pytest.mark.parametrize("args", [
        ["calculate", "-100"],
        ["calculate", "--", "-100"],
        ["calculate", "-100", "--regime", "old"],
        ["compare", "-1e5"],
    ])
    def test_negative_income(self, runner, args):
        result = runner.invoke(cli, args)

        assert result.exit_code == 1, result.output
        assert "cannot be negative" in result.output

    def test_corrupt_settings(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")

        result = runner.invoke(cli, ["calculate", "1500000"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Traceback" not in result.output

    def test_settings_rules_file_applies(self, runner, tmp_path, isolated_config):
        rules_path = tmp_path / "flat.yaml"
        single_slab = {
            "standard_deduction": 0,
            "rebate": {"income_threshold": 0, "max_rebate": 0},
            "brackets": [{"lower_bound": 0, "rate": 10}],
        }
        rules_path.write_text(yaml.safe_dump({
            "tax_year": 2030,
            "cess_rate": 0,
            "regimes": {"old": single_slab, "new": single_slab},
        }))
        (isolated_config / "settings.json").write_text(json.dumps({"rules_file": str(rules_path)}))

        result = runner.invoke(cli, ["calculate", "100000", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total_tax"] == 10000

    def test_custom_rules_option(self, runner, tmp_path):
        rules_path = tmp_path / "flat.yaml"
        single_slab = {
            "standard_deduction": 0,
            "rebate": {"income_threshold": 0, "max_rebate": 0},
            "brackets": [{"lower_bound": 0, "rate": 10}],
        }
        rules_path.write_text(yaml.safe_dump({
            "tax_year": 2030,
            "cess_rate": 0,
            "regimes": {"old": single_slab, "new": single_slab},
        }))

        result = runner.invoke(cli, ["calculate", "100000", "--rules", str(rules_path), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total_tax"] == 10000

    def test_missing_rules_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["calculate", "100000", "--rules", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestCompare:
    """tax-calc compare INCOME"""

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["compare", "1500000", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["old"]["total_tax"] == 257400
        assert data["new"]["total_tax"] == 97500
        assert data["recommended_regime"] == "new"

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["compare", "1500000"])

        assert result.exit_code == 0, result.output
        assert "Regime Comparison" in result.output
        assert "saves you" in result.output


class TestRulesCommands:
    """tax-calc rules ..."""

    def test_show_json(self, runner):
        result = runner.invoke(cli, ["rules", "show", "--year", "2025", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["cess_rate"] == 4
        assert data["regimes"]["new"]["standard_deduction"] == 75000

    def test_show_text(self, runner):
        result = runner.invoke(cli, ["rules", "show"])

        assert result.exit_code == 0, result.output
        assert "FY 2025-26" in result.output

    def test_years(self, runner):
        result = runner.invoke(cli, ["rules", "years"])

        assert result.exit_code == 0
        assert "2025  (FY 2025-26)" in result.output

    def test_validate_bad_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tax_year: 2026\ncess_rate: 4\nregimes: {}\n")

        result = runner.invoke(cli, ["rules", "validate", str(path)])

        assert result.exit_code == 1
        assert "missing rules for regime" in result.output


class TestSettingsCommands:
    """tax-calc settings ..."""

    def test_rules_file_set_and_clear(self, runner, tmp_path, isolated_config):
        rules_path = tmp_path / "custom.yaml"
        single_slab = {
            "standard_deduction": 0,
            "rebate": {"income_threshold": 0, "max_rebate": 0},
            "brackets": [{"lower_bound": 0, "rate": 10}],
        }
        rules_path.write_text(yaml.safe_dump({
            "tax_year": 2030,
            "cess_rate": 0,
            "regimes": {"old": single_slab, "new": single_slab},
        }))

        result = runner.invoke(cli, ["settings", "rules-file", str(rules_path)])
        assert result.exit_code == 0, result.output
        settings = json.loads((isolated_config / "settings.json").read_text())
        assert settings["rules_file"] == str(rules_path.resolve())

        result = runner.invoke(cli, ["settings", "rules-file", "--clear"])
        assert result.exit_code == 0
        assert "rules_file" not in json.loads((isolated_config / "settings.json").read_text())

    def test_rules_file_rejects_invalid(self, runner, tmp_path, isolated_config):
        path = tmp_path / "bad.yaml"
        path.write_text("tax_year: 2026\n")

        result = runner.invoke(cli, ["settings", "rules-file", str(path)])

        assert result.exit_code == 1
        assert not (isolated_config / "settings.json").exists()

    def test_show_empty(self, runner):
        result = runner.invoke(cli, ["settings", "show"])

        assert result.exit_code == 0
        assert "No settings configured" in result.output

    def test_default_regime(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "default-regime", "OLD"])

        assert result.exit_code == 0
        assert json.loads((isolated_config / "settings.json").read_text())["default_regime"] == "old"
