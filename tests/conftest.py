"""Shared pytest fixtures."""

import pytest

from taxcalc.sdk.taxes import clear_rules_cache, load_tax_rules


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty temp dir so user settings never leak into tests."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TAX_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("TAX_CALC_RULES_PATH", raising=False)
    clear_rules_cache()
    yield config_dir
    clear_rules_cache()


@pytest.fixture
def rules_2025():
    """Packaged FY 2025-26 rules."""
    return load_tax_rules(year=2025)
