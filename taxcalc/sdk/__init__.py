"""Tax Calc SDK - Core functionality for income tax computation."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_custom_rules_path,
    configure_logging,
    ConfigNotFoundError,
)

from .taxes import (
    Regime,
    TaxRules,
    TaxCalculationResult,
    ComparisonResult,
    BreakdownLine,
    load_tax_rules,
    get_default_rules,
    validate_rules_file,
    get_available_years,
    TaxRulesError,
    TaxRulesNotFoundError,
    compute_tax,
    compare_regimes,
    InvalidInputError,
    format_tax_context,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_custom_rules_path",
    "configure_logging",
    "ConfigNotFoundError",
    # Tax
    "Regime",
    "TaxRules",
    "TaxCalculationResult",
    "ComparisonResult",
    "BreakdownLine",
    "load_tax_rules",
    "get_default_rules",
    "validate_rules_file",
    "get_available_years",
    "TaxRulesError",
    "TaxRulesNotFoundError",
    "compute_tax",
    "compare_regimes",
    "InvalidInputError",
    "format_tax_context",
]
