"""taxes - Indian income tax computation.

Scope:
- Slab tables, standard deductions, cess and 87A rebates per regime
- Single-regime computation (compute_tax) and old/new comparison
- Rupee formatting of results and explanation text

Constraints:
- Pure calculation - no I/O besides reading the rules YAML once
- Year-specific rules loaded from taxcalc/tax_rules/{year}.yaml

Usage:
    from taxcalc.sdk.taxes import compute_tax, compare_regimes

    result = compute_tax(1_500_000, "new")
    comparison = compare_regimes(1_500_000)
"""

# Rules schemas and result types
from .schemas import (
    Regime,
    TaxBracket,
    RebateRule,
    RegimeRules,
    TaxRules,
    BreakdownLine,
    TaxCalculationResult,
    ComparisonResult,
)

# Rules loading
from .rules import (
    load_tax_rules,
    get_default_rules,
    validate_rules_file,
    get_available_years,
    clear_rules_cache,
    TaxRulesError,
    TaxRulesNotFoundError,
)

# Computation
from .engine import (
    compute_tax,
    validate_income,
    parse_regime,
    InvalidInputError,
)
from .compare import compare_regimes

# Formatting
from .formatting import (
    format_inr,
    rupees,
    format_tax_context,
)

__all__ = [
    # Schemas
    "Regime",
    "TaxBracket",
    "RebateRule",
    "RegimeRules",
    "TaxRules",
    "BreakdownLine",
    "TaxCalculationResult",
    "ComparisonResult",
    # Rules
    "load_tax_rules",
    "get_default_rules",
    "validate_rules_file",
    "get_available_years",
    "clear_rules_cache",
    "TaxRulesError",
    "TaxRulesNotFoundError",
    # Computation
    "compute_tax",
    "compare_regimes",
    "validate_income",
    "parse_regime",
    "InvalidInputError",
    # Formatting
    "format_inr",
    "rupees",
    "format_tax_context",
]
