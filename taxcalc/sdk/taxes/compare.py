"""Old vs new regime comparison."""

from typing import Optional

from .engine import compute_tax, validate_income
from .formatting import format_recommendation
from .rules import get_default_rules
from .schemas import ComparisonResult, Regime, TaxRules


def compare_regimes(annual_gross_income: float, rules: Optional[TaxRules] = None) -> ComparisonResult:
    """Compute tax under both regimes and recommend the cheaper one.

    Savings are old total minus new total, using each regime's already
    rounded total_tax.

    Raises:
        InvalidInputError: If income is invalid
    """
    validate_income(annual_gross_income)
    if rules is None:
        rules = get_default_rules()

    old_result = compute_tax(annual_gross_income, Regime.OLD, rules=rules)
    new_result = compute_tax(annual_gross_income, Regime.NEW, rules=rules)

    savings = old_result.total_tax - new_result.total_tax
    if savings > 0:
        recommended: Optional[Regime] = Regime.NEW
    elif savings < 0:
        recommended = Regime.OLD
    else:
        recommended = None

    return ComparisonResult(
        old=old_result,
        new=new_result,
        savings=abs(savings),
        recommended_regime=recommended,
        recommendation_text=format_recommendation(savings),
    )
