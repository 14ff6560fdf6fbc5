"""Progressive income tax computation for a single regime.

Steps, in order:
1. Standard deduction (taxable income floored at zero)
2. Slab walk over the regime's bracket table
3. Cess on the slab subtotal
4. Section 87A rebate when taxable income is within the threshold
5. Effective rate, explanation text

The function is pure: the only shared state is the immutable TaxRules
object, so concurrent calls need no coordination.
"""

import logging
import math
from decimal import Decimal
from numbers import Real
from typing import Optional, Union

from .formatting import bracket_label, build_explanation, round_percent, round_to_rupee
from .rules import get_default_rules
from .schemas import BreakdownLine, Regime, RegimeRules, TaxCalculationResult, TaxRules

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when the income or regime supplied to the engine is unusable."""
    pass


def validate_income(annual_gross_income) -> float:
    """Check income is a finite, non-negative number and return it as float.

    Raises:
        InvalidInputError: For negative, non-numeric, NaN or infinite input
    """
    # bool is a Real subclass; True is not an income
    if isinstance(annual_gross_income, bool) or not isinstance(annual_gross_income, (Real, Decimal)):
        raise InvalidInputError(
            f"Annual gross income must be a number, got {type(annual_gross_income).__name__}"
        )

    income = float(annual_gross_income)
    if not math.isfinite(income):
        raise InvalidInputError(f"Annual gross income must be finite, got {annual_gross_income}")
    if income < 0:
        raise InvalidInputError(f"Annual gross income cannot be negative, got {annual_gross_income}")
    return income


def parse_regime(regime: Union[Regime, str]) -> Regime:
    """Accept a Regime or its string value ('old'/'new', any case)."""
    if isinstance(regime, Regime):
        return regime
    if isinstance(regime, str):
        try:
            return Regime(regime.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(r.value for r in Regime)
    raise InvalidInputError(f"Unknown tax regime {regime!r}. Expected one of: {choices}")


def calculate_slab_tax(taxable_income: float, regime_rules: RegimeRules) -> tuple[float, list[BreakdownLine]]:
    """Walk the slab table and return (slab tax subtotal, breakdown lines).

    A line is emitted for every slab that holds some income, including
    0% slabs; slabs above the taxable income are omitted.
    """
    subtotal = 0.0
    breakdown = []

    for bracket in regime_rules.brackets:
        taxable_in_slab = min(max(0.0, taxable_income - bracket.lower_bound), bracket.width)
        if taxable_in_slab <= 0:
            continue

        slab_tax = taxable_in_slab * bracket.rate / 100
        subtotal += slab_tax
        breakdown.append(BreakdownLine(
            bracket_label=bracket_label(bracket),
            rate_percent=bracket.rate,
            tax_amount=slab_tax,
        ))

    return subtotal, breakdown


def calculate_rebate(taxable_income: float, tax_before_rebate: float, regime_rules: RegimeRules) -> float:
    """Section 87A rebate, capped so tax never goes negative."""
    rule = regime_rules.rebate
    if taxable_income <= rule.income_threshold:
        return min(tax_before_rebate, rule.max_rebate)
    return 0.0


def compute_tax(
    annual_gross_income: float,
    regime: Union[Regime, str],
    rules: Optional[TaxRules] = None,
) -> TaxCalculationResult:
    """Compute income tax for one regime.

    Args:
        annual_gross_income: Annual CTC in rupees (finite, >= 0)
        regime: Regime.OLD / Regime.NEW or "old" / "new"
        rules: Rule set to apply (default: latest packaged year)

    Returns:
        TaxCalculationResult with total_tax rounded to whole rupees and
        unrounded breakdown amounts

    Raises:
        InvalidInputError: If income or regime is invalid
    """
    income = validate_income(annual_gross_income)
    regime = parse_regime(regime)
    if rules is None:
        rules = get_default_rules()
    regime_rules = rules.for_regime(regime)

    standard_deduction = regime_rules.standard_deduction
    taxable_income = max(0.0, income - standard_deduction)

    slab_tax, breakdown = calculate_slab_tax(taxable_income, regime_rules)
    cess = slab_tax * rules.cess_rate / 100
    tax_before_rebate = slab_tax + cess

    rebate = calculate_rebate(taxable_income, tax_before_rebate, regime_rules)
    total_tax = tax_before_rebate - rebate

    effective_rate = (total_tax / income) * 100 if income > 0 else 0.0

    logger.debug(
        f"{regime.value} regime: gross={income:.2f} taxable={taxable_income:.2f} "
        f"slab_tax={slab_tax:.2f} cess={cess:.2f} rebate={rebate:.2f} total={total_tax:.2f}"
    )

    return TaxCalculationResult(
        regime=regime,
        tax_year=rules.tax_year,
        annual_gross_income=income,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        cess=cess,
        rebate=rebate,
        total_tax=round_to_rupee(total_tax),
        effective_tax_rate_percent=round_percent(effective_rate),
        breakdown=tuple(breakdown),
        explanation=build_explanation(
            regime=regime,
            annual_gross_income=income,
            standard_deduction=standard_deduction,
            taxable_income=taxable_income,
            total_tax=total_tax,
            rebate=rebate,
            cess_rate=rules.cess_rate,
        ),
    )
