"""Rupee formatting and the text blocks derived from computed results.

Nothing here does tax arithmetic; every function formats values that the
engine or comparator already computed.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

from .schemas import Regime, TaxBracket, TaxCalculationResult

RUPEE = "₹"
BULLET = "•"


def round_to_rupee(amount: float) -> int:
    """Round to the nearest whole rupee (0.50 rounds up)."""
    return int(math.floor(amount + 0.5))


def round_percent(value: float) -> float:
    """Round a percentage to 2 decimal places (half up)."""
    return math.floor(value * 100 + 0.5) / 100


def format_inr(amount: float, max_fraction_digits: int = 3) -> str:
    """Format a number with Indian digit grouping (12,34,56,789).

    Trailing fractional zeros are dropped, so whole amounts print without
    a decimal point.

    Examples:
        format_inr(1950000)    -> "19,50,000"
        format_inr(33800.0004) -> "33,800"
        format_inr(1234.5)     -> "1,234.5"
    """
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    exact = Decimal(str(amount))
    # quantize needs every integer digit plus the fraction within precision
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + max_fraction_digits + 2)
        value = exact.quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        whole, _, fraction = f"{abs(value):f}".partition(".")
    fraction = fraction.rstrip("0")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}{whole}.{fraction}" if fraction else f"{sign}{whole}"


def rupees(amount: float) -> str:
    """Format an amount as a rupee string, e.g. ₹4,00,000."""
    return f"{RUPEE}{format_inr(amount)}"


def bracket_label(bracket: TaxBracket) -> str:
    """Label a slab as '₹4,00,000 - ₹8,00,000' or '₹24,00,000 - Above'."""
    if bracket.upper_bound is None:
        return f"{rupees(bracket.lower_bound)} - Above"
    return f"{rupees(bracket.lower_bound)} - {rupees(bracket.upper_bound)}"


def build_explanation(
    regime: Regime,
    annual_gross_income: float,
    standard_deduction: float,
    taxable_income: float,
    total_tax: float,
    rebate: float,
    cess_rate: float,
) -> str:
    """Multi-line summary of a computation.

    total_tax is the unrounded post-rebate figure; monthly and take-home
    amounts are derived from it and rounded for display only.
    """
    monthly_tax = total_tax / 12
    take_home = annual_gross_income - total_tax
    monthly_take_home = take_home / 12

    lines = [
        f"Under the {regime.display_name} Tax Regime:",
        f"{BULLET} Annual CTC: {rupees(annual_gross_income)}",
        f"{BULLET} Standard Deduction: {rupees(standard_deduction)}",
        f"{BULLET} Taxable Income: {rupees(taxable_income)}",
        f"{BULLET} Total Tax (including {format_inr(cess_rate)}% cess): {rupees(round_to_rupee(total_tax))}",
    ]
    if rebate > 0:
        rebate_line = f"{BULLET} Rebate u/s 87A: {rupees(rebate)}"
        if round_to_rupee(total_tax) == 0:
            rebate_line += " (Tax reduced to zero)"
        lines.append(rebate_line)
    lines.extend([
        f"{BULLET} Monthly Tax: {rupees(round_to_rupee(monthly_tax))}",
        f"{BULLET} Annual Take-Home: {rupees(round_to_rupee(take_home))}",
        f"{BULLET} Monthly Take-Home: {rupees(round_to_rupee(monthly_take_home))}",
    ])
    return "\n".join(lines)


def format_recommendation(savings: int) -> str:
    """Recommendation text for old-minus-new savings (positive favours new)."""
    if savings > 0:
        return f"The New Tax Regime saves you {rupees(abs(savings))} annually."
    if savings < 0:
        return f"The Old Tax Regime saves you {rupees(abs(savings))} annually."
    return "Both regimes result in the same tax liability."


def format_tax_context(result: TaxCalculationResult) -> str:
    """Compact context block for an advisory assistant prompt."""
    return "\n".join([
        f"Tax Calculation ({result.regime.value.upper()} Regime):",
        f"- Annual CTC: {rupees(result.annual_gross_income)}",
        f"- Taxable Income: {rupees(result.taxable_income)}",
        f"- Total Tax: {rupees(result.total_tax)}",
        f"- Effective Tax Rate: {format_inr(result.effective_tax_rate_percent, 2)}%",
        f"- Annual Take-Home: {rupees(result.annual_take_home)}",
        f"- Monthly Take-Home: {rupees(result.monthly_take_home)}",
    ])
