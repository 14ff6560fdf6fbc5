"""Rich renderers for tax results, regime comparisons and rule sets.

Transforms SDK result models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taxcalc.sdk.taxes import ComparisonResult, Regime, TaxCalculationResult, TaxRules
from taxcalc.sdk.taxes.formatting import format_inr, rupees


def render_tax_result(console: Console, result: TaxCalculationResult) -> None:
    """Render a single-regime computation: slab table, then the explanation.

    Args:
        console: Rich Console instance
        result: Output of compute_tax()
    """
    table = Table(
        title=f"{result.regime.display_name} Tax Regime (FY {result.tax_year}-{(result.tax_year + 1) % 100:02d})",
        box=box.ROUNDED,
    )
    table.add_column("Slab", style="bold", min_width=24)
    table.add_column("Rate", justify="right")
    table.add_column("Tax", justify="right", min_width=12)

    for line in result.breakdown:
        table.add_row(line.bracket_label, f"{format_inr(line.rate_percent)}%", _fmt(line.tax_amount))

    table.add_row("", "", "")
    table.add_row("  Cess", "", _fmt(result.cess))
    if result.rebate > 0:
        table.add_row("  Rebate u/s 87A", "", f"-{_fmt(result.rebate)}")
    table.add_row(
        "[bold]TOTAL TAX[/bold]",
        f"{format_inr(result.effective_tax_rate_percent, 2)}%",
        f"[bold]{rupees(result.total_tax)}[/bold]",
    )

    console.print(table)
    console.print(Panel(result.explanation, title="Summary", border_style="dim"))


def render_comparison(console: Console, comparison: ComparisonResult) -> None:
    """Render old vs new side by side with the recommendation."""
    table = Table(title="Regime Comparison", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=18)
    table.add_column("Old Regime", justify="right", min_width=14)
    table.add_column("New Regime", justify="right", min_width=14)

    old, new = comparison.old, comparison.new
    table.add_row("Annual CTC", rupees(old.annual_gross_income), rupees(new.annual_gross_income))
    table.add_row("Standard Deduction", rupees(old.standard_deduction), rupees(new.standard_deduction))
    table.add_row("Taxable Income", rupees(old.taxable_income), rupees(new.taxable_income))
    table.add_row("Total Tax", rupees(old.total_tax), rupees(new.total_tax))
    table.add_row(
        "Effective Rate",
        f"{format_inr(old.effective_tax_rate_percent, 2)}%",
        f"{format_inr(new.effective_tax_rate_percent, 2)}%",
    )
    table.add_row("Take-Home", rupees(old.annual_take_home), rupees(new.annual_take_home))

    console.print(table)

    style = "green" if comparison.recommended_regime is not None else "yellow"
    console.print(Panel(
        f"[{style}]{comparison.recommendation_text}[/{style}]",
        title="Recommendation",
        border_style=style,
    ))


def render_rules(console: Console, rules: TaxRules) -> None:
    """Render the slab tables, deductions and rebates of a rule set."""
    console.print(f"[bold]{rules.display_label}[/bold]  (cess {format_inr(rules.cess_rate)}%)")

    for regime in Regime:
        regime_rules = rules.for_regime(regime)
        table = Table(title=f"{regime.display_name} Regime", box=box.SIMPLE)
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        table.add_column("Rate", justify="right")

        for bracket in regime_rules.brackets:
            upper = "Above" if bracket.upper_bound is None else rupees(bracket.upper_bound)
            table.add_row(rupees(bracket.lower_bound), upper, f"{format_inr(bracket.rate)}%")

        console.print(table)
        console.print(f"  Standard deduction: {rupees(regime_rules.standard_deduction)}")
        console.print(
            f"  Rebate u/s 87A: up to {rupees(regime_rules.rebate.max_rebate)} "
            f"when taxable income <= {rupees(regime_rules.rebate.income_threshold)}"
        )
        console.print()


def _fmt(amount: float) -> str:
    """Format rupee amount to paise."""
    return rupees(round(amount, 2))
