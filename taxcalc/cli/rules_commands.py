"""Tax rules CLI commands for Tax Calc.

Inspects and validates the YAML rule sets (slabs, deductions, rebates).
"""

import json

import click
from rich.console import Console

from taxcalc.sdk import (
    ConfigNotFoundError,
    TaxRulesError,
    TaxRulesNotFoundError,
    get_available_years,
    load_tax_rules,
    validate_rules_file,
)

from .renderers.result_renderer import render_rules


@click.group()
def rules():
    """Inspect and validate tax rule sets.

    Packaged rule sets live in taxcalc/tax_rules/{year}.yaml, where the
    year is the start of the financial year (2025 = FY 2025-26).
    """
    pass


@rules.command("show")
@click.option("--year", type=str, help="Tax year to show (default: configured or latest)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
def rules_show(year, output_format):
    """Show the slab tables, standard deductions and rebates in effect."""
    try:
        tax_rules = load_tax_rules(year=year)
    except (TaxRulesNotFoundError, ConfigNotFoundError, TaxRulesError, json.JSONDecodeError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(tax_rules.model_dump(mode="json"), indent=2))
    else:
        render_rules(Console(), tax_rules)


@rules.command("years")
def rules_years():
    """List packaged tax years."""
    years = get_available_years()
    if not years:
        click.echo("No packaged tax rules found.")
        return
    for year in years:
        click.echo(f"{year}  (FY {year}-{(year + 1) % 100:02d})")


@rules.command("validate")
@click.argument("path", type=click.Path())
def rules_validate(path):
    """Validate a tax rules YAML file at PATH.

    Checks bracket contiguity, the unbounded top slab, non-decreasing
    rates, and that both regimes are defined.
    """
    try:
        tax_rules = validate_rules_file(path)
    except (TaxRulesNotFoundError, TaxRulesError) as e:
        raise click.ClickException(str(e))

    click.echo(f"OK: {path} ({tax_rules.display_label})")
