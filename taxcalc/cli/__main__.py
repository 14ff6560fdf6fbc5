"""Tax Calc CLI - Command-line interface for income tax computation."""

import json

import click
from rich.console import Console

from taxcalc import __version__
from taxcalc.sdk import (
    ConfigNotFoundError,
    InvalidInputError,
    TaxRulesError,
    TaxRulesNotFoundError,
    compare_regimes,
    compute_tax,
    configure_logging,
    get_setting,
    load_tax_rules,
)

from .renderers.result_renderer import render_comparison, render_tax_result
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group

REGIME_CHOICES = ["old", "new"]

# json.JSONDecodeError covers a corrupt settings.json
RULES_ERRORS = (
    TaxRulesNotFoundError,
    ConfigNotFoundError,
    TaxRulesError,
    json.JSONDecodeError,
)

# Lets a negative INCOME such as -100 reach validation instead of option parsing
INCOME_CONTEXT = {"ignore_unknown_options": True}


@click.group()
@click.version_option(version=__version__, prog_name="tax-calc")
def cli():
    """Tax Calc - Indian income tax under the old and new regimes.

    Computes slab tax, 4% cess and the Section 87A rebate from an
    annual CTC, and compares both regimes.

    Tax rules are loaded from (in order):

    \b
    1. --rules PATH option
    2. TAX_CALC_RULES_PATH environment variable
    3. settings.json 'rules_file' key (set via 'tax-calc settings rules-file')
    4. Packaged rules for the latest tax year

    Set LOG_LEVEL=DEBUG to see per-computation details.
    """
    pass


cli.add_command(rules_group)
cli.add_command(settings_group)


def _load_rules(rules_path):
    """Load rules for a command, translating failures to ClickException."""
    try:
        return load_tax_rules(path=rules_path)
    except RULES_ERRORS as e:
        raise click.ClickException(str(e))


def _default_regime():
    try:
        return get_setting("default_regime", "new")
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid settings.json: {e}")


def _echo_comparison(income, rules, output_format):
    try:
        comparison = compare_regimes(income, rules=rules)
    except InvalidInputError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(comparison.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        render_comparison(Console(), comparison)


@cli.command("calculate", context_settings=INCOME_CONTEXT)
@click.argument("income", type=float)
@click.option("--regime", "-r", type=click.Choice(REGIME_CHOICES, case_sensitive=False), default=None,
              help="Tax regime (default: settings.json 'default_regime', else new)")
@click.option("--compare", is_flag=True, help="Compute both regimes and recommend one.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
@click.option("--rules", "rules_path", type=click.Path(), help="Custom tax rules YAML file")
def calculate(income, regime, compare, output_format, rules_path):
    """Calculate income tax for an annual CTC of INCOME rupees.

    \b
    Examples:
      tax-calc calculate 1500000
      tax-calc calculate 2000000 --regime old --format json
      tax-calc calculate 1500000 --compare

    INCOME is read as a number even when it starts with "-", so a
    negative value is reported as invalid input rather than an option.
    """
    rules = _load_rules(rules_path)

    if compare:
        _echo_comparison(income, rules, output_format)
        return

    regime = regime or _default_regime()
    try:
        result = compute_tax(income, regime, rules=rules)
    except InvalidInputError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        render_tax_result(Console(), result)


@cli.command("compare", context_settings=INCOME_CONTEXT)
@click.argument("income", type=float)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
@click.option("--rules", "rules_path", type=click.Path(), help="Custom tax rules YAML file")
def compare(income, output_format, rules_path):
    """Compare old and new regimes for an annual CTC of INCOME rupees."""
    rules = _load_rules(rules_path)
    _echo_comparison(income, rules, output_format)


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
