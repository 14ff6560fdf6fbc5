"""Settings CLI commands for Tax Calc.

Manages settings.json - custom rules file, default regime.
"""

import click
from pathlib import Path

from taxcalc.sdk import (
    TaxRulesError,
    TaxRulesNotFoundError,
    clear_setting,
    get_setting,
    get_settings_path,
    load_settings,
    set_setting,
    validate_rules_file,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - rules_file: custom tax rules YAML (overrides packaged rules)
    - default_regime: regime used when --regime is omitted
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("rules-file")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom rules_file, revert to packaged rules")
def settings_rules_file(path, clear):
    """Set or clear the custom tax rules file.

    PATH is validated before it is saved.

    Examples:
        tax-calc settings rules-file ~/tax/2026.yaml
        tax-calc settings rules-file --clear
    """
    if clear:
        if clear_setting("rules_file"):
            click.echo("Cleared rules_file setting. Using packaged rules.")
        else:
            click.echo("rules_file was not set.")
        return

    if not path:
        current = get_setting("rules_file")
        if current:
            click.echo(f"Current rules_file: {current}")
        else:
            click.echo("No custom rules_file set. Using packaged rules.")
        return

    rules_path = Path(path).expanduser().resolve()
    try:
        tax_rules = validate_rules_file(rules_path)
    except (TaxRulesNotFoundError, TaxRulesError) as e:
        raise click.ClickException(str(e))

    set_setting("rules_file", str(rules_path))
    click.echo(f"Set rules_file: {rules_path} ({tax_rules.display_label})")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("default-regime")
@click.argument("regime", required=False, type=click.Choice(["old", "new"], case_sensitive=False))
@click.option("--clear", is_flag=True, help="Clear default_regime, revert to new")
def settings_default_regime(regime, clear):
    """Set or clear the regime used when --regime is omitted."""
    if clear:
        if clear_setting("default_regime"):
            click.echo("Cleared default_regime setting.")
        else:
            click.echo("default_regime was not set.")
        return

    if not regime:
        click.echo(f"default_regime: {get_setting('default_regime', 'new')}")
        return

    set_setting("default_regime", regime.lower())
    click.echo(f"Set default_regime: {regime.lower()}")
