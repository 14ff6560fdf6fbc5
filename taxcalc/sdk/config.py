"""Configuration management for Tax Calc.

Configuration lives in a single machine-specific file:

settings.json
   - rules_file: path to a custom tax rules YAML (optional)
   - default_regime: regime used by 'tax-calc calculate' when --regime is omitted

Config directory resolution:
1. TAX_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/tax-calc/ (XDG_CONFIG_HOME fallback)

Tax rule resolution (see taxes/rules.py):
1. Explicit path passed by the caller
2. TAX_CALC_RULES_PATH environment variable
3. settings.json "rules_file" key
4. Packaged taxcalc/tax_rules/{year}.yaml
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "tax-calc"
SETTINGS_FILENAME = "settings.json"
RULES_PATH_ENV = "TAX_CALC_RULES_PATH"

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class ConfigNotFoundError(Exception):
    """Raised when a configured file does not exist."""
    pass


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from the LOG_LEVEL environment variable.

    Called by the CLI and MCP entry points. Library modules only create
    loggers and never configure handlers themselves.
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TAX_CALC_CONFIG_PATH environment variable
    2. ~/.config/tax-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TAX_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "rules_file", "default_regime")
        default: Default value if key not found
    """
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json and return the file path."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if the key was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_custom_rules_path() -> Optional[Path]:
    """Get a user-configured tax rules file, if any.

    Resolution order:
    1. TAX_CALC_RULES_PATH environment variable
    2. settings.json "rules_file" key

    Returns:
        Path to the custom rules file, or None when only packaged rules apply

    Raises:
        ConfigNotFoundError: If a path is configured but the file is missing
    """
    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        path = Path(env_path).expanduser()
        source = f"{RULES_PATH_ENV} environment variable"
    else:
        custom = get_setting("rules_file")
        if not custom:
            return None
        path = Path(custom).expanduser()
        source = f"settings.json 'rules_file' ({get_settings_path()})"

    if not path.exists():
        raise ConfigNotFoundError(
            f"Tax rules file not found: {path}\n"
            f"Configured via {source}.\n\n"
            f"Clear with: tax-calc settings rules-file --clear"
        )
    return path
