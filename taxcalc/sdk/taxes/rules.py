"""Tax rules loading and validation.

Rule sets are YAML files, one per tax year. Packaged years live in
taxcalc/tax_rules/{year}.yaml; a custom file can be configured through
TAX_CALC_RULES_PATH or settings.json (see sdk/config.py).

Each file is parsed and validated once per process and the resulting
frozen TaxRules object is shared by every computation.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from ..config import get_custom_rules_path
from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesError(ValueError):
    """Raised when a tax rules file is malformed or fails validation."""
    pass


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no tax rules file exists for the requested year."""
    pass


def _get_tax_rules_dir() -> Path:
    """Get the packaged tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> taxcalc


def get_available_years() -> list[int]:
    """Get sorted list of packaged tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def _parse_rules_file(path: Path) -> TaxRules:
    """Read and validate a rules file without caching."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TaxRulesError(f"Invalid YAML in tax rules file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise TaxRulesError(f"Tax rules file {path} must contain a mapping at the top level")

    try:
        return TaxRules.model_validate(raw)
    except ValidationError as e:
        raise TaxRulesError(f"Invalid tax rules in {path}:\n{e}") from e


@lru_cache(maxsize=None)
def _load_cached(path_str: str) -> TaxRules:
    path = Path(path_str)
    rules = _parse_rules_file(path)
    logger.debug(f"Loaded tax rules {rules.display_label} from {path}")
    return rules


def resolve_rules_path(year: Optional[Union[int, str]] = None,
                       path: Optional[Union[str, Path]] = None) -> Path:
    """Work out which rules file to use.

    Resolution order:
    1. Explicit path argument
    2. TAX_CALC_RULES_PATH / settings.json "rules_file" (only when no year is requested)
    3. Packaged tax_rules/{year}.yaml (latest packaged year when year is None)

    Raises:
        TaxRulesNotFoundError: If the resolved file does not exist
        ConfigNotFoundError: If a configured custom file is missing
    """
    if path is not None:
        rules_path = Path(path).expanduser()
        if not rules_path.exists():
            raise TaxRulesNotFoundError(f"Tax rules file not found: {rules_path}")
        return rules_path

    if year is None:
        custom = get_custom_rules_path()
        if custom is not None:
            return custom

        available = get_available_years()
        if not available:
            raise TaxRulesNotFoundError(f"No tax rules files found in {_get_tax_rules_dir()}")
        year = available[0]

    year_str = str(year)
    if not year_str.isdigit() or len(year_str) != 4:
        raise TaxRulesNotFoundError(f"Invalid tax year '{year}'. Must be 4 digits.")

    rules_path = _get_tax_rules_dir() / f"{year_str}.yaml"
    if not rules_path.exists():
        available = ", ".join(str(y) for y in get_available_years()) or "none"
        raise TaxRulesNotFoundError(
            f"Tax rules file not found for year {year_str}: {rules_path}\n"
            f"Available years: {available}"
        )
    return rules_path


def load_tax_rules(year: Optional[Union[int, str]] = None,
                   path: Optional[Union[str, Path]] = None) -> TaxRules:
    """Load and validate tax rules.

    Args:
        year: Tax year (e.g., 2025 for FY 2025-26). None selects a configured
            custom file, else the latest packaged year.
        path: Explicit rules file, overriding everything else

    Returns:
        Validated, immutable TaxRules (cached per resolved file)
    """
    rules_path = resolve_rules_path(year=year, path=path)
    return _load_cached(str(rules_path.resolve()))


@lru_cache(maxsize=1)
def get_default_rules() -> TaxRules:
    """Latest packaged rule set, resolved once per process.

    Used by the engine when no rules are passed. It never consults
    TAX_CALC_RULES_PATH or settings.json; entry points that honour those
    overrides call load_tax_rules() and pass the result in.
    """
    available = get_available_years()
    if not available:
        raise TaxRulesNotFoundError(f"No tax rules files found in {_get_tax_rules_dir()}")
    return load_tax_rules(year=available[0])


def validate_rules_file(path: Union[str, Path]) -> TaxRules:
    """Validate a rules file, bypassing the cache (for editing workflows)."""
    rules_path = Path(path).expanduser()
    if not rules_path.exists():
        raise TaxRulesNotFoundError(f"Tax rules file not found: {rules_path}")
    return _parse_rules_file(rules_path)


def clear_rules_cache() -> None:
    """Forget previously loaded rule files."""
    _load_cached.cache_clear()
    get_default_rules.cache_clear()
