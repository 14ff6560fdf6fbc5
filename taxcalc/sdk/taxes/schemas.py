"""Pydantic schemas for tax rules and computation results.

The rule schemas validate the tax_rules/*.yaml files and provide typed
access to brackets, standard deductions, rebates, and the cess rate.
The result schemas are what the engine and comparator hand back to callers.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class Regime(str, Enum):
    """Tax regime a taxpayer selects."""

    OLD = "old"
    NEW = "new"

    @property
    def display_name(self) -> str:
        return "New" if self is Regime.NEW else "Old"


class TaxBracket(BaseModel):
    """Single slab: income in [lower_bound, upper_bound) taxed at rate percent."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., ge=0)
    upper_bound: Optional[float] = Field(default=None, description="Upper bound (None for the top slab)")
    rate: float = Field(..., ge=0, le=100, description="Marginal rate in percent")

    @property
    def width(self) -> float:
        if self.upper_bound is None:
            return float("inf")
        return self.upper_bound - self.lower_bound


class RebateRule(BaseModel):
    """Section 87A rebate: up to max_rebate when taxable income <= income_threshold."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    income_threshold: float = Field(..., ge=0)
    max_rebate: float = Field(..., ge=0)


class RegimeRules(BaseModel):
    """Standard deduction, slab table and rebate for one regime."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: float = Field(..., ge=0)
    rebate: RebateRule
    brackets: tuple[TaxBracket, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_brackets(self) -> "RegimeRules":
        brackets = self.brackets
        if brackets[0].lower_bound != 0:
            raise ValueError(f"first bracket must start at 0, got {brackets[0].lower_bound}")
        if brackets[-1].upper_bound is not None:
            raise ValueError("last bracket must be unbounded (omit upper_bound)")

        for i, (current, following) in enumerate(zip(brackets, brackets[1:])):
            if current.upper_bound is None:
                raise ValueError(f"bracket {i} is unbounded but is not the last bracket")
            if current.upper_bound <= current.lower_bound:
                raise ValueError(
                    f"bracket {i} upper_bound {current.upper_bound} must exceed "
                    f"lower_bound {current.lower_bound}"
                )
            if current.upper_bound != following.lower_bound:
                raise ValueError(
                    f"brackets {i} and {i + 1} are not contiguous "
                    f"({current.upper_bound} != {following.lower_bound})"
                )
            if following.rate < current.rate:
                raise ValueError(
                    f"bracket {i + 1} rate {following.rate}% is lower than bracket {i} rate {current.rate}%"
                )
        return self


class TaxRules(BaseModel):
    """Complete rule set for a tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    tax_year: int
    label: Optional[str] = None
    cess_rate: float = Field(..., ge=0, le=100, description="Health and education cess in percent")
    regimes: dict[Regime, RegimeRules]

    @model_validator(mode="after")
    def check_regimes(self) -> "TaxRules":
        missing = [r.value for r in Regime if r not in self.regimes]
        if missing:
            raise ValueError(f"missing rules for regime(s): {', '.join(missing)}")
        return self

    @property
    def display_label(self) -> str:
        return self.label or f"FY {self.tax_year}-{(self.tax_year + 1) % 100:02d}"

    def for_regime(self, regime: Regime) -> RegimeRules:
        return self.regimes[regime]


# --- Results ---

class BreakdownLine(BaseModel):
    """Tax attributed to one slab (unrounded)."""
    model_config = ConfigDict(frozen=True)

    bracket_label: str
    rate_percent: float
    tax_amount: float


class TaxCalculationResult(BaseModel):
    """Outcome of a single-regime computation.

    total_tax is rounded to whole rupees; breakdown amounts, cess and rebate
    are left unrounded, so they need not sum exactly to total_tax.
    """
    model_config = ConfigDict(frozen=True)

    regime: Regime
    tax_year: int
    annual_gross_income: float
    standard_deduction: float
    taxable_income: float
    cess: float
    rebate: float
    total_tax: int
    effective_tax_rate_percent: float
    breakdown: tuple[BreakdownLine, ...]
    explanation: str

    @computed_field
    @property
    def annual_take_home(self) -> float:
        return self.annual_gross_income - self.total_tax

    @computed_field
    @property
    def monthly_take_home(self) -> float:
        return self.annual_take_home / 12


class ComparisonResult(BaseModel):
    """Old vs new regime for the same income."""
    model_config = ConfigDict(frozen=True)

    old: TaxCalculationResult
    new: TaxCalculationResult
    savings: int = Field(..., ge=0, description="Absolute difference in total tax")
    recommended_regime: Optional[Regime] = None
    recommendation_text: str
