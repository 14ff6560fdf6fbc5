"""Tax Calc MCP Server - FastMCP implementation for tax computation tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from taxcalc.sdk import (
    ConfigNotFoundError,
    InvalidInputError,
    TaxRulesError,
    TaxRulesNotFoundError,
    compare_regimes as sdk_compare_regimes,
    compute_tax,
    configure_logging,
    format_tax_context,
    get_available_years,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("tax-calc")

# json.JSONDecodeError covers a corrupt settings.json
_RULES_ERRORS = (
    TaxRulesNotFoundError,
    ConfigNotFoundError,
    TaxRulesError,
    json.JSONDecodeError,
)


# --- Tools ---

@mcp.tool()
async def calculate_tax(
    annual_income: float = Field(description="Annual CTC (gross compensation) in rupees"),
    regime: str = Field(default="new", description="Tax regime: 'old' or 'new'"),
) -> dict[str, Any]:
    """Calculate Indian income tax for one regime. Returns taxable income, total tax (incl. 4% cess, after 87A rebate), effective rate, slab breakdown and a text explanation."""
    try:
        result = compute_tax(annual_income, regime, rules=load_tax_rules())
        return result.model_dump(mode="json")
    except InvalidInputError as e:
        return {"error": str(e), "result": None}
    except _RULES_ERRORS as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def compare_regimes(
    annual_income: float = Field(description="Annual CTC (gross compensation) in rupees"),
) -> dict[str, Any]:
    """Compare old and new regimes for the same income. Returns both results, absolute savings and a recommendation."""
    try:
        comparison = sdk_compare_regimes(annual_income, rules=load_tax_rules())
        return comparison.model_dump(mode="json")
    except InvalidInputError as e:
        return {"error": str(e), "comparison": None}
    except _RULES_ERRORS as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "comparison": None}


@mcp.tool()
async def tax_context(
    annual_income: float = Field(description="Annual CTC (gross compensation) in rupees"),
    regime: str = Field(default="new", description="Tax regime: 'old' or 'new'"),
) -> dict[str, Any]:
    """Get a short text block summarising the user's tax position, for use as assistant context."""
    try:
        result = compute_tax(annual_income, regime, rules=load_tax_rules())
        return {"context": format_tax_context(result)}
    except InvalidInputError as e:
        return {"error": str(e), "context": None}
    except _RULES_ERRORS as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "context": None}


@mcp.tool()
async def get_tax_rules(
    year: str | None = Field(default=None, description="Tax year, e.g. '2025' for FY 2025-26 (default: latest)"),
) -> dict[str, Any]:
    """Get slab tables, standard deductions, rebate thresholds and cess rate for a tax year."""
    try:
        return load_tax_rules(year=year).model_dump(mode="json")
    except _RULES_ERRORS as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "rules": None}


# --- Resources ---

@mcp.resource("taxcalc://rules/years")
async def list_years_resource() -> str:
    """List packaged tax rule years."""
    return json.dumps({"years": get_available_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
