"""Salary Calc MCP Server - FastMCP implementation for salary calculation tools."""

import logging
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from salarycalc.sdk import (
    SalaryInput,
    SettingsError,
    TaxTablesError,
    calculate_salary,
    config_to_published,
    get_tax_tables_path,
    load_configured_tax_tables,
    resolve_config,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("salary-calc")


# --- Tools ---

@mcp.tool(name="calculate_salary")
async def calculate_salary_tool(
    gross_monthly: float = Field(description="Gross monthly amount in EUR (salary, or invoiced amount for self-employed)"),
    employment_type: Literal["employed", "self_employed", "compare"] = Field(
        default="employed", description="'employed', 'self_employed', or 'compare' for both side by side"
    ),
    dependents: int = Field(default=0, description="Number of dependents (0-10)"),
    marital_status: Literal["single", "married_single_holder", "married_two_holders"] = Field(default="single"),
    region: Literal["continente", "acores", "madeira"] = Field(default="continente"),
    has_disability: bool = Field(default=False),
    meal_allowance_per_day: float = Field(default=0, description="Daily meal allowance (employed)"),
    meal_allowance_type: Literal["card", "cash"] = Field(default="card"),
    number_of_months: Literal[12, 14] = Field(default=14, description="Salary installments per year (employed)"),
    irs_jovem_year: int | None = Field(default=None, description="IRS Jovem benefit year 1-10; omit for no relief"),
    other_taxable_income: float = Field(default=0, description="Monthly overtime/bonuses (employed)"),
    activity_type: Literal["services", "sales"] = Field(default="services", description="Self-employed activity"),
    vat_regime: Literal["exempt_art53", "normal"] = Field(default="exempt_art53"),
    fiscal_regime: Literal["simplified", "organized"] = Field(default="simplified"),
    monthly_expenses: float = Field(default=0, description="Monthly expenses (organized accounting)"),
    self_employed_first_year: bool = Field(default=False, description="First year of activity (SS exempt)"),
    self_employed_exempt_retention: bool = Field(default=False, description="Exempt from withholding at source"),
    tables_file: str | None = Field(default=None, description="Path to a tax tables file (default: configured or built-in)"),
) -> dict[str, Any]:
    """Calculate net income for a Portuguese worker. Returns the full breakdown (IRS, Social Security, VAT, net, annual totals, employer cost or employed-equivalent gross)."""
    try:
        salary_input = SalaryInput(
            employment_type=employment_type,
            gross_monthly=gross_monthly,
            dependents=dependents,
            marital_status=marital_status,
            region=region,
            has_disability=has_disability,
            meal_allowance_per_day=meal_allowance_per_day,
            meal_allowance_type=meal_allowance_type,
            number_of_months=number_of_months,
            irs_jovem=irs_jovem_year is not None,
            irs_jovem_year=irs_jovem_year,
            other_taxable_income=other_taxable_income,
            activity_type=activity_type,
            vat_regime=vat_regime,
            fiscal_regime=fiscal_regime,
            monthly_expenses=monthly_expenses,
            self_employed_first_year=self_employed_first_year,
            self_employed_exempt_retention=self_employed_exempt_retention,
        )
        config = resolve_config(load_configured_tax_tables(tables_file))
        result = calculate_salary(salary_input, config)
        return {"result": result.model_dump(), "tables_version": config.version}

    except (TaxTablesError, SettingsError, ValidationError) as e:
        logger.error(f"Error calculating salary: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def get_tax_tables(
    tables_file: str | None = Field(default=None, description="Path to a tax tables file (default: configured or built-in)"),
) -> dict[str, Any]:
    """Get the tax tables in effect: SS rates, meal allowance limits, VAT, IRS brackets, dependent deductions, regional multipliers."""
    try:
        raw_tables = load_configured_tax_tables(tables_file)
    except (TaxTablesError, SettingsError) as e:
        logger.error(f"Error loading tax tables: {e}")
        return {"error": str(e), "tables": None}

    config = resolve_config(raw_tables)
    source_path = get_tax_tables_path(tables_file) if raw_tables is not None else None
    return {
        "tables": config_to_published(config),
        "source_file": str(source_path) if source_path else None,
    }


def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
