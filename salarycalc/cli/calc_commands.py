"""Calculation commands: employed, self-employed and compare.

All three take the monthly gross as the only argument. Options map
one-to-one onto SalaryInput fields; anything not given keeps the model
default.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console

from salarycalc.sdk import (
    SalaryInput,
    SettingsError,
    TaxTablesError,
    calculate_salary,
    get_setting,
    load_configured_tax_tables,
    resolve_config,
)
from salarycalc.sdk.taxes.schemas import MARITAL_STATUSES, REGIONS

from .renderers.result_renderer import render_result


# =============================================================================
# Shared options
# =============================================================================


def profile_options(f):
    """Options shared by every calculation command."""
    options = [
        click.option("--dependents", "-d", type=int, default=0, show_default=True,
                     help="Number of dependents (0-10)"),
        click.option("--marital-status", "-m", type=click.Choice(MARITAL_STATUSES),
                     default="single", show_default=True),
        click.option("--region", "-r", type=click.Choice(REGIONS),
                     default="continente", show_default=True),
        click.option("--disability", is_flag=True, help="Worker has a recognized disability"),
        click.option("--tables", "tables_file", type=click.Path(dir_okay=False),
                     help="Tax tables file (JSON or YAML); overrides settings"),
        click.option("--json", "output_json", is_flag=True,
                     help="Output as JSON (default from settings)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def employed_options(f):
    options = [
        click.option("--meal-per-day", type=float, default=0, show_default=True,
                     help="Daily meal allowance"),
        click.option("--meal-type", type=click.Choice(["card", "cash"]),
                     default="card", show_default=True),
        click.option("--months", type=click.Choice(["14", "12"]), default="14", show_default=True,
                     help="Salary installments per year (14 = separate subsidies)"),
        click.option("--irs-jovem-year", type=int, default=None,
                     help="Apply IRS Jovem relief for benefit year N (1-10)"),
        click.option("--other-income", type=float, default=0, show_default=True,
                     help="Monthly overtime, shift pay or bonuses"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def self_employed_options(f):
    options = [
        click.option("--activity", type=click.Choice(["services", "sales"]),
                     default="services", show_default=True),
        click.option("--vat", type=click.Choice(["exempt_art53", "normal"]),
                     default="exempt_art53", show_default=True, help="VAT regime"),
        click.option("--fiscal-regime", type=click.Choice(["simplified", "organized"]),
                     default="simplified", show_default=True),
        click.option("--expenses", type=float, default=0, show_default=True,
                     help="Monthly expenses (organized accounting)"),
        click.option("--first-year", is_flag=True, help="First year of activity (SS exempt)"),
        click.option("--exempt-retention", is_flag=True, help="Exempt from withholding at source"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


# =============================================================================
# Helpers
# =============================================================================


def _employed_fields(meal_per_day, meal_type, months, irs_jovem_year, other_income) -> dict:
    return {
        "meal_allowance_per_day": meal_per_day,
        "meal_allowance_type": meal_type,
        "number_of_months": int(months),
        "irs_jovem": irs_jovem_year is not None,
        "irs_jovem_year": irs_jovem_year,
        "other_taxable_income": other_income,
    }


def _self_employed_fields(activity, vat, fiscal_regime, expenses, first_year, exempt_retention) -> dict:
    return {
        "activity_type": activity,
        "vat_regime": vat,
        "fiscal_regime": fiscal_regime,
        "monthly_expenses": expenses,
        "self_employed_first_year": first_year,
        "self_employed_exempt_retention": exempt_retention,
    }


def _run(
    employment_type: str,
    gross: float,
    dependents: int,
    marital_status: str,
    region: str,
    disability: bool,
    tables_file: Optional[str],
    output_json: bool,
    **fields,
) -> None:
    """Resolve tables, calculate and print the result."""
    try:
        raw_tables = load_configured_tax_tables(tables_file)
        output_format = get_setting("default_output_format", "text")
    except (TaxTablesError, SettingsError) as e:
        raise click.ClickException(str(e))

    config = resolve_config(raw_tables)

    try:
        salary_input = SalaryInput(
            employment_type=employment_type,
            gross_monthly=gross,
            dependents=dependents,
            marital_status=marital_status,
            region=region,
            has_disability=disability,
            **fields,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")

    result = calculate_salary(salary_input, config)

    if output_json or output_format == "json":
        click.echo(result.model_dump_json(indent=2))
        return

    render_result(Console(), result, config)


# =============================================================================
# Commands
# =============================================================================


@click.command("employed")
@click.argument("gross", type=float)
@profile_options
@employed_options
def employed(gross, dependents, marital_status, region, disability, tables_file, output_json,
             meal_per_day, meal_type, months, irs_jovem_year, other_income):
    """Net salary for an employed worker (conta de outrem).

    GROSS is the monthly base salary.

    Examples:
        salary-calc employed 1500
        salary-calc employed 2500 -d 2 -m married_single_holder --meal-per-day 10
        salary-calc employed 1800 --irs-jovem-year 3 --json
    """
    _run(
        "employed", gross, dependents, marital_status, region, disability, tables_file, output_json,
        **_employed_fields(meal_per_day, meal_type, months, irs_jovem_year, other_income),
    )


@click.command("self-employed")
@click.argument("gross", type=float)
@profile_options
@self_employed_options
def self_employed(gross, dependents, marital_status, region, disability, tables_file, output_json,
                  activity, vat, fiscal_regime, expenses, first_year, exempt_retention):
    """Net income for a self-employed worker (recibos verdes).

    GROSS is the monthly invoiced amount (before VAT). Also reports the
    employed gross (14 installments) that yields the same annual net.

    Examples:
        salary-calc self-employed 2500
        salary-calc self-employed 4000 --vat normal --first-year
        salary-calc self-employed 3000 --fiscal-regime organized --expenses 600
    """
    _run(
        "self_employed", gross, dependents, marital_status, region, disability, tables_file, output_json,
        **_self_employed_fields(activity, vat, fiscal_regime, expenses, first_year, exempt_retention),
    )


@click.command("compare")
@click.argument("gross", type=float)
@profile_options
@employed_options
@self_employed_options
def compare(gross, dependents, marital_status, region, disability, tables_file, output_json,
            meal_per_day, meal_type, months, irs_jovem_year, other_income,
            activity, vat, fiscal_regime, expenses, first_year, exempt_retention):
    """Compare employed vs self-employed for the same monthly gross.

    Annual net differences within 10 EUR are reported as equivalent.

    Examples:
        salary-calc compare 2000
        salary-calc compare 3000 --meal-per-day 10 --activity services --json
    """
    _run(
        "compare", gross, dependents, marital_status, region, disability, tables_file, output_json,
        **_employed_fields(meal_per_day, meal_type, months, irs_jovem_year, other_income),
        **_self_employed_fields(activity, vat, fiscal_regime, expenses, first_year, exempt_retention),
    )
