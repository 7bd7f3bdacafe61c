"""Tax tables CLI commands.

Shows the resolved tax configuration and validates published tables files.
"""

import json
import math

import click
from rich import box
from rich.console import Console
from rich.table import Table

from salarycalc.sdk import (
    SettingsError,
    TaxConfiguration,
    TaxTablesError,
    config_to_published,
    get_tax_tables_path,
    load_configured_tax_tables,
    load_tax_tables,
    resolve_config,
    validate_tax_tables,
)
from salarycalc.sdk.taxes.schemas import MARITAL_STATUSES


@click.group()
def tables():
    """Tax tables (rates, brackets, deductions).

    Tables are resolved from (in order):

    \b
    1. --tables FILE option
    2. SALARY_CALC_TABLES environment variable
    3. settings.json 'tables_file' key (set via 'settings tables-file')
    4. Built-in tables
    """
    pass


@tables.command("show")
@click.option("--tables", "tables_file", type=click.Path(dir_okay=False), help="Tax tables file")
@click.option("--json", "output_json", is_flag=True, help="Output in published tables format")
def tables_show(tables_file, output_json):
    """Show the tax configuration calculations would use."""
    try:
        raw_tables = load_configured_tax_tables(tables_file)
    except (TaxTablesError, SettingsError) as e:
        raise click.ClickException(str(e))

    config = resolve_config(raw_tables)

    if output_json:
        click.echo(json.dumps(config_to_published(config), indent=2, ensure_ascii=False))
        return

    source_path = get_tax_tables_path(tables_file) if raw_tables is not None else None
    _render_config(Console(), config, source_path)


@tables.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def tables_validate(path):
    """Validate a published tables file.

    Exits with status 1 if the file is unreadable or does not match the
    tables schema.
    """
    try:
        data = load_tax_tables(path)
    except TaxTablesError as e:
        click.echo(f"ERROR: {e}", err=True)
        raise SystemExit(1)

    errors = validate_tax_tables(data)
    if errors:
        click.echo(f"{path}: {len(errors)} error(s)")
        for error in errors:
            click.echo(f"  - {error}")
        raise SystemExit(1)

    click.echo(click.style(f"{path}: OK (version {data.get('version')})", fg="green"))


def _render_config(console: Console, config: TaxConfiguration, source_path) -> None:
    origin = str(source_path) if source_path else "built-in"
    console.print(f"[bold]Tax tables {config.version}[/bold] (year {config.year}, {origin})")
    console.print(f"Source: {config.source}")
    console.print(f"Published: {config.published_at}  Updated: {config.updated_at}")
    console.print()

    rates = Table(title="Rates", box=box.ROUNDED, show_header=False)
    rates.add_column("", style="bold")
    rates.add_column("", justify="right")
    rates.add_row("SS employee", _pct(config.ss.employee_rate))
    rates.add_row("SS employer", _pct(config.ss.employer_rate))
    rates.add_row("SS self-employed", _pct(config.ss.self_employed_rate))
    rates.add_row(
        "SS base (services / sales)",
        f"{_pct(config.ss.self_employed_base_services)} / {_pct(config.ss.self_employed_base_sales)}",
    )
    rates.add_row(
        "Meal exempt/day (card / cash)",
        f"€{config.meal.exempt_card:.2f} / €{config.meal.exempt_cash:.2f}",
    )
    rates.add_row("VAT standard rate", _pct(config.vat.standard_rate))
    rates.add_row("VAT exemption threshold", f"€{config.vat.exempt_threshold:,.2f}")
    rates.add_row(
        "Retention (services / sales)",
        f"{_pct(config.irs_retention.services)} / {_pct(config.irs_retention.sales)}",
    )
    rates.add_row(
        "Coefficients (services / sales)",
        f"{config.coefficients.services:g} / {config.coefficients.sales:g}",
    )
    for status in MARITAL_STATUSES:
        rates.add_row(f"Dependent deduction ({status})", f"€{config.dependent_deduction(status):.2f}")
    for region, multiplier in config.regional_multipliers.items():
        rates.add_row(f"Regional multiplier ({region})", f"{multiplier:g}")
    for year, share in sorted(config.irs_jovem_exemption.items()):
        rates.add_row(f"IRS Jovem year {year}", _pct(share))
    console.print(rates)

    for status in MARITAL_STATUSES:
        table = Table(title=f"IRS brackets: {status}", box=box.SIMPLE)
        table.add_column("Up to", justify="right")
        table.add_column("Rate", justify="right")
        table.add_column("Deduction", justify="right")
        for bracket in config.brackets_for(status):
            up_to = "-" if math.isinf(bracket.up_to) else f"€{bracket.up_to:,.2f}"
            table.add_row(up_to, f"{bracket.rate * 100:.2f}%", f"€{bracket.deduction:,.2f}")
        console.print(table)


def _pct(rate: float) -> str:
    return f"{rate * 100:.2f}%"
