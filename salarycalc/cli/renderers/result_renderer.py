"""Rich renderer for salary calculation results.

Transforms SDK result models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from salarycalc.sdk import (
    ComparisonResult,
    EmployedResult,
    SelfEmployedResult,
    TaxConfiguration,
)


def render_result(console: Console, result, config: TaxConfiguration) -> None:
    """Render any calculation result.

    Args:
        console: Rich Console instance
        result: EmployedResult, SelfEmployedResult or ComparisonResult
        config: Configuration the result was computed with (for the footer)
    """
    if isinstance(result, ComparisonResult):
        render_comparison(console, result)
    elif isinstance(result, SelfEmployedResult):
        render_self_employed(console, result)
    else:
        render_employed(console, result)

    console.print(f"[dim]Tax tables {config.version} ({config.source})[/dim]")


def render_employed(console: Console, result: EmployedResult) -> None:
    """Render the employed breakdown."""
    table = Table(title="Employed (conta de outrem)", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Monthly", justify="right", min_width=12)
    table.add_column("Annual", justify="right", min_width=12)

    table.add_row("[bold]EARNINGS[/bold]", "", "")
    table.add_row("  Base salary", _fmt(result.gross_monthly), _fmt(result.gross_annual))
    if result.other_taxable_income > 0:
        table.add_row("  Other taxable income", _fmt(result.other_taxable_income), "")
    if result.meal_allowance_monthly > 0:
        table.add_row("  Meal allowance", _fmt(result.meal_allowance_monthly), _fmt(result.meal_allowance_annual))
        table.add_row("  [dim]of which exempt[/dim]", _fmt(result.meal_exempt_monthly), _fmt(result.meal_exempt_annual))
        table.add_row("  [dim]of which taxable[/dim]", _fmt(result.meal_taxable_monthly), _fmt(result.meal_taxable_annual))
    table.add_row(
        "Taxable gross",
        _fmt(result.taxable_gross_monthly),
        _fmt(result.taxable_gross_annual),
        style="dim",
    )
    table.add_row("", "", "")

    table.add_row("[bold]DEDUCTIONS[/bold]", "", "")
    table.add_row(f"  Social Security ({_pct(result.ss_rate)})", _fmt(result.ss_employee), _fmt(result.ss_annual_employee))
    table.add_row(f"  IRS withholding ({_pct(result.irs_rate)})", _fmt(result.irs_withholding), _fmt(result.irs_annual))
    if result.irs_jovem_discount > 0:
        table.add_row("  [dim]IRS Jovem relief[/dim]", f"[dim]{_fmt(result.irs_jovem_discount)}[/dim]", "")
    table.add_row("", "", "")

    table.add_row("Net salary", _fmt(result.net_monthly), _fmt(result.net_annual))
    table.add_row(
        "[bold green]TOTAL NET[/bold green]",
        f"[bold green]{_fmt(result.total_net_monthly)}[/bold green]",
        f"[bold green]{_fmt(result.total_net_annual)}[/bold green]",
    )
    table.add_row("", "", "")

    table.add_row("[bold]EMPLOYER[/bold]", "", "")
    table.add_row("  Social Security", _fmt(result.ss_employer), _fmt(result.ss_employer_annual))
    table.add_row("  Total cost", "", _fmt(result.total_employer_cost_annual))

    console.print(table)
    console.print(
        f"Effective IRS rate: {_pct(result.effective_irs_rate)}  "
        f"Effective total rate: {_pct(result.effective_total_rate)}  "
        f"({result.number_of_months} installments)"
    )


def render_self_employed(console: Console, result: SelfEmployedResult) -> None:
    """Render the self-employed breakdown."""
    table = Table(title="Self-employed (trabalhador independente)", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Monthly", justify="right", min_width=12)
    table.add_column("Annual", justify="right", min_width=12)

    table.add_row("[bold]INVOICED[/bold]", "", "")
    table.add_row("  Gross", _fmt(result.gross_monthly), _fmt(result.gross_annual))
    if result.vat_rate > 0:
        table.add_row(f"  VAT collected ({_pct(result.vat_rate)})", _fmt(result.vat_collected), _fmt(result.vat_annual))
    table.add_row("", "", "")

    table.add_row("[bold]DEDUCTIONS[/bold]", "", "")
    table.add_row(
        f"  IRS at source ({_pct(result.irs_withholding_rate)})",
        _fmt(result.irs_withholding),
        _fmt(result.irs_annual),
    )
    table.add_row(
        f"  Social Security ({_pct(result.ss_rate)} of {_fmt(result.ss_base)})",
        _fmt(result.ss_contribution),
        _fmt(result.ss_annual),
    )
    table.add_row("", "", "")

    table.add_row(
        "[bold green]NET[/bold green]",
        f"[bold green]{_fmt(result.net_monthly)}[/bold green]",
        f"[bold green]{_fmt(result.net_annual)}[/bold green]",
    )
    table.add_row("", "", "")
    table.add_row(
        f"Taxable income (coef. {result.coefficient:g})",
        "",
        _fmt(result.taxable_income),
        style="dim",
    )
    if result.annual_expenses > 0:
        table.add_row("Expenses", _fmt(result.monthly_expenses), _fmt(result.annual_expenses), style="dim")

    console.print(table)
    console.print(
        f"Effective IRS rate: {_pct(result.effective_irs_rate)}  "
        f"Effective total rate: {_pct(result.effective_total_rate)}"
    )
    console.print(f"Equivalent employed gross (14 installments): {_fmt(result.equivalent_gross_employed)}/month")

    if result.vat_threshold_exceeded and result.vat_rate == 0:
        console.print(Panel(
            "[yellow]Annual gross is above the Art. 53 VAT exemption threshold.[/yellow]",
            title="Note",
            border_style="yellow",
        ))


def render_comparison(console: Console, result: ComparisonResult) -> None:
    """Render a side-by-side comparison."""
    employed = result.employed
    self_employed = result.self_employed
    diff = result.difference

    table = Table(title="Employed vs Self-employed", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=24)
    table.add_column("Employed", justify="right", min_width=12)
    table.add_column("Self-employed", justify="right", min_width=12)

    table.add_row("Gross (monthly)", _fmt(employed.gross_monthly), _fmt(self_employed.gross_monthly))
    table.add_row("Gross (annual)", _fmt(employed.gross_annual), _fmt(self_employed.gross_annual))
    table.add_row("IRS (monthly)", _fmt(employed.irs_withholding), _fmt(self_employed.irs_withholding))
    table.add_row("SS (monthly)", _fmt(employed.ss_employee), _fmt(self_employed.ss_contribution))
    table.add_row("Total net (monthly)", _fmt(employed.total_net_monthly), _fmt(self_employed.total_net_monthly))
    table.add_row(
        "[bold]Total net (annual)[/bold]",
        f"[bold]{_fmt(employed.total_net_annual)}[/bold]",
        f"[bold]{_fmt(self_employed.total_net_annual)}[/bold]",
    )
    table.add_row("Effective total rate", _pct(employed.effective_total_rate), _pct(self_employed.effective_total_rate))

    console.print(table)

    labels = {
        "employed": "[green]Employed[/green]",
        "self_employed": "[green]Self-employed[/green]",
        "equal": "[yellow]Equivalent[/yellow]",
    }
    console.print(
        f"Difference (employed - self-employed): {_fmt(diff.monthly_net)}/month, "
        f"{_fmt(diff.annual_net)}/year"
    )
    console.print(f"Better option: {labels[diff.better_option]}")


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"€{amount:,.2f}"


def _pct(rate: float) -> str:
    return f"{rate * 100:.1f}%"
