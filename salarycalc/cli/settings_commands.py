"""Settings CLI commands for Salary Calc.

Manages settings.json: the default tax tables file and report format.
"""

import click
from pathlib import Path

from salarycalc.sdk import (
    SettingsError,
    clear_setting,
    get_setting,
    get_settings_path,
    get_tax_tables_path,
    load_settings,
    set_setting,
)


def _load_or_fail() -> dict:
    try:
        return load_settings()
    except SettingsError as e:
        raise click.ClickException(str(e))


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - tables_file: published tax tables file used by default
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show settings.json contents and the tables file in effect."""
    settings_path = get_settings_path()
    current = _load_or_fail()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if current:
        click.echo("Current settings:")
        for key, value in sorted(current.items()):
            click.echo(f"  {key}: {value}")
    else:
        click.echo("No settings configured (using defaults).")

    tables_path = get_tax_tables_path()
    click.echo()
    click.echo(f"Tax tables in effect: {tables_path or 'built-in'}")


@settings.command("tables-file")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--clear", is_flag=True, help="Forget tables_file and use built-in tables")
def settings_tables_file(path, clear):
    """Set, show or clear the default tax tables file.

    \b
    Examples:
        salary-calc settings tables-file ~/tables/2026.json
        salary-calc settings tables-file --clear
    """
    _load_or_fail()

    if clear:
        if clear_setting("tables_file"):
            click.echo("Cleared tables_file setting. Using built-in tables.")
        else:
            click.echo("tables_file was not set.")
        return

    if path is None:
        current = get_setting("tables_file")
        click.echo(f"Current tables_file: {current}" if current else "No tables_file set. Using built-in tables.")
        return

    tables_path = Path(path).expanduser().resolve()
    if not tables_path.is_file():
        raise click.ClickException(f"Tables file not found: {tables_path}")

    set_setting("tables_file", str(tables_path))
    click.echo(f"Set tables_file: {tables_path}")
    click.echo(f"Saved to: {get_settings_path()}")
    click.echo(f"Check it with: salary-calc tables validate {tables_path}")


@settings.command("output-format")
@click.argument("fmt", type=click.Choice(["text", "json"]))
def settings_output_format(fmt):
    """Set the default report format for calculation commands."""
    _load_or_fail()
    set_setting("default_output_format", fmt)
    click.echo(f"Set default_output_format: {fmt}")
