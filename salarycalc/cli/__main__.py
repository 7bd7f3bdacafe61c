"""Salary Calc CLI - Portuguese net salary and withholding estimates."""

import click

from salarycalc import __version__

from .calc_commands import compare, employed, self_employed
from .settings_commands import settings as settings_group
from .tables_commands import tables as tables_group


@click.group()
@click.version_option(version=__version__, prog_name="salary-calc")
def cli():
    """Salary Calc - Net income estimates for Portugal.

    Compares employment (conta de outrem) and self-employment (recibos
    verdes) using the monthly IRS withholding tables and Social Security
    rates.

    Tax tables are loaded from (in order):

    \b
    1. --tables FILE option
    2. SALARY_CALC_TABLES environment variable
    3. settings.json 'tables_file' key
    4. Built-in tables

    Set LOG_LEVEL=DEBUG to trace the calculation.
    """
    pass


cli.add_command(employed)
cli.add_command(self_employed)
cli.add_command(compare)
cli.add_command(tables_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
