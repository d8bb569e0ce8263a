"""airfoildb CLI - airfoildb command."""

import click

from airfoildb.cli.add import add_command, add_polar_command
from airfoildb.cli.init import init_command
from airfoildb.cli.list import fields_command, list_command
from airfoildb.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="airfoildb")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """airfoildb - flat-file catalog of airfoil geometry and polars."""
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(init_command, name="init")
cli.add_command(add_command, name="add")
cli.add_command(add_polar_command, name="add-polar")
cli.add_command(list_command, name="list")
cli.add_command(fields_command, name="fields")


if __name__ == "__main__":
    cli()
