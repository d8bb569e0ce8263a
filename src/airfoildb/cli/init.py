"""airfoildb init command - create a new database."""

from pathlib import Path

import click

from airfoildb.cli.utils import open_catalog
from airfoildb.core.errors import PathConflict


def _confirm_removal(path: Path) -> bool:
    return click.confirm(f"Directory {path} already exists. Remove?", default=False)


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--index-file", default=None, help="Index file name (default: from config)")
@click.option("--force", is_flag=True, help="Remove an existing PATH without asking")
def init_command(path: Path, index_file: str | None, force: bool) -> None:
    """Create a new airfoil database at PATH.

    Creates the xy, Cl, Cd, Cm, xupsep and xlosep subdirectories and a
    header-only index file. An existing PATH is removed only after
    confirmation (or with --force).
    """
    catalog = open_catalog(path, index_file)
    try:
        index_path = catalog.create("overwrite" if force else _confirm_removal)
    except PathConflict as e:
        raise click.ClickException(f"{e.message}. Nothing was changed.") from e

    click.echo(f"Created database: {index_path}")
