"""airfoildb list / fields commands - inspect a database and the schema."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from airfoildb.catalog.query import load_index, select_entries
from airfoildb.cli.utils import open_catalog, parse_field_assignments
from airfoildb.core.errors import AirfoilDBError
from airfoildb.schema.registry import REGISTRY

# Columns shown in the table view; --json prints every field
_TABLE_FIELDS = ("airfoilname", "re", "ma", "npanels", "ncrit", "diff", "xyfile")


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "-f",
    "--field",
    "criteria",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Only rows where FIELD equals VALUE, repeatable",
)
@click.option("--index-file", default=None, help="Index file name (default: from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_command(
    path: Path, criteria: tuple[str, ...], index_file: str | None, as_json: bool
) -> None:
    """List the entries of the database at PATH."""
    filters = parse_field_assignments(criteria)
    catalog = open_catalog(path, index_file)
    try:
        frame = select_entries(load_index(catalog.database_path, catalog.index_file), **filters)
    except (AirfoilDBError, OSError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(frame.to_json(orient="records"))
        return

    console = Console()
    if frame.empty:
        console.print("[yellow]No entries[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    for field_id in _TABLE_FIELDS:
        table.add_column(REGISTRY.field_to_header[field_id])
    for record in frame.to_dict(orient="records"):
        table.add_row(*(str(record[field_id]) for field_id in _TABLE_FIELDS))
    console.print(table)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def fields_command(as_json: bool) -> None:
    """Show the index columns, in order, with their types and defaults."""
    rows = [
        {
            "field": fdef.field_id,
            "header": fdef.header_label,
            "type": fdef.field_type.value,
            "default": "required" if fdef.required else fdef.default,
            "directory": fdef.subdirectory,
        }
        for fdef in REGISTRY
    ]
    if as_json:
        click.echo(json.dumps(rows))
        return

    table = Table(show_header=True, header_style="bold")
    for column in ("Field", "Header", "Type", "Default", "Directory"):
        table.add_column(column)
    for row in rows:
        table.add_row(*(str(v if v is not None else "") for v in row.values()))
    Console().print(table)
