"""airfoildb add / add-polar commands - append entries to a database."""

from pathlib import Path
from typing import Any

import click

from airfoildb.catalog.polar import load_polar_table
from airfoildb.cli.utils import open_catalog, parse_field_assignments
from airfoildb.core.errors import AirfoilDBError


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "-f",
    "--field",
    "fields",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Field value, repeatable (e.g. -f airfoilname=NACA0012 -f xyfile=naca0012.csv)",
)
@click.option("--index-file", default=None, help="Index file name (default: from config)")
@click.option("--check-duplicates", is_flag=True, help="Refuse an entry whose identity exists")
def add_command(
    path: Path, fields: tuple[str, ...], index_file: str | None, check_duplicates: bool
) -> None:
    """Append one entry with the given field values to the database at PATH.

    Curve files are not written; file fields are stored as given.
    """
    values = parse_field_assignments(fields)
    catalog = open_catalog(path, index_file)
    try:
        catalog.add_entry(values, check_duplicates=check_duplicates)
    except (AirfoilDBError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Added entry for {values['airfoilname']} to {catalog.index_path}")


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--airfoil", required=True, help="Airfoil name")
@click.option(
    "--polar",
    "polar_csv",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV with alpha, cl, cd, cm and optionally xsep_up, xsep_lo columns",
)
@click.option(
    "--geometry",
    "geometry_csv",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV with x, y contour columns",
)
@click.option("--re", "reynolds", type=float, required=True, help="Reynolds number")
@click.option("--ma", "mach", type=float, default=0.0, show_default=True, help="Mach number")
@click.option("--npanels", type=int, default=0, show_default=True, help="Panel count")
@click.option("--ncrit", type=int, default=0, show_default=True, help="Ncrit parameter")
@click.option("--diff", type=int, default=None, help="Differentiator (default: 0)")
@click.option("--auto-diff", is_flag=True, help="Use the next unused differentiator")
@click.option("--index-file", default=None, help="Index file name (default: from config)")
def add_polar_command(
    path: Path,
    airfoil: str,
    polar_csv: Path,
    geometry_csv: Path,
    reynolds: float,
    mach: float,
    npanels: int,
    ncrit: int,
    diff: int | None,
    auto_diff: bool,
    index_file: str | None,
) -> None:
    """Write curve files from polar CSVs and append the entry to PATH."""
    if diff is not None and auto_diff:
        raise click.UsageError("--diff and --auto-diff are mutually exclusive")

    try:
        polar = load_polar_table(
            polar_csv,
            geometry_csv,
            reynolds=reynolds,
            mach=mach,
            panel_count=npanels,
            convergence_parameter=ncrit,
        )
    except KeyError as e:
        raise click.ClickException(f"Missing column in polar data: {e}") from e

    catalog = open_catalog(path, index_file)
    provided: dict[str, Any] = {"airfoilname": airfoil}
    try:
        if auto_diff:
            provided["diff"] = catalog.next_differentiator(
                {"airfoilname": airfoil, "re": reynolds, "ma": mach, "npanels": npanels, "ncrit": ncrit}
            )
        elif diff is not None:
            provided["diff"] = diff
        names = catalog.add_entry_from_polar(polar, provided)
    except (AirfoilDBError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Added entry for {airfoil} to {catalog.index_path}")
    for field_id, filename in names.as_fields().items():
        click.echo(f"  {field_id}: {filename}")
