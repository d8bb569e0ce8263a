"""CLI utilities."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import click

from airfoildb.catalog.ops import Catalog
from airfoildb.config.loader import load_config
from airfoildb.core.errors import AirfoilDBError
from airfoildb.schema.registry import REGISTRY, FieldType

_TRUE = {"true", "yes", "1"}
_FALSE = {"false", "no", "0"}


def parse_field_value(field_id: str, text: str) -> Any:
    """Convert command-line text to the field's declared Python type.

    Raises:
        click.BadParameter: Unknown field or text that does not parse.
    """
    if field_id not in REGISTRY:
        raise click.BadParameter(f"unknown field '{field_id}'", param_hint="--field")
    field_type = REGISTRY[field_id].field_type
    try:
        if field_type is FieldType.INTEGER:
            return int(text)
        if field_type is FieldType.REAL:
            # Integers are valid reals and keep their integer spelling in the index
            try:
                return int(text)
            except ValueError:
                return float(text)
        if field_type is FieldType.BOOLEAN:
            lowered = text.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(text)
    except ValueError:
        raise click.BadParameter(
            f"'{text}' is not a valid {field_type.value} for field '{field_id}'",
            param_hint="--field",
        ) from None
    return text


def parse_field_assignments(assignments: Iterable[str]) -> dict[str, Any]:
    """Parse repeated ``field=value`` options into an entry mapping."""
    values: dict[str, Any] = {}
    for item in assignments:
        field_id, sep, text = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected field=value, got '{item}'", param_hint="--field")
        values[field_id.strip()] = parse_field_value(field_id.strip(), text)
    return values


def open_catalog(path: Path, index_file: str | None = None) -> Catalog:
    """Catalog for ``path`` configured from its airfoildb.yaml and the environment."""
    try:
        config = load_config(path)
    except AirfoilDBError as e:
        raise click.ClickException(str(e)) from e
    catalog = Catalog.from_config(config.catalog, path)
    if index_file:
        catalog.index_file = index_file
    return catalog
