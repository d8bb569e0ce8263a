"""Read-only query interface over the index and curve files.

Nothing here writes to the database; visualization and analysis code should
depend on this module rather than on the write path in ops.py.
"""

from __future__ import annotations

import csv
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from airfoildb.config.constants import DEFAULT_INDEX_FILE, DELIMITER, LINE_TERMINATOR
from airfoildb.core.errors import UnknownField
from airfoildb.schema.registry import REGISTRY, FieldType


def read_index_text(
    database_path: Path | str, index_file_name: str = DEFAULT_INDEX_FILE
) -> pd.DataFrame:
    """Read the index with field-id columns and every cell kept as its raw text.

    Cells are written unquoted, so quote characters are read literally. An
    omitted file field is "", not NaN. Columns the registry does not know
    keep their header label.
    """
    path = Path(database_path) / index_file_name
    frame = pd.read_csv(
        path,
        sep=DELIMITER,
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        lineterminator=LINE_TERMINATOR,
    )
    return frame.rename(columns=dict(REGISTRY.header_to_field))


def load_index(database_path: Path | str, index_file_name: str = DEFAULT_INDEX_FILE) -> pd.DataFrame:
    """Read the index into a DataFrame with field-id columns and registry dtypes."""
    frame = read_index_text(database_path, index_file_name)

    for fdef in REGISTRY:
        if fdef.field_id not in frame:
            continue
        column = frame[fdef.field_id]
        if fdef.field_type is FieldType.REAL:
            frame[fdef.field_id] = pd.to_numeric(column).astype(float)
        elif fdef.field_type is FieldType.INTEGER:
            frame[fdef.field_id] = pd.to_numeric(column).astype("int64")
        elif fdef.field_type is FieldType.BOOLEAN:
            frame[fdef.field_id] = column.str.lower() == "true"
    return frame


def select_entries(frame: pd.DataFrame, **criteria: Any) -> pd.DataFrame:
    """Rows of ``frame`` equal to every ``field_id=value`` criterion."""
    mask = pd.Series(True, index=frame.index)
    for field_id, value in criteria.items():
        if field_id not in REGISTRY:
            raise UnknownField.for_field(field_id)
        mask &= frame[field_id] == value
    return frame[mask]


def read_curve(database_path: Path | str, field_id: str, filename: str) -> pd.DataFrame:
    """Read one curve file from the subdirectory that ``field_id`` stores into."""
    subdir = REGISTRY.field_to_subdirectory.get(field_id)
    if subdir is None:
        raise UnknownField.for_field(field_id)
    return pd.read_csv(Path(database_path) / subdir / filename, sep=DELIMITER)


def entry_curves(database_path: Path | str, row: Mapping[str, Any]) -> dict[str, pd.DataFrame]:
    """Curve data for every file field an index row fills in."""
    return {
        field_id: read_curve(database_path, field_id, row[field_id])
        for field_id in REGISTRY.file_fields
        if row.get(field_id)
    }
