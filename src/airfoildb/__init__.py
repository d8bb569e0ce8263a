"""airfoildb - flat-file catalog of airfoil geometry and polar data."""

from airfoildb.catalog import (
    Catalog,
    EntryFileNames,
    PolarHandle,
    TabulatedPolar,
    add_entry,
    add_entry_from_polar,
    create_database,
    load_index,
)
from airfoildb.schema import REGISTRY, FieldValue

__version__ = "0.1.0"

__all__ = [
    "REGISTRY",
    "Catalog",
    "EntryFileNames",
    "FieldValue",
    "PolarHandle",
    "TabulatedPolar",
    "add_entry",
    "add_entry_from_polar",
    "create_database",
    "load_index",
]
