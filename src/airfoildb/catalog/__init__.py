"""Catalog module - database creation, entry submission and queries."""

from airfoildb.catalog.naming import EntryFileNames, derive_file_names
from airfoildb.catalog.ops import (
    Catalog,
    ConflictPolicy,
    SubmissionStage,
    add_entry,
    add_entry_from_polar,
    create_database,
    find_duplicates,
    identity_key,
    next_differentiator,
)
from airfoildb.catalog.polar import PolarHandle, TabulatedPolar, load_polar_table
from airfoildb.catalog.query import (
    entry_curves,
    load_index,
    read_curve,
    read_index_text,
    select_entries,
)

__all__ = [
    "Catalog",
    "ConflictPolicy",
    "EntryFileNames",
    "PolarHandle",
    "SubmissionStage",
    "TabulatedPolar",
    "add_entry",
    "add_entry_from_polar",
    "create_database",
    "derive_file_names",
    "entry_curves",
    "find_duplicates",
    "identity_key",
    "load_index",
    "load_polar_table",
    "next_differentiator",
    "read_curve",
    "read_index_text",
    "select_entries",
]
