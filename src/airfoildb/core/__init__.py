"""Core module exports."""

from airfoildb.core.errors import (
    AirfoilDBError,
    ConfigError,
    DuplicateEntry,
    EntryError,
    ErrorCode,
    InvalidValue,
    MissingRequiredField,
    PathConflict,
    SchemaError,
    TypeMismatch,
    UnknownField,
)
from airfoildb.core.logging import configure_logging, get_log_file_path

__all__ = [
    # Errors
    "AirfoilDBError",
    "ConfigError",
    "DuplicateEntry",
    "EntryError",
    "ErrorCode",
    "InvalidValue",
    "MissingRequiredField",
    "PathConflict",
    "SchemaError",
    "TypeMismatch",
    "UnknownField",
    # Logging
    "configure_logging",
    "get_log_file_path",
]
