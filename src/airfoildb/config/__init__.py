"""Config module exports."""

from airfoildb.config.loader import load_config
from airfoildb.config.models import (
    AirfoilDBConfig,
    CatalogConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "AirfoilDBConfig",
    "CatalogConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
