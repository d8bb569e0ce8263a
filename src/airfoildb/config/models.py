"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (AIRFOILDB__SECTION__KEY)
3. Database YAML (<database>/airfoildb.yaml)
4. Global YAML (~/.config/airfoildb/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    AIRFOILDB__<SECTION>__<KEY>=<VALUE>

Examples:
    AIRFOILDB__LOGGING__LEVEL=DEBUG
    AIRFOILDB__CATALOG__INDEX_FILE=polars.csv
    AIRFOILDB__CATALOG__WARN_ON_OVERWRITE=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from airfoildb.config.constants import (
    DEFAULT_DECIMAL_REPLACEMENT,
    DEFAULT_EXTENSION,
    DEFAULT_INDEX_FILE,
    DELIMITER,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        AIRFOILDB__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also logs every submission stage.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CatalogConfig(BaseModel):
    """Catalog layout and naming options.

    Env vars:
        AIRFOILDB__CATALOG__DATABASE_PATH: Default database root
        AIRFOILDB__CATALOG__INDEX_FILE: Index file name inside the root
        AIRFOILDB__CATALOG__EXTENSION: Extension of derived curve files
        AIRFOILDB__CATALOG__DECIMAL_REPLACEMENT: Substitute for '.' in names
        AIRFOILDB__CATALOG__WARN_ON_OVERWRITE: Warn when a curve file is replaced
    """

    database_path: str = Field(
        default=".",
        description="Database root used when a command is given no path.",
    )
    index_file: str = Field(
        default=DEFAULT_INDEX_FILE,
        description="Index file name. Must be a bare file name inside the database root.",
    )
    extension: str = Field(
        default=DEFAULT_EXTENSION,
        description="Extension of derived curve-data files, including the dot.",
    )
    decimal_replacement: str = Field(
        default=DEFAULT_DECIMAL_REPLACEMENT,
        description="Replaces '.' in Mach, Ncrit, panel and differentiator name segments.",
    )
    warn_on_overwrite: bool = Field(
        default=True,
        description="Log a warning when a derived curve file replaces an existing one.",
    )

    @field_validator("index_file")
    @classmethod
    def validate_index_file(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"Index file must be a bare file name: {v!r}")
        return v

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        if not v.startswith("."):
            raise ValueError(f"Extension must start with '.', got {v!r}")
        return v

    @field_validator("decimal_replacement")
    @classmethod
    def validate_decimal_replacement(cls, v: str) -> str:
        forbidden = {".", "/", "\\", DELIMITER}
        if not v or any(ch in forbidden or ch.isspace() for ch in v):
            raise ValueError(f"Decimal replacement must be filename-safe and not '.', got {v!r}")
        return v


class AirfoilDBConfig(BaseModel):
    """Root configuration model (for type hints)."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
