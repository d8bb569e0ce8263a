"""Tests for config/models.py."""

import pytest
from pydantic import ValidationError

from airfoildb.config.constants import CATEGORY_DIRS, DEFAULT_INDEX_FILE
from airfoildb.config.models import AirfoilDBConfig, CatalogConfig, LoggingConfig


class TestCatalogConfig:
    """CatalogConfig defaults and validators."""

    def test_defaults(self) -> None:
        config = CatalogConfig()

        assert config.database_path == "."
        assert config.index_file == DEFAULT_INDEX_FILE == "index.csv"
        assert config.extension == ".csv"
        assert config.decimal_replacement == "p"
        assert config.warn_on_overwrite is True

    @pytest.mark.parametrize("extension", [".dat", ".txt", ".csv"])
    def test_extension_with_dot_accepted(self, extension: str) -> None:
        assert CatalogConfig(extension=extension).extension == extension

    def test_extension_without_dot_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must start with"):
            CatalogConfig(extension="csv")

    @pytest.mark.parametrize("replacement", [".", "", "a/b", ",", " "])
    def test_unsafe_decimal_replacement_rejected(self, replacement: str) -> None:
        with pytest.raises(ValidationError):
            CatalogConfig(decimal_replacement=replacement)

    @pytest.mark.parametrize("index_file", ["sub/index.csv", "", "../index.csv"])
    def test_index_file_must_be_bare_name(self, index_file: str) -> None:
        with pytest.raises(ValidationError, match="bare file name"):
            CatalogConfig(index_file=index_file)


class TestAirfoilDBConfig:
    def test_sections_default(self) -> None:
        config = AirfoilDBConfig()

        assert isinstance(config.logging, LoggingConfig)
        assert config.logging.level == "INFO"
        assert config.catalog == CatalogConfig()


def test_category_dirs_are_fixed() -> None:
    assert CATEGORY_DIRS == ("xy", "Cl", "Cd", "Cm", "xupsep", "xlosep")
