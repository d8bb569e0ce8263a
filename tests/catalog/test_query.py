"""Tests for the read-only query interface."""

from pathlib import Path

import pytest

from airfoildb.catalog.ops import Catalog, add_entry, add_entry_from_polar
from airfoildb.catalog.polar import TabulatedPolar
from airfoildb.catalog.query import entry_curves, load_index, read_curve, select_entries
from airfoildb.core.errors import UnknownField


@pytest.fixture
def populated(database: Path, polar: TabulatedPolar) -> Path:
    add_entry(database, "index.csv", {"airfoilname": "E387", "xyfile": "e387.csv", "re": 200000})
    add_entry_from_polar(database, polar, {"airfoilname": "NACA0012"})
    return database


class TestLoadIndex:
    def test_empty_index(self, database: Path) -> None:
        frame = load_index(database)

        assert frame.empty
        assert list(frame.columns)[0] == "airfoilname"

    def test_columns_are_field_ids_with_registry_types(self, populated: Path) -> None:
        frame = load_index(populated)

        assert list(frame["airfoilname"]) == ["E387", "NACA0012"]
        assert list(frame["re"]) == [200000.0, 999999.2]
        assert frame["npanels"].dtype == "int64"
        assert list(frame["npanels"]) == [0, 160]
        assert list(frame["clfile"])[0] == ""

    def test_catalog_entries_uses_index_file(self, populated: Path) -> None:
        assert len(Catalog(populated).entries()) == 2

    def test_missing_index(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_index(tmp_path)


class TestSelectEntries:
    def test_filters_on_every_criterion(self, populated: Path) -> None:
        frame = load_index(populated)

        selected = select_entries(frame, airfoilname="NACA0012", npanels=160)

        assert list(selected["airfoilname"]) == ["NACA0012"]
        assert select_entries(frame, airfoilname="NACA0012", npanels=80).empty

    def test_no_criteria_returns_all(self, populated: Path) -> None:
        assert len(select_entries(load_index(populated))) == 2

    def test_unknown_field(self, populated: Path) -> None:
        with pytest.raises(UnknownField):
            select_entries(load_index(populated), deg=4)


class TestCurves:
    def test_read_curve(self, populated: Path) -> None:
        row = select_entries(load_index(populated), airfoilname="NACA0012").iloc[0]

        curve = read_curve(populated, "clfile", row["clfile"])

        assert list(curve.columns) == ["alpha", "cl"]
        assert list(curve["cl"]) == [-0.22, 0.0, 0.22]

    def test_read_curve_rejects_non_file_field(self, populated: Path) -> None:
        with pytest.raises(UnknownField):
            read_curve(populated, "re", "x.csv")

    def test_entry_curves_skips_empty_file_fields(self, populated: Path) -> None:
        frame = load_index(populated)
        naca = select_entries(frame, airfoilname="NACA0012").iloc[0].to_dict()

        curves = entry_curves(populated, naca)

        assert set(curves) == {"xyfile", "clfile", "cdfile", "cmfile", "xupsepfile", "xlosepfile"}
        assert list(curves["xyfile"].columns) == ["x", "y"]
