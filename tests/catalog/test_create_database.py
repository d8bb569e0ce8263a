"""Tests for database creation."""

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from airfoildb.catalog.ops import Catalog, create_database
from airfoildb.core.errors import PathConflict

HEADER = (
    "Airfoil,Re,Mach,Panels,Ncrit,xy file,Cl file,Cd file,Cm file,"
    "xupsep file,xlosep file,Differentiator\n"
)


class TestCreateDatabase:
    def test_creates_skeleton_and_header(self, tmp_path: Path) -> None:
        root = tmp_path / "db"

        index_path = create_database(root)

        assert index_path == root / "index.csv"
        assert index_path.read_text() == HEADER
        for subdir in ("xy", "Cl", "Cd", "Cm", "xupsep", "xlosep"):
            assert (root / subdir).is_dir()
            assert not any((root / subdir).iterdir())

    def test_custom_index_file_name(self, tmp_path: Path) -> None:
        index_path = create_database(tmp_path / "db", "polars.csv")

        assert index_path.name == "polars.csv"
        assert index_path.read_text() == HEADER

    def test_creates_missing_parents(self, tmp_path: Path) -> None:
        root = tmp_path / "a" / "b" / "db"

        create_database(root)

        assert (root / "index.csv").is_file()

    def test_logs_creation(self, tmp_path: Path) -> None:
        with capture_logs() as logs:
            create_database(tmp_path / "db")

        assert [e["event"] for e in logs] == ["database_created"]


class TestExistingPath:
    def test_abort_raises_and_leaves_path(self, database: Path) -> None:
        marker = database / "keep.txt"
        marker.write_text("data")

        with pytest.raises(PathConflict) as exc_info:
            create_database(database)

        assert exc_info.value.path == str(database)
        assert marker.read_text() == "data"

    def test_overwrite_replaces_contents(self, database: Path) -> None:
        (database / "Cl" / "old.csv").write_text("alpha,cl\n")

        with capture_logs() as logs:
            create_database(database, on_conflict="overwrite")

        assert not (database / "Cl" / "old.csv").exists()
        assert (database / "index.csv").read_text() == HEADER
        assert [e["event"] for e in logs] == ["database_removed", "database_created"]

    def test_overwrite_replaces_plain_file(self, tmp_path: Path) -> None:
        target = tmp_path / "db"
        target.write_text("not a directory")

        create_database(target, on_conflict="overwrite")

        assert (target / "index.csv").is_file()

    def test_confirm_callback_declines(self, database: Path) -> None:
        asked: list[Path] = []

        def decline(path: Path) -> bool:
            asked.append(path)
            return False

        with pytest.raises(PathConflict):
            Catalog(database).create(decline)

        assert asked == [database]
        assert (database / "index.csv").exists()

    def test_confirm_callback_accepts(self, database: Path) -> None:
        (database / "extra").mkdir()

        Catalog(database).create(lambda path: True)

        assert not (database / "extra").exists()

    def test_unknown_policy_rejected(self, database: Path) -> None:
        with pytest.raises(ValueError, match="Unknown conflict policy"):
            create_database(database, on_conflict="merge")  # type: ignore[arg-type]
