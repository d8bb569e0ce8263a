"""Tests for the airfoildb commands."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from airfoildb.cli.main import cli

runner = CliRunner()


@pytest.fixture
def polar_files(tmp_path: Path) -> tuple[Path, Path]:
    polar_csv = tmp_path / "polar.csv"
    polar_csv.write_text("alpha,cl,cd,cm\n-2.0,-0.22,0.0061,0.001\n2.0,0.22,0.0061,-0.001\n")
    geometry_csv = tmp_path / "geometry.csv"
    geometry_csv.write_text("x,y\n1.0,0.0\n0.0,0.0\n1.0,0.0\n")
    return polar_csv, geometry_csv


class TestInitCommand:
    def test_given_new_path_when_init_then_creates_database(self, tmp_path: Path) -> None:
        # Given
        root = tmp_path / "db"

        # When
        result = runner.invoke(cli, ["init", str(root)])

        # Then
        assert result.exit_code == 0, result.output
        assert "Created database" in result.output
        assert (root / "index.csv").read_text().startswith("Airfoil,Re,")
        assert (root / "xlosep").is_dir()

    def test_given_existing_path_when_declined_then_nothing_changes(self, database: Path) -> None:
        marker = database / "Cl" / "keep.csv"
        marker.write_text("alpha,cl\n")

        result = runner.invoke(cli, ["init", str(database)], input="n\n")

        assert result.exit_code == 1
        assert "Nothing was changed" in result.output
        assert marker.exists()

    def test_given_existing_path_when_confirmed_then_recreated(self, database: Path) -> None:
        marker = database / "Cl" / "old.csv"
        marker.write_text("alpha,cl\n")

        result = runner.invoke(cli, ["init", str(database)], input="y\n")

        assert result.exit_code == 0, result.output
        assert not marker.exists()

    def test_given_force_when_init_then_no_prompt(self, database: Path) -> None:
        result = runner.invoke(cli, ["init", str(database), "--force"])

        assert result.exit_code == 0, result.output
        assert "Remove?" not in result.output

    def test_given_index_file_option_when_init_then_uses_name(self, tmp_path: Path) -> None:
        root = tmp_path / "db"

        result = runner.invoke(cli, ["init", str(root), "--index-file", "polars.csv"])

        assert result.exit_code == 0, result.output
        assert (root / "polars.csv").is_file()

    def test_given_database_config_when_init_then_index_name_from_config(
        self, tmp_path: Path
    ) -> None:
        root = tmp_path / "db"
        root.mkdir()
        (root / "airfoildb.yaml").write_text("catalog:\n  index_file: configured.csv\n")

        # Recreating removes the yaml, but the name was already resolved
        result = runner.invoke(cli, ["init", str(root), "--force"])

        assert result.exit_code == 0, result.output
        assert (root / "configured.csv").is_file()


class TestAddCommand:
    def test_given_fields_when_add_then_row_appended(self, database: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "add",
                str(database),
                "-f",
                "airfoilname=NACA0012",
                "-f",
                "xyfile=naca0012.csv",
                "-f",
                "re=1000000",
                "-f",
                "ma=0.1",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Added entry for NACA0012" in result.output
        rows = (database / "index.csv").read_text().splitlines()
        assert rows[1] == "NACA0012,1000000,0.1,0,0,naca0012.csv,,,,,,0"

    def test_given_missing_required_when_add_then_error(self, database: Path) -> None:
        result = runner.invoke(cli, ["add", str(database), "-f", "airfoilname=NACA0012"])

        assert result.exit_code == 1
        assert "MISSING_REQUIRED_FIELD" in result.output
        assert len((database / "index.csv").read_text().splitlines()) == 1

    def test_given_unparseable_value_when_add_then_usage_error(self, database: Path) -> None:
        result = runner.invoke(
            cli, ["add", str(database), "-f", "airfoilname=A", "-f", "npanels=many"]
        )

        assert result.exit_code == 2
        assert "not a valid integer" in result.output

    def test_given_unknown_field_when_add_then_usage_error(self, database: Path) -> None:
        result = runner.invoke(cli, ["add", str(database), "-f", "deg=4"])

        assert result.exit_code == 2
        assert "unknown field 'deg'" in result.output

    def test_given_check_duplicates_when_repeated_then_rejected(self, database: Path) -> None:
        args = ["add", str(database), "-f", "airfoilname=A", "-f", "xyfile=a.csv"]

        assert runner.invoke(cli, [*args, "--check-duplicates"]).exit_code == 0
        result = runner.invoke(cli, [*args, "--check-duplicates"])

        assert result.exit_code == 1
        assert "DUPLICATE_ENTRY" in result.output


class TestAddPolarCommand:
    def test_given_polar_csv_when_add_polar_then_files_written(
        self, database: Path, polar_files: tuple[Path, Path]
    ) -> None:
        polar_csv, geometry_csv = polar_files

        result = runner.invoke(
            cli,
            [
                "add-polar",
                str(database),
                "--airfoil",
                "NACA0012",
                "--polar",
                str(polar_csv),
                "--geometry",
                str(geometry_csv),
                "--re",
                "1e6",
                "--npanels",
                "160",
                "--ncrit",
                "9",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "clfile: NACA0012-Cl-re1000000-ma0p0-ncrit9-0.csv" in result.output
        assert (database / "Cl" / "NACA0012-Cl-re1000000-ma0p0-ncrit9-0.csv").read_text() == (
            "alpha,cl\n-2.0,-0.22\n2.0,0.22\n"
        )

    def test_given_auto_diff_when_resubmitted_then_next_differentiator(
        self, database: Path, polar_files: tuple[Path, Path]
    ) -> None:
        polar_csv, geometry_csv = polar_files
        args = [
            "add-polar",
            str(database),
            "--airfoil",
            "E387",
            "--polar",
            str(polar_csv),
            "--geometry",
            str(geometry_csv),
            "--re",
            "2e5",
            "--auto-diff",
        ]

        first = runner.invoke(cli, args)
        second = runner.invoke(cli, args)

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0, second.output
        assert "xyfile: E387-npanels0-1.csv" in second.output
        rows = (database / "index.csv").read_text().splitlines()[1:]
        assert [row.rsplit(",", 1)[1] for row in rows] == ["0", "1"]

    def test_given_diff_and_auto_diff_then_usage_error(
        self, database: Path, polar_files: tuple[Path, Path]
    ) -> None:
        polar_csv, geometry_csv = polar_files

        result = runner.invoke(
            cli,
            [
                "add-polar",
                str(database),
                "--airfoil",
                "A",
                "--polar",
                str(polar_csv),
                "--geometry",
                str(geometry_csv),
                "--re",
                "1e5",
                "--diff",
                "2",
                "--auto-diff",
            ],
        )

        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_given_missing_column_then_error(self, database: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.csv"
        bad.write_text("alpha,cl\n0,0\n")

        result = runner.invoke(
            cli,
            [
                "add-polar",
                str(database),
                "--airfoil",
                "A",
                "--polar",
                str(bad),
                "--geometry",
                str(bad),
                "--re",
                "1e5",
            ],
        )

        assert result.exit_code == 1
        assert "Missing column" in result.output


class TestListCommand:
    def test_given_entries_when_list_json_then_records(self, database: Path) -> None:
        for name in ("NACA0012", "E387"):
            runner.invoke(cli, ["add", str(database), "-f", f"airfoilname={name}", "-f", "xyfile=a.csv"])

        result = runner.invoke(cli, ["list", str(database), "--json"])

        assert result.exit_code == 0, result.output
        records = json.loads(result.stdout)
        assert [r["airfoilname"] for r in records] == ["NACA0012", "E387"]
        assert records[0]["npanels"] == 0

    def test_given_filter_when_list_then_only_matching(self, database: Path) -> None:
        for name in ("NACA0012", "E387"):
            runner.invoke(cli, ["add", str(database), "-f", f"airfoilname={name}", "-f", "xyfile=a.csv"])

        result = runner.invoke(cli, ["list", str(database), "-f", "airfoilname=E387", "--json"])

        assert [r["airfoilname"] for r in json.loads(result.stdout)] == ["E387"]

    def test_given_empty_database_when_list_then_says_so(self, database: Path) -> None:
        result = runner.invoke(cli, ["list", str(database)])

        assert result.exit_code == 0, result.output
        assert "No entries" in result.output

    def test_given_entries_when_list_then_table(self, database: Path) -> None:
        runner.invoke(cli, ["add", str(database), "-f", "airfoilname=S1223", "-f", "xyfile=s.csv"])

        result = runner.invoke(cli, ["list", str(database)])

        assert "S1223" in result.output
        assert "Airfoil" in result.output


class TestFieldsCommand:
    def test_given_json_when_fields_then_registry_order(self) -> None:
        result = runner.invoke(cli, ["fields", "--json"])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert [r["field"] for r in rows][:2] == ["airfoilname", "re"]
        assert rows[0]["default"] == "required"
        assert rows[5] == {
            "field": "xyfile",
            "header": "xy file",
            "type": "text",
            "default": "required",
            "directory": "xy",
        }

    def test_given_table_when_fields_then_lists_headers(self) -> None:
        result = runner.invoke(cli, ["fields"])

        assert result.exit_code == 0
        assert "Differentiator" in result.output


class TestVerboseOption:
    def test_given_verbose_then_debug_logging(self) -> None:
        result = runner.invoke(cli, ["-v", "fields", "--json"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger().level == logging.DEBUG

    def test_given_no_verbose_then_warnings_only(self) -> None:
        runner.invoke(cli, ["fields", "--json"])

        assert logging.getLogger().level == logging.WARNING
