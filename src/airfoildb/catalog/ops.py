"""Catalog operations - database creation and entry submission.

Pure filesystem I/O over a flat-file database:

    <root>/<index file>     header row + one row per entry, append-only
    <root>/{xy,Cl,Cd,Cm,xupsep,xlosep}/   two-column curve files

Entries are only ever appended. A submission that fails part way leaves
whatever it already wrote on disk; there is no rollback. The index is
opened, appended and closed per call with no locking, so a database must
have a single writer at a time.
"""

from __future__ import annotations

import errno
import math
import shutil
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import structlog

from airfoildb.catalog.naming import EntryFileNames, derive_file_names
from airfoildb.catalog.polar import Curve, PolarHandle
from airfoildb.catalog.query import load_index, read_index_text
from airfoildb.config.constants import (
    CATEGORY_DIRS,
    DEFAULT_DECIMAL_REPLACEMENT,
    DEFAULT_EXTENSION,
    DEFAULT_INDEX_FILE,
    DELIMITER,
    LINE_BREAKS,
    LINE_TERMINATOR,
    PATH_SEPARATORS,
)
from airfoildb.core.errors import (
    DuplicateEntry,
    InvalidValue,
    MissingRequiredField,
    PathConflict,
    UnknownField,
)
from airfoildb.schema.registry import REGISTRY, FieldDef, FieldType
from airfoildb.schema.values import EntryValues, FieldValue, coerce_value, default_value

if TYPE_CHECKING:
    import pandas as pd

    from airfoildb.config.models import CatalogConfig

log = structlog.get_logger(__name__)

ConflictPolicy = Literal["overwrite", "abort"] | Callable[[Path], bool]
"""What create does with an existing path. A callable is asked to confirm."""


class SubmissionStage(StrEnum):
    """Progress of a single entry submission. Failures abort at any stage."""

    START = "start"
    FIELDS_VALIDATED = "fields_validated"
    FILES_DERIVED = "files_derived"
    FILES_WRITTEN = "files_written"
    INDEX_APPENDED = "index_appended"
    DONE = "done"


# Identifying fields a polar can supply, with the accessor that supplies them
_POLAR_SCALARS: tuple[tuple[str, str], ...] = (
    ("re", "get_reynolds"),
    ("ma", "get_mach"),
    ("npanels", "get_panel_count"),
    ("ncrit", "get_convergence_parameter"),
)

# File field -> (polar accessor, curve-file column headers), in write order
_POLAR_CURVES: tuple[tuple[str, str, tuple[str, str]], ...] = (
    ("xyfile", "get_geometry", ("x", "y")),
    ("clfile", "get_lift_curve", ("alpha", "cl")),
    ("cdfile", "get_drag_curve", ("alpha", "cd")),
    ("cmfile", "get_moment_curve", ("alpha", "cm")),
    ("xupsepfile", "get_upper_separation_curve", ("alpha", "xsep")),
    ("xlosepfile", "get_lower_separation_curve", ("alpha", "xsep")),
)

# Text fields that end up in a curve-file path
_PATH_FIELDS = frozenset(("airfoilname", *REGISTRY.file_fields))


def _normalize(fdef: FieldDef, value: FieldValue | str) -> Any:
    """Comparable form of a value, whether tagged or read back as index text."""
    if isinstance(value, FieldValue):
        value = value.render()
    if fdef.field_type in (FieldType.REAL, FieldType.INTEGER):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def identity_key(values: Mapping[str, FieldValue | str], *, skip: Iterable[str] = ()) -> tuple:
    """Tuple of normalized identifying values; rows with equal keys are duplicates."""
    skipped = set(skip)
    return tuple(
        _normalize(REGISTRY[field_id], values[field_id])
        for field_id in REGISTRY.identifying_fields
        if field_id not in skipped
    )


@dataclass
class Catalog:
    """Write path of one database, plus duplicate lookups over its index."""

    database_path: Path
    index_file: str = DEFAULT_INDEX_FILE
    extension: str = DEFAULT_EXTENSION
    decimal_replacement: str = DEFAULT_DECIMAL_REPLACEMENT
    warn_on_overwrite: bool = True

    def __post_init__(self) -> None:
        self.database_path = Path(self.database_path)

    @classmethod
    def from_config(cls, config: CatalogConfig, database_path: Path | None = None) -> Catalog:
        return cls(
            database_path=Path(database_path or config.database_path),
            index_file=config.index_file,
            extension=config.extension,
            decimal_replacement=config.decimal_replacement,
            warn_on_overwrite=config.warn_on_overwrite,
        )

    @property
    def index_path(self) -> Path:
        return self.database_path / self.index_file

    # ── Database creation ─────────────────────────────────────────

    def create(self, on_conflict: ConflictPolicy = "abort") -> Path:
        """Create the directory skeleton and a header-only index file.

        Args:
            on_conflict: "overwrite" deletes an existing path first, "abort"
                refuses. A callable receives the path and returns True to
                overwrite.

        Returns:
            Path of the new index file.

        Raises:
            PathConflict: The path exists and the policy refuses to remove it.
            OSError: Filesystem failure.
        """
        root = self.database_path
        if root.exists() or root.is_symlink():
            if callable(on_conflict):
                overwrite = bool(on_conflict(root))
            elif on_conflict in ("overwrite", "abort"):
                overwrite = on_conflict == "overwrite"
            else:
                raise ValueError(f"Unknown conflict policy: {on_conflict!r}")

            if not overwrite:
                raise PathConflict.exists(str(root))

            if root.is_dir() and not root.is_symlink():
                shutil.rmtree(root)
            else:
                root.unlink()
            log.info("database_removed", path=str(root))

        root.mkdir(parents=True, exist_ok=True)
        for subdir in CATEGORY_DIRS:
            (root / subdir).mkdir(parents=True, exist_ok=True)

        header = DELIMITER.join(REGISTRY.headers()) + LINE_TERMINATOR
        self.index_path.write_text(header, encoding="utf-8", newline="")

        log.info("database_created", path=str(root), index_file=self.index_file)
        return self.index_path

    # ── Validation ────────────────────────────────────────────────

    def _check_present(self, field_values: EntryValues, required: Iterable[str]) -> None:
        for field_id in required:
            if field_id not in field_values:
                raise MissingRequiredField.for_field(field_id)
        for field_id in field_values:
            if field_id not in REGISTRY:
                raise UnknownField.for_field(field_id)

    def _check_values(self, field_values: EntryValues) -> dict[str, FieldValue]:
        tagged: dict[str, FieldValue] = {}
        for field_id, raw in field_values.items():
            value = coerce_value(REGISTRY[field_id], raw)
            if value.kind is FieldType.TEXT:
                text = value.value
                if DELIMITER in text or not LINE_BREAKS.isdisjoint(text):
                    raise InvalidValue.delimiter(field_id, text)
                if field_id in _PATH_FIELDS and (
                    not PATH_SEPARATORS.isdisjoint(text) or text in (".", "..")
                ):
                    raise InvalidValue.path_separator(field_id, text)
            elif value.kind is FieldType.REAL and not math.isfinite(value.value):
                raise InvalidValue.non_finite(field_id, value.value)
            tagged[field_id] = value
        return tagged

    def validate(self, field_values: EntryValues) -> dict[str, FieldValue]:
        """Validate a submission and fill defaults.

        Returns:
            Tagged value for every registry field, in column order.

        Raises:
            MissingRequiredField: A required field is absent.
            UnknownField: A field id is not in the registry.
            TypeMismatch: A value disagrees with its declared type.
            InvalidValue: A text value contains the delimiter or a line break.
        """
        self._check_present(field_values, REGISTRY.required_fields)
        given = self._check_values(field_values)
        return {
            fdef.field_id: given[fdef.field_id] if fdef.field_id in given else default_value(fdef)
            for fdef in REGISTRY
        }

    # ── Index access ──────────────────────────────────────────────

    def _require_index(self) -> None:
        if not self.index_path.is_file():
            raise FileNotFoundError(errno.ENOENT, "Index file not found", str(self.index_path))

    def rows(self) -> list[dict[str, str]]:
        """Index rows as raw text, keyed by field id (unknown columns by label)."""
        self._require_index()
        return read_index_text(self.database_path, self.index_file).to_dict(orient="records")

    def find_duplicates(self, field_values: EntryValues) -> list[dict[str, str]]:
        """Rows whose identifying fields equal those of ``field_values``."""
        key = identity_key(self._identity_values(field_values))
        return [row for row in self.rows() if self._row_key(row) == key]

    def next_differentiator(self, field_values: EntryValues) -> int:
        """Smallest unused differentiator for these identifying fields.

        One more than the largest differentiator among rows that match on
        every other identifying field, or 0 when no row matches.
        """
        key = identity_key(self._identity_values(field_values), skip=("diff",))
        used = [
            int(float(row["diff"]))
            for row in self.rows()
            if self._row_key(row, skip=("diff",)) == key
        ]
        return max(used) + 1 if used else 0

    def _identity_values(self, field_values: EntryValues) -> dict[str, FieldValue]:
        values = {}
        for field_id in REGISTRY.identifying_fields:
            fdef = REGISTRY[field_id]
            if field_id in field_values:
                values[field_id] = coerce_value(fdef, field_values[field_id])
            elif not fdef.required:
                values[field_id] = default_value(fdef)
            else:
                raise MissingRequiredField.for_field(field_id)
        return values

    @staticmethod
    def _row_key(row: Mapping[str, str], *, skip: Iterable[str] = ()) -> tuple | None:
        if any(field_id not in row for field_id in REGISTRY.identifying_fields):
            return None
        return identity_key(row, skip=skip)

    # ── Entry submission ──────────────────────────────────────────

    def add_entry(self, field_values: EntryValues, *, check_duplicates: bool = False) -> None:
        """Validate a submission and append it as one index row.

        Curve files are not touched; file fields are stored as given.

        Raises:
            MissingRequiredField, UnknownField, TypeMismatch, InvalidValue:
                The submission is rejected before anything is written.
            DuplicateEntry: check_duplicates is set and the identity exists.
            OSError: The index file is missing or cannot be appended.
        """
        airfoil = field_values.get("airfoilname")
        _stage(SubmissionStage.START, airfoil)
        row = self.validate(field_values)
        _stage(SubmissionStage.FIELDS_VALIDATED, airfoil)
        self._append(row, check_duplicates=check_duplicates)

    def _append(self, row: dict[str, FieldValue], *, check_duplicates: bool) -> None:
        airfoil = row["airfoilname"].value
        self._require_index()
        if check_duplicates and self.find_duplicates(row):
            raise self._duplicate_error(row)

        line = DELIMITER.join(value.render() for value in row.values()) + LINE_TERMINATOR
        with self.index_path.open("a", encoding="utf-8", newline="") as f:
            f.write(line)

        _stage(SubmissionStage.INDEX_APPENDED, airfoil)
        log.info("entry_appended", index=str(self.index_path), airfoil=airfoil)
        _stage(SubmissionStage.DONE, airfoil)

    @staticmethod
    def _duplicate_error(values: Mapping[str, FieldValue]) -> DuplicateEntry:
        return DuplicateEntry.for_identity(
            {field_id: values[field_id].render() for field_id in REGISTRY.identifying_fields}
        )

    def add_entry_from_polar(
        self,
        polar: PolarHandle,
        provided_fields: EntryValues | None = None,
        *,
        check_duplicates: bool = False,
    ) -> EntryFileNames:
        """Write a polar's curves and append an entry referencing them.

        Identifying fields missing from ``provided_fields`` are read from the
        polar (``diff`` defaults to 0). Curve files are written only for file
        fields the caller did not provide; an existing file of the same name
        is overwritten with a warning.

        Returns:
            The derived file names, including those the caller overrode.

        Raises:
            MissingRequiredField: ``airfoilname`` is absent.
            OSError: A curve file or the index cannot be written. Files
                written before the failure stay on disk.
        """
        fields: dict[str, Any] = dict(provided_fields or {})
        if "airfoilname" not in fields:
            raise MissingRequiredField.for_field("airfoilname")
        airfoil = fields["airfoilname"]
        _stage(SubmissionStage.START, airfoil)

        for field_id, accessor in _POLAR_SCALARS:
            if field_id not in fields:
                fields[field_id] = getattr(polar, accessor)()
        if "diff" not in fields:
            get_diff = getattr(polar, "get_differentiator", None)
            fields["diff"] = get_diff() if callable(get_diff) else 0

        self._check_present(fields, ("airfoilname",))
        tagged = self._check_values(fields)
        if check_duplicates:
            self._require_index()
            if self.find_duplicates(tagged):
                raise self._duplicate_error(tagged)
        _stage(SubmissionStage.FIELDS_VALIDATED, airfoil)

        names = derive_file_names(
            tagged["airfoilname"].value,
            re=tagged["re"],
            ma=tagged["ma"],
            npanels=tagged["npanels"],
            ncrit=tagged["ncrit"],
            diff=tagged["diff"],
            extension=self.extension,
            decimal_replacement=self.decimal_replacement,
        )
        _stage(SubmissionStage.FILES_DERIVED, airfoil)

        derived = names.as_fields()
        for field_id, accessor, headers in _POLAR_CURVES:
            if field_id in fields:
                continue
            subdir = REGISTRY.field_to_subdirectory[field_id]
            path = self.database_path / subdir / derived[field_id]
            if path.parent != self.database_path / subdir:
                raise InvalidValue.path_separator(field_id, derived[field_id])
            self._write_curve(path, headers, getattr(polar, accessor)())
            fields[field_id] = derived[field_id]
        _stage(SubmissionStage.FILES_WRITTEN, airfoil)

        self._append(self.validate(fields), check_duplicates=False)
        return names

    def _write_curve(self, path: Path, headers: tuple[str, str], curve: Curve) -> None:
        xs, ys = curve
        if path.exists() and self.warn_on_overwrite:
            log.warning("curve_file_overwritten", path=str(path))

        lines = [DELIMITER.join(headers)]
        lines.extend(f"{_cell(x)}{DELIMITER}{_cell(y)}" for x, y in zip(xs, ys, strict=True))
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(LINE_TERMINATOR.join(lines) + LINE_TERMINATOR)

        log.debug("curve_file_written", path=str(path), samples=len(lines) - 1)

    # ── Reading ───────────────────────────────────────────────────

    def entries(self) -> pd.DataFrame:
        """The index as a typed DataFrame (see query.load_index)."""
        return load_index(self.database_path, self.index_file)


def _cell(value: Any) -> str:
    tagged = FieldValue.infer(value)
    return tagged.render() if tagged is not None else str(value)


def _stage(stage: SubmissionStage, airfoil: Any) -> None:
    if isinstance(airfoil, FieldValue):
        airfoil = airfoil.value
    log.debug("submission_stage", stage=stage.value, airfoil=airfoil)


# ── Module-level entry points ─────────────────────────────────────


def create_database(
    root_path: Path | str,
    index_file_name: str = DEFAULT_INDEX_FILE,
    on_conflict: ConflictPolicy = "abort",
) -> Path:
    """Create a new database at ``root_path``. Returns the index-file path."""
    return Catalog(Path(root_path), index_file=index_file_name).create(on_conflict)


def add_entry(
    database_path: Path | str,
    index_file_name: str = DEFAULT_INDEX_FILE,
    field_values: EntryValues | None = None,
    *,
    check_duplicates: bool = False,
) -> None:
    """Append one validated entry to the database's index."""
    Catalog(Path(database_path), index_file=index_file_name).add_entry(
        field_values or {}, check_duplicates=check_duplicates
    )


def add_entry_from_polar(
    database_path: Path | str,
    polar: PolarHandle,
    provided_fields: EntryValues | None = None,
    *,
    index_file_name: str = DEFAULT_INDEX_FILE,
    extension: str = DEFAULT_EXTENSION,
    decimal_replacement: str = DEFAULT_DECIMAL_REPLACEMENT,
    warn_on_overwrite: bool = True,
    check_duplicates: bool = False,
) -> EntryFileNames:
    """Write a polar's curve files and append the entry that references them."""
    catalog = Catalog(
        Path(database_path),
        index_file=index_file_name,
        extension=extension,
        decimal_replacement=decimal_replacement,
        warn_on_overwrite=warn_on_overwrite,
    )
    return catalog.add_entry_from_polar(polar, provided_fields, check_duplicates=check_duplicates)


def find_duplicates(
    database_path: Path | str,
    index_file_name: str = DEFAULT_INDEX_FILE,
    field_values: EntryValues | None = None,
) -> list[dict[str, str]]:
    """Index rows sharing every identifying field with ``field_values``."""
    return Catalog(Path(database_path), index_file=index_file_name).find_duplicates(
        field_values or {}
    )


def next_differentiator(
    database_path: Path | str,
    index_file_name: str = DEFAULT_INDEX_FILE,
    field_values: EntryValues | None = None,
) -> int:
    """Smallest unused differentiator for the identifying fields in ``field_values``."""
    return Catalog(Path(database_path), index_file=index_file_name).next_differentiator(
        field_values or {}
    )
