"""Field registry: the ordered schema of an index row.

Every column of the index file is defined here. Registry order is column
order and is part of the on-disk format, so fields are only ever appended,
never reordered.

FieldDef captures:
  A. Identity (field_id, header_label)
  B. Typing (field_type, default or the REQUIRED sentinel)
  C. Storage (subdirectory holding the curve files a file field names)
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Final

import numpy as np

from airfoildb.config.constants import (
    DIR_CD,
    DIR_CL,
    DIR_CM,
    DIR_XLOSEP,
    DIR_XUPSEP,
    DIR_XY,
    HEADER_WORD_JOIN,
)
from airfoildb.core.errors import SchemaError


class _Required:
    """Sentinel default for fields an entry cannot omit."""

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Final = _Required()


class FieldType(StrEnum):
    """Declared value type of a field."""

    TEXT = "text"
    REAL = "real"
    INTEGER = "integer"
    BOOLEAN = "boolean"

    def matches(self, value: Any) -> bool:
        """Check a raw Python value against this type.

        bool is rejected for the numeric types even though it subclasses int.
        """
        if self is FieldType.TEXT:
            return isinstance(value, str)
        if self is FieldType.BOOLEAN:
            return _is_bool(value)
        if _is_bool(value):
            return False
        if self is FieldType.INTEGER:
            return isinstance(value, numbers.Integral)
        return isinstance(value, numbers.Real)


def _is_bool(value: Any) -> bool:
    # numpy.bool_ is not a bool subclass
    return isinstance(value, (bool, np.bool_))


@dataclass(frozen=True, slots=True)
class FieldDef:
    """Canonical definition of a single index column."""

    field_id: str
    header_label: str
    default: Any
    field_type: FieldType
    subdirectory: str | None = None

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    @property
    def is_file(self) -> bool:
        return self.subdirectory is not None

    @property
    def joined_header(self) -> str:
        """Header label with spaces replaced, for consumers that need one word."""
        return self.header_label.replace(" ", HEADER_WORD_JOIN)


class FieldRegistry:
    """Immutable ordered collection of FieldDefs with lookup tables.

    Lookup tables are built once in the constructor and exposed as read-only
    mappings.
    """

    def __init__(
        self,
        fields: Iterable[FieldDef],
        *,
        identifying: Iterable[str] = (),
    ) -> None:
        by_id: dict[str, FieldDef] = {}
        header_to_field: dict[str, str] = {}

        for fdef in fields:
            if fdef.field_id in by_id:
                raise SchemaError.duplicate_field(fdef.field_id)
            for label in {fdef.header_label, fdef.joined_header}:
                if label in header_to_field:
                    raise SchemaError.duplicate_header(label)
                header_to_field[label] = fdef.field_id
            by_id[fdef.field_id] = fdef

        self._fields: tuple[FieldDef, ...] = tuple(by_id.values())
        self._by_id = MappingProxyType(by_id)
        self._header_to_field = MappingProxyType(header_to_field)
        self._field_to_header = MappingProxyType(
            {f.field_id: f.header_label for f in self._fields}
        )
        self._field_to_joined_header = MappingProxyType(
            {f.field_id: f.joined_header for f in self._fields}
        )
        self._field_to_subdirectory = MappingProxyType(
            {f.field_id: f.subdirectory for f in self._fields if f.subdirectory is not None}
        )

        identifying = tuple(identifying)
        for field_id in identifying:
            if field_id not in by_id:
                raise SchemaError.unknown_field(field_id)
        self._identifying = identifying

    # ── Sequence protocol ─────────────────────────────────────────

    def __iter__(self) -> Iterator[FieldDef]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._by_id

    def __getitem__(self, field_id: str) -> FieldDef:
        return self._by_id[field_id]

    # ── Lookup ────────────────────────────────────────────────────

    @property
    def field_ids(self) -> tuple[str, ...]:
        return tuple(f.field_id for f in self._fields)

    def headers(self) -> list[str]:
        """Header labels in column order."""
        return [f.header_label for f in self._fields]

    @property
    def header_to_field(self) -> MappingProxyType[str, str]:
        """Header label (spaced or word-joined) to field_id."""
        return self._header_to_field

    @property
    def field_to_header(self) -> MappingProxyType[str, str]:
        return self._field_to_header

    @property
    def field_to_joined_header(self) -> MappingProxyType[str, str]:
        return self._field_to_joined_header

    @property
    def field_to_subdirectory(self) -> MappingProxyType[str, str]:
        """field_id to category subdirectory, for file fields only."""
        return self._field_to_subdirectory

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.field_id for f in self._fields if f.required)

    @property
    def identifying_fields(self) -> tuple[str, ...]:
        return self._identifying

    @property
    def file_fields(self) -> tuple[str, ...]:
        return tuple(f.field_id for f in self._fields if f.is_file)


REGISTRY: Final = FieldRegistry(
    [
        FieldDef("airfoilname", "Airfoil", REQUIRED, FieldType.TEXT),
        FieldDef("re", "Re", 0, FieldType.REAL),
        FieldDef("ma", "Mach", 0, FieldType.REAL),
        FieldDef("npanels", "Panels", 0, FieldType.INTEGER),
        FieldDef("ncrit", "Ncrit", 0, FieldType.INTEGER),
        FieldDef("xyfile", "xy file", REQUIRED, FieldType.TEXT, DIR_XY),
        FieldDef("clfile", "Cl file", "", FieldType.TEXT, DIR_CL),
        FieldDef("cdfile", "Cd file", "", FieldType.TEXT, DIR_CD),
        FieldDef("cmfile", "Cm file", "", FieldType.TEXT, DIR_CM),
        FieldDef("xupsepfile", "xupsep file", "", FieldType.TEXT, DIR_XUPSEP),
        FieldDef("xlosepfile", "xlosep file", "", FieldType.TEXT, DIR_XLOSEP),
        # Lets otherwise identical entries coexist
        FieldDef("diff", "Differentiator", 0, FieldType.INTEGER),
    ],
    identifying=("airfoilname", "re", "ma", "npanels", "ncrit", "diff"),
)
