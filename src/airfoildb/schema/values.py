"""Tagged field values and the entry mapping type.

An entry submission is a mapping of field_id to either a FieldValue (an
explicitly tagged value) or a raw Python value, which is tagged by
inference. Validation compares the tag with the field's declared type.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from airfoildb.core.errors import TypeMismatch
from airfoildb.schema.registry import FieldDef, FieldType

# Declared type -> tags it accepts. An integer is a valid real.
_COMPATIBLE: dict[FieldType, frozenset[FieldType]] = {
    FieldType.TEXT: frozenset({FieldType.TEXT}),
    FieldType.REAL: frozenset({FieldType.REAL, FieldType.INTEGER}),
    FieldType.INTEGER: frozenset({FieldType.INTEGER}),
    FieldType.BOOLEAN: frozenset({FieldType.BOOLEAN}),
}


@dataclass(frozen=True, slots=True)
class FieldValue:
    """A value tagged with the type it claims to be."""

    kind: FieldType
    value: Any

    def __post_init__(self) -> None:
        if not self.kind.matches(self.value):
            raise TypeMismatch.for_value("<value>", self.kind.value, self.value)

    @classmethod
    def text(cls, value: str) -> FieldValue:
        return cls(FieldType.TEXT, value)

    @classmethod
    def real(cls, value: float) -> FieldValue:
        return cls(FieldType.REAL, value)

    @classmethod
    def integer(cls, value: int) -> FieldValue:
        return cls(FieldType.INTEGER, value)

    @classmethod
    def boolean(cls, value: bool) -> FieldValue:
        return cls(FieldType.BOOLEAN, value)

    @classmethod
    def infer(cls, value: Any) -> FieldValue | None:
        """Tag a raw value, or return None if no FieldType describes it."""
        if isinstance(value, FieldValue):
            return value
        for kind in (FieldType.BOOLEAN, FieldType.TEXT, FieldType.INTEGER, FieldType.REAL):
            if kind.matches(value):
                return cls(kind, value)
        return None

    def render(self) -> str:
        """Text form written to the index file and to file-name segments."""
        # numpy scalars are converted so they print like Python numbers
        if self.kind is FieldType.REAL and not isinstance(self.value, numbers.Integral):
            return str(float(self.value))
        if self.kind in (FieldType.REAL, FieldType.INTEGER):
            return str(int(self.value))
        if self.kind is FieldType.BOOLEAN:
            return str(bool(self.value))
        return str(self.value)


EntryValues = Mapping[str, "FieldValue | Any"]
"""Input mapping for entry submission: field_id to tagged or raw value."""


def coerce_value(fdef: FieldDef, raw: Any) -> FieldValue:
    """Tag ``raw`` and check it against the field's declared type.

    Raises:
        TypeMismatch: The value's type disagrees with ``fdef.field_type``.
    """
    value = raw.value if isinstance(raw, FieldValue) else raw
    tagged = FieldValue.infer(raw)
    if tagged is None or tagged.kind not in _COMPATIBLE[fdef.field_type]:
        raise TypeMismatch.for_value(fdef.field_id, fdef.field_type.value, value)
    return tagged


def default_value(fdef: FieldDef) -> FieldValue:
    return FieldValue(fdef.field_type, fdef.default)
