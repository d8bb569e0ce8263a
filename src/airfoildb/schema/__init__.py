"""Schema module - the field registry shared by every catalog operation."""

from airfoildb.schema.registry import REGISTRY, REQUIRED, FieldDef, FieldRegistry, FieldType
from airfoildb.schema.values import EntryValues, FieldValue, coerce_value, default_value

__all__ = [
    "REGISTRY",
    "REQUIRED",
    "EntryValues",
    "FieldDef",
    "FieldRegistry",
    "FieldType",
    "FieldValue",
    "coerce_value",
    "default_value",
]
