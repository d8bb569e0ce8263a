"""airfoildb error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Schema
- 4xxx: Database layout
- 5xxx: Entry validation

Filesystem failures are not wrapped; ``OSError`` propagates to the caller.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Schema (3xxx)
    SCHEMA_DUPLICATE_FIELD = 3001
    SCHEMA_DUPLICATE_HEADER = 3002
    SCHEMA_UNKNOWN_FIELD = 3003

    # Database layout (4xxx)
    PATH_CONFLICT = 4001

    # Entry validation (5xxx)
    MISSING_REQUIRED_FIELD = 5001
    UNKNOWN_FIELD = 5002
    TYPE_MISMATCH = 5003
    INVALID_VALUE = 5004
    DUPLICATE_ENTRY = 5005


@dataclass(frozen=True, slots=True)
class AirfoilDBError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TYPE_MISMATCH')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(AirfoilDBError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SchemaError(AirfoilDBError):
    """Raised when a field registry is built from conflicting definitions."""

    @classmethod
    def duplicate_field(cls, field_id: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_DUPLICATE_FIELD,
            message=f"Field '{field_id}' is defined more than once",
            details={"field_id": field_id},
        )

    @classmethod
    def unknown_field(cls, field_id: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_UNKNOWN_FIELD,
            message=f"Identifying field '{field_id}' is not a defined field",
            details={"field_id": field_id},
        )

    @classmethod
    def duplicate_header(cls, header_label: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_DUPLICATE_HEADER,
            message=f"Header label '{header_label}' is used by more than one field",
            details={"header_label": header_label},
        )


class PathConflict(AirfoilDBError):
    """Destination exists and the conflict policy forbids overwriting it."""

    @classmethod
    def exists(cls, path: str) -> "PathConflict":
        return cls(
            code=ErrorCode.PATH_CONFLICT,
            message=f"Path already exists: {path}",
            details={"path": path},
        )

    @property
    def path(self) -> str:
        return str(self.details["path"])


class EntryError(AirfoilDBError):
    """Base for errors that reject an entry submission."""

    @property
    def field_id(self) -> str | None:
        return self.details.get("field_id")


class MissingRequiredField(EntryError):
    @classmethod
    def for_field(cls, field_id: str) -> "MissingRequiredField":
        return cls(
            code=ErrorCode.MISSING_REQUIRED_FIELD,
            message=f"Required field '{field_id}' was not given",
            details={"field_id": field_id},
        )


class UnknownField(EntryError):
    @classmethod
    def for_field(cls, field_id: str) -> "UnknownField":
        return cls(
            code=ErrorCode.UNKNOWN_FIELD,
            message=f"Field '{field_id}' is not defined in the registry",
            details={"field_id": field_id},
        )


class TypeMismatch(EntryError):
    @classmethod
    def for_value(cls, field_id: str, expected: str, got: Any) -> "TypeMismatch":
        got_type = type(got).__name__
        return cls(
            code=ErrorCode.TYPE_MISMATCH,
            message=(
                f"Expected type {expected} under field '{field_id}'; "
                f"got {got!r} (type {got_type})"
            ),
            details={
                "field_id": field_id,
                "expected": expected,
                "got": repr(got),
                "got_type": got_type,
            },
        )

    @property
    def expected(self) -> str:
        return str(self.details["expected"])


class InvalidValue(EntryError):
    """Value would break the row structure of the index file."""

    @classmethod
    def delimiter(cls, field_id: str, value: str) -> "InvalidValue":
        return cls(
            code=ErrorCode.INVALID_VALUE,
            message=f"Value for '{field_id}' contains a delimiter or line break: {value!r}",
            details={"field_id": field_id, "value": value},
        )

    @classmethod
    def path_separator(cls, field_id: str, value: str) -> "InvalidValue":
        return cls(
            code=ErrorCode.INVALID_VALUE,
            message=f"Value for '{field_id}' must not contain a path separator: {value!r}",
            details={"field_id": field_id, "value": value},
        )

    @classmethod
    def non_finite(cls, field_id: str, value: float) -> "InvalidValue":
        return cls(
            code=ErrorCode.INVALID_VALUE,
            message=f"Value for '{field_id}' must be finite, got {value!r}",
            details={"field_id": field_id, "value": repr(value)},
        )


class DuplicateEntry(EntryError):
    @classmethod
    def for_identity(cls, identity: dict[str, str]) -> "DuplicateEntry":
        summary = ", ".join(f"{k}={v}" for k, v in identity.items())
        return cls(
            code=ErrorCode.DUPLICATE_ENTRY,
            message=f"An entry with the same identifying fields exists ({summary})",
            details={"identity": identity},
        )
