"""Core type definitions for schemagate.

This module defines the enumerations shared by both validation subsystems:
- Severity: Ordinal classification of map-validation issues
- FieldCategory: How a schema field rule treats its path
- ErrorCode: Error codes emitted by the typed rule engine

These types form the contract between the validators and their callers,
ensuring consistent severity handling and stable error codes.
"""

from enum import Enum
from typing import Any, Dict

from typing_extensions import TypeAlias

JsonMap: TypeAlias = Dict[str, Any]
"""A JSON-object shaped payload: string keys, primitive or nested map values."""


class Severity(str, Enum):
    """Severity of a map validation issue.

    Ordered INFO < WARNING < CRITICAL. Any WARNING or CRITICAL issue makes
    the overall validation fail; INFO issues are reported but never fail.
    """
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Ordinal position of this severity (INFO is lowest)."""
        return _SEVERITY_RANK[self]

    @property
    def is_failing(self) -> bool:
        """Whether an issue of this severity fails validation."""
        return self in (Severity.WARNING, Severity.CRITICAL)


_SEVERITY_RANK: Dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
}


class FieldCategory(str, Enum):
    """Category of a field rule.

    REQUIRED fields must be present and non-blank, DEFAULTABLE fields are
    filled with a default when blank, AUDIT fields are only collected.
    """
    REQUIRED = "REQUIRED"
    DEFAULTABLE = "DEFAULTABLE"
    AUDIT = "AUDIT"


class ErrorCode(str, Enum):
    """Error codes for typed rule violations.

    Used in ValidationError objects produced by rules and validators.
    """
    REQUIRED = "REQUIRED"
    BLANK = "BLANK"
    INVALID_VALUE = "INVALID_VALUE"
    CONSTRUCTION_FAILED = "CONSTRUCTION_FAILED"


__all__ = [
    "JsonMap",
    "Severity",
    "FieldCategory",
    "ErrorCode",
]
