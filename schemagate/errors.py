"""Structured error types for schemagate.

This module defines the field-level error record produced by the typed rule
engine (ValidationError) and the exceptions raised at the edges of the library.
Normal validation outcomes are never raised; they are returned as result values.
Exceptions are reserved for callers that opt into them (ValidationException)
and for configuration mistakes (SchemaNotFoundError, SchemaDefinitionError).
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Union

from schemagate.types import ErrorCode


@dataclass(frozen=True)
class ValidationError:
    """A single typed rule violation.

    Attributes:
        field: Field name, dotted when produced by nested validation
            (e.g., "claims.tenantId")
        message: Human-readable error description
        code: Error code (an ErrorCode member or a custom string)

    Examples:
        >>> err = ValidationError(field="sub", message="sub is required", code=ErrorCode.REQUIRED)
        >>> err.code == "REQUIRED"
        True
    """
    field: str
    message: str
    code: Union[ErrorCode, str]

    def prefixed(self, parent: str) -> "ValidationError":
        """Return a copy with the field rewritten to ``"<parent>.<field>"``."""
        return replace(self, field=f"{parent}.{self.field}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "field": self.field,
            "message": self.message,
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationError":
        """Create ValidationError from dict."""
        code = data["code"]
        if isinstance(code, str) and code in ErrorCode.__members__:
            code = ErrorCode(code)
        return cls(field=data["field"], message=data["message"], code=code)


class ValidationException(Exception):
    """Raised by callers that turn a typed validation failure into an error.

    Attributes:
        errors: Every violation reported by the validator
    """

    def __init__(self, message: str, errors: Sequence[ValidationError]):
        self.message = message
        self.errors: List[ValidationError] = list(errors)
        super().__init__(message)

    def __str__(self) -> str:
        details = ", ".join(f"{e.field}: {e.message}" for e in self.errors)
        return f"{self.message}: {details}"


class SchemaNotFoundError(LookupError):
    """Raised when no validator is registered under a schema key.

    This is a deployment/configuration mismatch, not a per-request error.

    Attributes:
        schema_key: The key that was requested
        known_keys: The keys that are registered
    """

    def __init__(self, schema_key: str, known_keys: Optional[Sequence[str]] = None):
        self.schema_key = schema_key
        self.known_keys = sorted(known_keys or [])
        super().__init__(
            f"No schema registered for key '{schema_key}' "
            f"(known: {', '.join(self.known_keys) or 'none'})"
        )


class SchemaDefinitionError(ValueError):
    """Raised when a dict schema definition does not describe a valid schema.

    Attributes:
        violations: One message per problem found in the definition
    """

    def __init__(self, violations: Sequence[str]):
        self.violations = list(violations)
        super().__init__("Invalid schema definition: " + "; ".join(self.violations))


__all__ = [
    "ValidationError",
    "ValidationException",
    "SchemaNotFoundError",
    "SchemaDefinitionError",
]
