"""Declarative schema model for the map validator.

A ValidationSchema is an immutable, ordered collection of per-field rules
(FieldRule) and "all of these paths must be present" rules (GroupRule).
Schemas are built once, usually with the builder DSL in
``schemagate.builder``, and shared by every validation call.

Schemas can also be described as plain dicts. Such definitions are checked
against SCHEMA_DEFINITION (a Draft 7 JSON Schema) before being converted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from jsonschema import Draft7Validator

from schemagate.errors import SchemaDefinitionError
from schemagate.types import FieldCategory, Severity

_SEVERITIES = [s.value for s in Severity]

# JSON Schema for dict schema definitions accepted by ValidationSchema.from_dict
SCHEMA_DEFINITION: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "path": {"type": "string", "minLength": 1},
                    "category": {"enum": [c.value for c in FieldCategory]},
                    "severity": {"enum": _SEVERITIES},
                    "default": {},
                },
                "required": ["path", "category"],
                "additionalProperties": False,
            },
        },
        "groups": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "paths": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                        "minItems": 1,
                    },
                    "severity": {"enum": _SEVERITIES},
                    "message": {"type": "string"},
                },
                "required": ["paths"],
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}

_DEFINITION_VALIDATOR = Draft7Validator(SCHEMA_DEFINITION)


@dataclass(frozen=True)
class FieldRule:
    """Rule for a single field addressed by a dotted path.

    Attributes:
        path: Dot-notation field path (e.g., "data.role")
        category: REQUIRED, DEFAULTABLE or AUDIT
        severity: Severity of the issue raised when a REQUIRED field is blank
        default_value: Value applied to a blank DEFAULTABLE field
    """
    path: str
    category: FieldCategory
    severity: Severity = Severity.CRITICAL
    default_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "path": self.path,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.category == FieldCategory.DEFAULTABLE:
            result["default"] = self.default_value
        return result


@dataclass(frozen=True)
class GroupRule:
    """Rule requiring every listed path to be present and non-blank.

    Attributes:
        paths: Paths in declaration order
        severity: Severity of the aggregated issue
        message: Prefix of the issue message; the missing paths are appended
    """
    paths: Tuple[str, ...]
    severity: Severity = Severity.CRITICAL
    message: str = "Group validation failed"

    def __post_init__(self):
        if not isinstance(self.paths, tuple):
            object.__setattr__(self, "paths", tuple(self.paths))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "paths": list(self.paths),
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationSchema:
    """Immutable, ordered set of field and group rules.

    Declaration order is preserved and determines the order in which issues
    are reported.

    Examples:
        >>> schema = ValidationSchema(
        ...     fields=(FieldRule("token", FieldCategory.REQUIRED),),
        ...     groups=(GroupRule(("aud", "baut")),),
        ... )
        >>> [rule.path for rule in schema.fields]
        ['token']
    """
    fields: Tuple[FieldRule, ...] = field(default_factory=tuple)
    groups: Tuple[GroupRule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))
        if not isinstance(self.groups, tuple):
            object.__setattr__(self, "groups", tuple(self.groups))

    def fields_of(self, category: FieldCategory) -> List[FieldRule]:
        """Field rules of one category, in declaration order."""
        return [rule for rule in self.fields if rule.category == category]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a definition dict accepted by from_dict."""
        return {
            "fields": [rule.to_dict() for rule in self.fields],
            "groups": [group.to_dict() for group in self.groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationSchema":
        """Create a ValidationSchema from a definition dict.

        Args:
            data: Definition with optional "fields" and "groups" lists

        Returns:
            The equivalent ValidationSchema

        Raises:
            SchemaDefinitionError: If the definition violates SCHEMA_DEFINITION
        """
        violations = [
            _describe(error) for error in _DEFINITION_VALIDATOR.iter_errors(data)
        ]
        if violations:
            raise SchemaDefinitionError(violations)

        fields = tuple(
            FieldRule(
                path=item["path"],
                category=FieldCategory(item["category"]),
                severity=Severity(item.get("severity", Severity.CRITICAL.value)),
                default_value=item.get("default"),
            )
            for item in data.get("fields", [])
        )
        groups = tuple(
            GroupRule(
                paths=tuple(item["paths"]),
                severity=Severity(item.get("severity", Severity.CRITICAL.value)),
                message=item.get("message", GroupRule.message),
            )
            for item in data.get("groups", [])
        )
        return cls(fields=fields, groups=groups)


def _describe(error) -> str:
    location = "/".join(str(p) for p in error.absolute_path)
    return f"{location or '<root>'}: {error.message}"


__all__ = [
    "SCHEMA_DEFINITION",
    "FieldRule",
    "GroupRule",
    "ValidationSchema",
]
