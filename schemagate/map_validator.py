"""Schema-driven validation and enrichment of nested maps.

This module provides MapValidator, which checks a JSON-shaped payload against
a ValidationSchema, fills blank DEFAULTABLE fields with their defaults,
snapshots AUDIT fields, and decides success or failure from issue severity.

Results are a two-variant union: Success carries the enriched map, Failure
carries the issues that caused it. Both carry the audit snapshot and every
issue raised, so INFO issues (applied defaults) stay visible on success.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from schemagate.config import get_logger
from schemagate.paths import get_by_path, is_blank_or_empty, set_by_path
from schemagate.schema import ValidationSchema
from schemagate.types import FieldCategory, JsonMap, Severity

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    """A problem or notice raised while validating a map.

    Attributes:
        path: Dotted path of the field, or the comma-joined missing paths of a group
        message: Human-readable description
        severity: INFO, WARNING or CRITICAL
    """
    path: str
    message: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "path": self.path,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class AuditContext:
    """Read-only snapshot of AUDIT fields taken after enrichment.

    Attributes:
        fields: Mapping from dotted path to the value found (None when absent)
    """
    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, path: str) -> Any:
        return self.fields.get(path)

    def is_not_empty(self) -> bool:
        return bool(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields)


class MapValidationResult(ABC):
    """Base of the map validation outcome union (Success or Failure)."""

    issues: Tuple[ValidationIssue, ...]
    audit_context: AuditContext

    @property
    @abstractmethod
    def ok(self) -> bool:
        """Whether validation passed."""


@dataclass(frozen=True)
class Success(MapValidationResult):
    """Validation passed; ``enriched_map`` has every applicable default applied."""
    enriched_map: JsonMap
    audit_context: AuditContext
    issues: Tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        """Always returns True - this is a success result."""
        return True


@dataclass(frozen=True)
class Failure(MapValidationResult):
    """Validation failed on at least one WARNING or CRITICAL issue."""
    issues: Tuple[ValidationIssue, ...]
    audit_context: AuditContext

    @property
    def ok(self) -> bool:
        """Always returns False - this is a failure result."""
        return False


class MapValidator:
    """Validates nested maps against one ValidationSchema.

    A MapValidator holds no per-call state, so a single instance can serve
    concurrent callers. The input map is never mutated; enrichment works on
    copies produced by set_by_path.
    """

    def __init__(self, schema: ValidationSchema):
        self.schema = schema

    def validate(self, data: Mapping[str, Any]) -> MapValidationResult:
        """Validate and enrich ``data``.

        Field rules run first in schema order, then group rules. Group
        presence is checked against the original input, not the enriched map.

        Args:
            data: The payload to validate

        Returns:
            Success or Failure
        """
        issues: List[ValidationIssue] = []
        enriched: JsonMap = dict(data)

        # 1. Field rules
        for rule in self.schema.fields:
            value = get_by_path(data, rule.path)

            if rule.category == FieldCategory.REQUIRED:
                if is_blank_or_empty(value):
                    issues.append(ValidationIssue(
                        path=rule.path,
                        message=f"Required field '{rule.path}' is missing or blank",
                        severity=rule.severity,
                    ))

            elif rule.category == FieldCategory.DEFAULTABLE:
                if is_blank_or_empty(value):
                    enriched = set_by_path(enriched, rule.path, rule.default_value)
                    issues.append(ValidationIssue(
                        path=rule.path,
                        message=f"Field '{rule.path}' was blank, applied default: {rule.default_value}",
                        severity=Severity.INFO,
                    ))

        # 2. Group rules
        for group in self.schema.groups:
            missing = [path for path in group.paths if is_blank_or_empty(get_by_path(data, path))]
            if missing:
                joined = ", ".join(missing)
                issues.append(ValidationIssue(
                    path=joined,
                    message=f"{group.message}: [{joined}]",
                    severity=group.severity,
                ))

        # 3. Audit snapshot, best-effort
        audit = AuditContext({
            rule.path: get_by_path(enriched, rule.path)
            for rule in self.schema.fields_of(FieldCategory.AUDIT)
        })

        # 4. Outcome
        failing = [issue for issue in issues if issue.severity.is_failing]
        logger.debug(
            "Map validation completed",
            issues=len(issues),
            failing=len(failing),
            outcome="failure" if failing else "success",
        )
        if failing:
            return Failure(issues=tuple(issues), audit_context=audit)
        return Success(enriched_map=enriched, audit_context=audit, issues=tuple(issues))


__all__ = [
    "ValidationIssue",
    "AuditContext",
    "MapValidationResult",
    "Success",
    "Failure",
    "MapValidator",
]
