"""Builder DSL for validation schemas.

Usage:
    >>> from schemagate.builder import validation_schema
    >>> schema = validation_schema(lambda s: (
    ...     s.field("token", lambda f: f.required())
    ...      .field("data.role", lambda f: f.defaults_to("USER"))
    ...      .all_of("aud", "baut", configure=lambda g: g.message("Auth fields missing"))
    ... ))
    >>> [rule.path for rule in schema.fields]
    ['token', 'data.role']
"""

from typing import Any, Callable, List, Optional

from schemagate.schema import FieldRule, GroupRule, ValidationSchema
from schemagate.types import FieldCategory, Severity


class FieldRuleBuilder:
    """Configures one field rule. Defaults to REQUIRED with CRITICAL severity."""

    def __init__(self, path: str):
        self._path = path
        self._category = FieldCategory.REQUIRED
        self._severity = Severity.CRITICAL
        self._default_value: Any = None

    def required(self, severity: Severity = Severity.CRITICAL) -> "FieldRuleBuilder":
        self._category = FieldCategory.REQUIRED
        self._severity = severity
        return self

    def defaults_to(self, value: Any) -> "FieldRuleBuilder":
        self._category = FieldCategory.DEFAULTABLE
        self._default_value = value
        return self

    def audit(self) -> "FieldRuleBuilder":
        self._category = FieldCategory.AUDIT
        self._severity = Severity.INFO
        return self

    def build(self) -> FieldRule:
        return FieldRule(
            path=self._path,
            category=self._category,
            severity=self._severity,
            default_value=self._default_value,
        )


class GroupRuleBuilder:
    """Configures one all-of group rule."""

    def __init__(self, paths: List[str]):
        self._paths = tuple(paths)
        self._severity = Severity.CRITICAL
        self._message = f"Required fields missing: {', '.join(self._paths)}"

    def severity(self, severity: Severity) -> "GroupRuleBuilder":
        self._severity = severity
        return self

    def message(self, message: str) -> "GroupRuleBuilder":
        self._message = message
        return self

    def build(self) -> GroupRule:
        return GroupRule(paths=self._paths, severity=self._severity, message=self._message)


class SchemaBuilder:
    """Accumulates field and group rules in declaration order.

    Each call to ``field`` or ``all_of`` appends one rule; ``build`` returns an
    immutable ValidationSchema. The builder itself is a configuration-time
    object and is not meant to be shared between threads.
    """

    def __init__(self):
        self._fields: List[FieldRule] = []
        self._groups: List[GroupRule] = []

    def field(
        self,
        path: str,
        configure: Optional[Callable[[FieldRuleBuilder], Any]] = None,
    ) -> "SchemaBuilder":
        """Append a field rule, optionally configured by ``configure``."""
        rule_builder = FieldRuleBuilder(path)
        if configure is not None:
            configure(rule_builder)
        self._fields.append(rule_builder.build())
        return self

    def all_of(
        self,
        *paths: str,
        configure: Optional[Callable[[GroupRuleBuilder], Any]] = None,
    ) -> "SchemaBuilder":
        """Append a group rule over ``paths``, optionally configured by ``configure``."""
        if not paths:
            raise ValueError("all_of() requires at least one path")
        group_builder = GroupRuleBuilder(list(paths))
        if configure is not None:
            configure(group_builder)
        self._groups.append(group_builder.build())
        return self

    def build(self) -> ValidationSchema:
        return ValidationSchema(fields=tuple(self._fields), groups=tuple(self._groups))


def validation_schema(configure: Callable[[SchemaBuilder], Any]) -> ValidationSchema:
    """Build a schema by applying ``configure`` to a fresh SchemaBuilder."""
    builder = SchemaBuilder()
    configure(builder)
    return builder.build()


__all__ = [
    "FieldRuleBuilder",
    "GroupRuleBuilder",
    "SchemaBuilder",
    "validation_schema",
]
