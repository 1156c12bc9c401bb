"""Validation rule factories for the typed validator engine.

A Rule checks one aspect of a raw object and returns every violation it finds
as ValidationError records. Rules are stateless and are composed into ordered
lists handed to a Validator.

Each factory closes over a field name and an extraction function that pulls
the checked value out of the raw object:

    >>> rule = not_blank("name", lambda raw: raw["name"])
    >>> [e.code.value for e in rule.check({"name": "  "})]
    ['BLANK']
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

from schemagate.errors import ValidationError
from schemagate.types import ErrorCode

T = TypeVar("T")
N = TypeVar("N")


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A named, pure check over values of type T.

    Attributes:
        field: Name of the field the rule reports on
        checker: Function returning the violations for one value
        kind: Short rule name, logged when the rule fails
    """
    field: str
    checker: Callable[[T], List[ValidationError]]
    kind: str = "custom"

    def check(self, value: T) -> List[ValidationError]:
        return list(self.checker(value))


def _required(field: str) -> ValidationError:
    return ValidationError(field=field, message=f"{field} is required", code=ErrorCode.REQUIRED)


def not_blank(field: str, extract: Callable[[T], Optional[str]]) -> Rule[T]:
    """Rule failing when the value is None (REQUIRED) or a blank string (BLANK)."""

    def check(value: T) -> List[ValidationError]:
        extracted = extract(value)
        if extracted is None:
            return [_required(field)]
        if isinstance(extracted, str) and not extracted.strip():
            return [ValidationError(
                field=field,
                message=f"{field} must not be blank",
                code=ErrorCode.BLANK,
            )]
        return []

    return Rule(field=field, checker=check, kind="not_blank")


def not_null(field: str, extract: Callable[[T], Any]) -> Rule[T]:
    """Rule failing only when the value is None; blank strings pass."""

    def check(value: T) -> List[ValidationError]:
        return [_required(field)] if extract(value) is None else []

    return Rule(field=field, checker=check, kind="not_null")


def matches_value(field: str, expected: str, extract: Callable[[T], Optional[str]]) -> Rule[T]:
    """Rule failing when a present value differs from ``expected``.

    Absent values pass; combine with not_blank or not_null to require presence.
    """

    def check(value: T) -> List[ValidationError]:
        actual = extract(value)
        if actual is not None and actual != expected:
            return [ValidationError(
                field=field,
                message=f"{field} must be '{expected}', got: '{actual}'",
                code=ErrorCode.INVALID_VALUE,
            )]
        return []

    return Rule(field=field, checker=check, kind="matches_value")


def nested(field: str, extract: Callable[[T], Optional[N]], validator: Any) -> Rule[T]:
    """Rule delegating a nested object to its own Validator.

    A missing nested object is reported as REQUIRED at ``field``. Errors from
    the nested validator are re-emitted with their field prefixed by
    ``"<field>."``; nesting composes, so deeper levels get one prefix each.

    Args:
        field: Name of the nested field on the parent object
        extract: Returns the nested raw object, or None
        validator: A Validator for the nested raw type
    """

    def check(value: T) -> List[ValidationError]:
        raw = extract(value)
        if raw is None:
            return [_required(field)]
        result = validator.validate(raw)
        if result.is_valid:
            return []
        return [error.prefixed(field) for error in result.errors]

    return Rule(field=field, checker=check, kind="nested")


__all__ = [
    "Rule",
    "not_blank",
    "not_null",
    "matches_value",
    "nested",
]
