"""Typed validator engine.

A Validator turns a raw input object into a distinct validated type. It runs
every rule (collecting all violations rather than stopping at the first) and
only when none are found calls its transform to build the validated value.

Results are a two-variant union: Valid carries the value, Invalid carries the
errors. This is a separate type from the map validator's Success/Failure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from schemagate.config import get_logger
from schemagate.errors import ValidationError
from schemagate.rules import Rule
from schemagate.types import ErrorCode

RAW = TypeVar("RAW")
VALIDATED = TypeVar("VALIDATED")
T = TypeVar("T")

logger = get_logger(__name__)

ROOT_FIELD = "_root"

CONSTRUCTION_FAILED = ValidationError(
    field=ROOT_FIELD,
    message="Construction failed",
    code=ErrorCode.CONSTRUCTION_FAILED,
)


class ValidationResult(ABC, Generic[T]):
    """Base of the typed validation outcome union (Valid or Invalid)."""

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        """Whether validation passed."""


@dataclass(frozen=True)
class Valid(ValidationResult[T]):
    value: T

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def errors(self) -> Tuple[ValidationError, ...]:
        return ()


@dataclass(frozen=True)
class Invalid(ValidationResult[T]):
    """Validation failed; ``errors`` lists every violation found."""
    errors: Tuple[ValidationError, ...]

    def __post_init__(self):
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def is_valid(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {"errors": [e.to_dict() for e in self.errors]}


class Validator(Generic[RAW, VALIDATED]):
    """Validates RAW objects with ordered rules and builds VALIDATED values.

    The transform may return None when its own preconditions are not met.
    That only happens when the rules and the transform disagree, so it is
    reported as a single CONSTRUCTION_FAILED error at ``_root``.

    Attributes:
        rules: Rules evaluated in order on every call

    Examples:
        >>> from schemagate.rules import not_blank
        >>> validator = Validator(
        ...     rules=[not_blank("name", lambda raw: raw.get("name"))],
        ...     transform=lambda raw: raw["name"].title(),
        ... )
        >>> validator.validate({"name": "ada"})
        Valid(value='Ada')
    """

    def __init__(
        self,
        rules: Sequence[Rule[RAW]],
        transform: Callable[[RAW], Optional[VALIDATED]],
    ):
        self.rules: Tuple[Rule[RAW], ...] = tuple(rules)
        self._transform = transform

    def validate(self, raw: RAW) -> ValidationResult[VALIDATED]:
        """Validate ``raw`` and, if every rule passes, transform it.

        Args:
            raw: The raw input object

        Returns:
            Valid with the transformed value, or Invalid with all errors
        """
        errors: List[ValidationError] = []
        for rule in self.rules:
            rule_errors = rule.check(raw)
            if rule_errors:
                logger.debug("Rule failed", rule=rule.kind, field=rule.field, errors=len(rule_errors))
            errors.extend(rule_errors)

        if errors:
            logger.debug(
                "Typed validation failed",
                validator=type(self).__name__,
                errors=len(errors),
            )
            return Invalid(tuple(errors))

        validated = self._transform(raw)
        if validated is None:
            logger.warning(
                "Transform returned no value after rules passed",
                validator=type(self).__name__,
            )
            return Invalid((CONSTRUCTION_FAILED,))

        return Valid(validated)


__all__ = [
    "ROOT_FIELD",
    "ValidationResult",
    "Valid",
    "Invalid",
    "Validator",
]
