"""Dispatch of map validation by schema key.

The registry maps string keys to MapValidator instances. It is built once at
startup and read-only afterwards, so it can be shared across threads without
locking. Asking for an unregistered key is a configuration error and raises.

Usage:
    >>> service = RequestValidationService(default_registry())
    >>> sorted(service.registry.keys())
    ['flat', 'nested']
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from schemagate.config import get_logger
from schemagate.errors import SchemaNotFoundError
from schemagate.map_validator import MapValidationResult, MapValidator, Success
from schemagate.schema import ValidationSchema
from schemagate.schemas import FLAT_REQUEST, NESTED_REQUEST

logger = get_logger(__name__)


class SchemaRegistry:
    """Immutable mapping from schema key to MapValidator.

    Args:
        entries: Mapping or iterable of (key, schema-or-validator) pairs.
            Schemas are wrapped in a MapValidator.

    Raises:
        ValueError: If the same key is given twice
    """

    def __init__(
        self,
        entries: Union[
            Mapping[str, Union[ValidationSchema, MapValidator]],
            Iterable[Tuple[str, Union[ValidationSchema, MapValidator]]],
        ],
    ):
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        validators: Dict[str, MapValidator] = {}
        for key, value in pairs:
            if key in validators:
                raise ValueError(f"Schema key '{key}' registered twice")
            validators[key] = value if isinstance(value, MapValidator) else MapValidator(value)
        self._validators = MappingProxyType(validators)

    def get(self, schema_key: str) -> MapValidator:
        """Return the validator for ``schema_key``.

        Raises:
            SchemaNotFoundError: If the key is not registered
        """
        try:
            return self._validators[schema_key]
        except KeyError:
            raise SchemaNotFoundError(schema_key, list(self._validators)) from None

    def keys(self) -> List[str]:
        return list(self._validators)


def default_registry() -> SchemaRegistry:
    """Registry with the stock "flat" and "nested" request schemas."""
    return SchemaRegistry({"flat": FLAT_REQUEST, "nested": NESTED_REQUEST})


class RequestValidationService:
    """Validates request bodies with the validator registered under a key."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def validate(self, schema_key: str, body: Mapping[str, Any]) -> MapValidationResult:
        """Validate ``body`` with the schema registered as ``schema_key``.

        Raises:
            SchemaNotFoundError: If no schema is registered under the key
        """
        try:
            validator = self.registry.get(schema_key)
        except SchemaNotFoundError:
            logger.error("No schema registered", schema_key=schema_key, known=self.registry.keys())
            raise
        result = validator.validate(body)
        logger.debug("Request validated", schema_key=schema_key, ok=result.ok)
        return result


def build_response(result: MapValidationResult, status_text: str = "processed") -> Tuple[int, Dict[str, Any]]:
    """Translate a map validation result into an HTTP status and JSON body.

    Success becomes 200 with the enriched data, Failure becomes 400 with the
    issues and the audit snapshot.
    """
    issues = [issue.to_dict() for issue in result.issues]
    if isinstance(result, Success):
        return 200, {"status": status_text, "data": result.enriched_map, "issues": issues}
    return 400, {"status": "error", "issues": issues, "audit": result.audit_context.to_dict()}


__all__ = [
    "SchemaRegistry",
    "default_registry",
    "RequestValidationService",
    "build_response",
]
