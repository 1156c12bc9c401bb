"""schemagate: schema-driven map validation and typed rule validation.

schemagate provides two independent validation subsystems:
- A path-schema map validator that checks nested, JSON-shaped payloads against
  field and group rules, applies defaults to blank fields, snapshots audit
  fields, and decides the outcome from issue severity
- A typed rule/validator engine that turns raw objects into validated values
  with composable rules and dot-prefixed errors for nested objects

Basic usage:
    >>> from schemagate import MapValidator, validation_schema
    >>> schema = validation_schema(lambda s: s.field("token").all_of("aud", "baut"))
    >>> validator = MapValidator(schema)
"""

__version__ = "0.1.0"
__author__ = "schemagate Team"

# Version info
VERSION = (0, 1, 0)

import logging

# Silent until the host application configures logging
logging.getLogger("schemagate").addHandler(logging.NullHandler())

# Core exports
from schemagate.builder import SchemaBuilder, validation_schema
from schemagate.errors import (
    SchemaDefinitionError,
    SchemaNotFoundError,
    ValidationError,
    ValidationException,
)
from schemagate.map_validator import (
    AuditContext,
    Failure,
    MapValidationResult,
    MapValidator,
    Success,
    ValidationIssue,
)
from schemagate.rules import Rule, matches_value, nested, not_blank, not_null
from schemagate.schema import FieldRule, GroupRule, ValidationSchema
from schemagate.service import RequestValidationService, SchemaRegistry, default_registry
from schemagate.types import ErrorCode, FieldCategory, Severity
from schemagate.validator import Invalid, Valid, ValidationResult, Validator

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "SchemaBuilder",
    "validation_schema",
    "SchemaDefinitionError",
    "SchemaNotFoundError",
    "ValidationError",
    "ValidationException",
    "AuditContext",
    "Failure",
    "MapValidationResult",
    "MapValidator",
    "Success",
    "ValidationIssue",
    "Rule",
    "matches_value",
    "nested",
    "not_blank",
    "not_null",
    "FieldRule",
    "GroupRule",
    "ValidationSchema",
    "RequestValidationService",
    "SchemaRegistry",
    "default_registry",
    "ErrorCode",
    "FieldCategory",
    "Severity",
    "Invalid",
    "Valid",
    "ValidationResult",
    "Validator",
]
