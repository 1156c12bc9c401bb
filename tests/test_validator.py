"""Unit tests for the typed validator engine.

Tests cover:
- Accumulate-all rule evaluation
- Transform only after all rules pass
- CONSTRUCTION_FAILED when the transform returns nothing
- Result variants and serialization
"""

import logging
from dataclasses import dataclass
from typing import Optional

import pytest

from schemagate.errors import ValidationError
from schemagate.rules import not_blank, not_null
from schemagate.types import ErrorCode
from schemagate.validator import ROOT_FIELD, Invalid, Valid, ValidationResult, Validator


@dataclass
class RawUser:
    name: Optional[str] = None
    age: Optional[int] = None


@dataclass
class User:
    name: str
    age: int


def _rules():
    return [
        not_blank("name", lambda r: r.name),
        not_null("age", lambda r: r.age),
    ]


class TestValidatorEngine:
    """Test the Validator engine."""

    def test_valid_input(self):
        """Should return Valid with the transformed value."""
        validator = Validator(_rules(), lambda r: User(r.name, r.age))
        result = validator.validate(RawUser(name="Ada", age=36))
        assert isinstance(result, Valid)
        assert result.is_valid is True
        assert result.value == User("Ada", 36)
        assert result.errors == ()

    def test_logs_failing_rule_kind(self, caplog):
        """Each failing rule is logged with its kind and field."""
        caplog.set_level(logging.DEBUG, logger="schemagate.validator")
        Validator(_rules(), lambda r: User(r.name, r.age)).validate(RawUser(name="", age=36))
        assert "Rule failed" in caplog.text
        assert "not_blank" in caplog.text

    def test_accumulates_all_errors(self):
        """Every rule runs; errors come back in rule order."""
        validator = Validator(_rules(), lambda r: User(r.name, r.age))
        result = validator.validate(RawUser(name="", age=None))
        assert isinstance(result, Invalid)
        assert result.is_valid is False
        assert [(e.field, e.code) for e in result.errors] == [
            ("name", ErrorCode.BLANK),
            ("age", ErrorCode.REQUIRED),
        ]

    def test_transform_not_called_on_failure(self):
        """The transform is skipped when any rule fails."""
        calls = []

        def transform(raw):
            calls.append(raw)
            return User(raw.name, raw.age)

        Validator(_rules(), transform).validate(RawUser())
        assert calls == []

    def test_construction_failed(self):
        """A transform returning None yields a single CONSTRUCTION_FAILED error."""
        validator = Validator([not_blank("name", lambda r: r.name)], lambda r: None)
        result = validator.validate(RawUser(name="Ada"))
        assert isinstance(result, Invalid)
        assert result.errors == (
            ValidationError(ROOT_FIELD, "Construction failed", ErrorCode.CONSTRUCTION_FAILED),
        )
        assert result.errors[0].field == "_root"

    def test_drifted_rules_and_transform(self):
        """Rules that miss a transform precondition surface as CONSTRUCTION_FAILED."""
        validator = Validator(
            [not_blank("name", lambda r: r.name)],
            lambda r: User(r.name, r.age) if r.age is not None else None,
        )
        result = validator.validate(RawUser(name="Ada", age=None))
        assert [e.code for e in result.errors] == [ErrorCode.CONSTRUCTION_FAILED]

    def test_no_rules(self):
        """A validator without rules only depends on the transform."""
        result = Validator([], lambda r: r).validate("anything")
        assert result == Valid("anything")

    def test_rules_are_frozen(self):
        """Rules passed in are stored as a tuple."""
        rules = _rules()
        validator = Validator(rules, lambda r: r)
        rules.clear()
        assert len(validator.rules) == 2

    def test_invalid_to_dict(self):
        """Invalid serializes its errors."""
        result = Invalid([ValidationError("name", "name is required", ErrorCode.REQUIRED)])
        assert result.to_dict() == {
            "errors": [{"field": "name", "message": "name is required", "code": "REQUIRED"}]
        }

    def test_result_base_is_abstract(self):
        """The union base cannot be instantiated on its own."""
        with pytest.raises(TypeError):
            ValidationResult()
        assert isinstance(Valid("x"), ValidationResult)


class TestValidationError:
    """Test the typed error record."""

    def test_prefixed(self):
        """prefixed() rewrites the field and keeps the rest."""
        error = ValidationError("role", "role must not be blank", ErrorCode.BLANK)
        assert error.prefixed("claims") == ValidationError(
            "claims.role", "role must not be blank", ErrorCode.BLANK
        )

    def test_from_dict_known_code(self):
        """Known codes are parsed into ErrorCode members."""
        error = ValidationError.from_dict({"field": "sub", "message": "m", "code": "REQUIRED"})
        assert error.code is ErrorCode.REQUIRED

    def test_from_dict_custom_code(self):
        """Unknown codes stay plain strings."""
        error = ValidationError.from_dict({"field": "sub", "message": "m", "code": "EXPIRED"})
        assert error.code == "EXPIRED"
        assert error.to_dict()["code"] == "EXPIRED"

    def test_frozen(self):
        """Errors are immutable."""
        error = ValidationError("sub", "m", ErrorCode.REQUIRED)
        with pytest.raises(AttributeError):
            error.field = "other"
