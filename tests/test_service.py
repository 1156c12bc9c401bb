"""Unit tests for schema dispatch and response shaping.

Tests cover:
- Registry construction and lookup
- Unknown keys raising SchemaNotFoundError
- End-to-end validation of the stock flat and nested schemas
- HTTP status/body translation of results
"""

import pytest

from schemagate.builder import validation_schema
from schemagate.errors import SchemaNotFoundError
from schemagate.map_validator import Failure, MapValidator, Success
from schemagate.service import (
    RequestValidationService,
    SchemaRegistry,
    build_response,
    default_registry,
)


@pytest.fixture
def service():
    return RequestValidationService(default_registry())


class TestSchemaRegistry:
    """Test the schema registry."""

    def test_default_keys(self):
        """The default registry holds flat and nested."""
        registry = default_registry()
        assert sorted(registry.keys()) == ["flat", "nested"]

    def test_wraps_schemas(self):
        """Schemas are wrapped in MapValidators; validators are kept as is."""
        schema = validation_schema(lambda s: s.field("a"))
        validator = MapValidator(schema)
        registry = SchemaRegistry([("one", schema), ("two", validator)])
        assert isinstance(registry.get("one"), MapValidator)
        assert registry.get("two") is validator

    def test_duplicate_key_rejected(self):
        """Registering a key twice fails at construction."""
        schema = validation_schema(lambda s: s.field("a"))
        with pytest.raises(ValueError, match="registered twice"):
            SchemaRegistry([("one", schema), ("one", schema)])

    def test_unknown_key(self):
        """Unknown keys raise SchemaNotFoundError naming the known keys."""
        with pytest.raises(SchemaNotFoundError) as exc_info:
            default_registry().get("missing")
        assert exc_info.value.schema_key == "missing"
        assert exc_info.value.known_keys == ["flat", "nested"]
        assert "missing" in str(exc_info.value)

    def test_registry_is_read_only(self):
        """The underlying mapping cannot be modified."""
        registry = default_registry()
        with pytest.raises(TypeError):
            registry._validators["other"] = None


class TestRequestValidationService:
    """Test dispatch by schema key."""

    def test_unknown_key_raises(self, service):
        """Dispatch to an unknown key fails loudly."""
        with pytest.raises(SchemaNotFoundError):
            service.validate("unknown", {})

    def test_flat_missing_fields(self, service):
        """Flat request missing token and the auth group fails with two issues."""
        result = service.validate("flat", {"requestId": "r1"})
        assert isinstance(result, Failure)
        assert [i.path for i in result.issues] == ["token", "aud, baut"]

    def test_flat_success(self, service):
        """A complete flat request succeeds unchanged."""
        body = {"token": "t", "requestId": "r1", "aud": "a", "baut": "b"}
        result = service.validate("flat", body)
        assert isinstance(result, Success)
        assert result.enriched_map == body

    def test_nested_success_with_defaults(self, service):
        """The nested schema fills defaults and snapshots audit fields."""
        body = {
            "token": "t", "raut": "r", "aud": "a", "baut": "b", "audit1": "x",
            "data": {"userId": "u1"},
        }
        result = service.validate("nested", body)
        assert isinstance(result, Success)
        assert result.enriched_map["data"] == {
            "userId": "u1",
            "role": "USER",
            "features": {"beta": False},
        }
        assert result.audit_context.to_dict() == {"audit1": "x", "data.audit2": None}


class TestBuildResponse:
    """Test translation of results into HTTP responses."""

    def test_success_response(self, service):
        """Success maps to 200 with the enriched data."""
        body = {"token": "t", "requestId": "r1", "aud": "a", "baut": "b"}
        status, payload = build_response(service.validate("flat", body))
        assert status == 200
        assert payload == {"status": "processed", "data": body, "issues": []}

    def test_custom_status_text(self, service):
        """The success status text is configurable."""
        body = {"token": "t", "requestId": "r1", "aud": "a", "baut": "b"}
        _, payload = build_response(service.validate("flat", body), status_text="accepted")
        assert payload["status"] == "accepted"

    def test_failure_response(self, service):
        """Failure maps to 400 with issues and audit."""
        status, payload = build_response(service.validate("nested", {"audit1": "trace"}))
        assert status == 400
        assert payload["status"] == "error"
        assert payload["audit"] == {"audit1": "trace", "data.audit2": None}
        assert payload["issues"][0] == {
            "path": "token",
            "message": "Required field 'token' is missing or blank",
            "severity": "CRITICAL",
        }
        assert {"path": "raut, aud, baut", "message": "Auth fields missing: [raut, aud, baut]",
                "severity": "CRITICAL"} in payload["issues"]
