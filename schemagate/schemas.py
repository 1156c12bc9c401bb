"""Stock request schemas.

FLAT_REQUEST covers top-level fields only; NESTED_REQUEST exercises dotted
paths, defaults and audit fields.
"""

from schemagate.builder import validation_schema
from schemagate.types import Severity

FLAT_REQUEST = validation_schema(lambda s: (
    s.field("token", lambda f: f.required())
     .field("requestId", lambda f: f.required())
     .all_of("aud", "baut", configure=lambda g: g.severity(Severity.CRITICAL).message("Auth fields missing"))
))

NESTED_REQUEST = validation_schema(lambda s: (
    s.field("token", lambda f: f.required())
     .field("data.userId", lambda f: f.required())
     .field("data.role", lambda f: f.defaults_to("USER"))
     .field("data.features.beta", lambda f: f.defaults_to(False))
     .all_of("raut", "aud", "baut", configure=lambda g: g.severity(Severity.CRITICAL).message("Auth fields missing"))
     .field("audit1", lambda f: f.audit())
     .field("data.audit2", lambda f: f.audit())
))

__all__ = [
    "FLAT_REQUEST",
    "NESTED_REQUEST",
]
