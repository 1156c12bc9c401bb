"""Token and claims validators built on the typed engine.

Raw DTOs mirror what arrives on the wire: every field is optional. Validated
DTOs are value objects whose fields are all present. The validators below
connect the two with rule chains and transforms.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from schemagate.config import DEFAULT_ISSUER
from schemagate.rules import matches_value, nested, not_blank, not_null
from schemagate.validator import Validator


# === CLAIMS ===

@dataclass(frozen=True)
class RawClaims:
    tenant_id: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawClaims":
        """Create RawClaims from a JSON-shaped dict (camelCase keys)."""
        return cls(tenant_id=data.get("tenantId"), role=data.get("role"))


@dataclass(frozen=True)
class ValidatedClaims:
    tenant_id: str
    role: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tenantId": self.tenant_id, "role": self.role}


# === REFRESH TOKEN ===

@dataclass(frozen=True)
class RawRefreshToken:
    sub: Optional[str] = None
    iss: Optional[str] = None
    exp: Optional[int] = None
    jti: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawRefreshToken":
        return cls(
            sub=data.get("sub"),
            iss=data.get("iss"),
            exp=data.get("exp"),
            jti=data.get("jti"),
        )


@dataclass(frozen=True)
class ValidatedRefreshToken:
    sub: str
    iss: str
    exp: int
    jti: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sub": self.sub, "iss": self.iss, "exp": self.exp, "jti": self.jti}


# === ACCESS TOKEN ===

@dataclass(frozen=True)
class RawAccessToken:
    sub: Optional[str] = None
    iss: Optional[str] = None
    exp: Optional[int] = None
    claims: Optional[RawClaims] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawAccessToken":
        """Create RawAccessToken from a JSON-shaped dict.

        A ``claims`` value that is not an object is treated as absent.
        """
        claims = data.get("claims")
        return cls(
            sub=data.get("sub"),
            iss=data.get("iss"),
            exp=data.get("exp"),
            claims=RawClaims.from_dict(claims) if isinstance(claims, dict) else None,
        )


@dataclass(frozen=True)
class ValidatedAccessToken:
    sub: str
    iss: str
    exp: int
    claims: ValidatedClaims

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sub": self.sub,
            "iss": self.iss,
            "exp": self.exp,
            "claims": self.claims.to_dict(),
        }


class ClaimsValidator(Validator[RawClaims, ValidatedClaims]):
    """Validator for token claims: tenantId and role must be non-blank."""

    def __init__(self):
        super().__init__(
            rules=[
                not_blank("tenantId", lambda raw: raw.tenant_id),
                not_blank("role", lambda raw: raw.role),
            ],
            transform=self._build,
        )

    @staticmethod
    def _build(raw: RawClaims) -> Optional[ValidatedClaims]:
        if raw.tenant_id is not None and raw.role is not None:
            return ValidatedClaims(tenant_id=raw.tenant_id, role=raw.role)
        return None


class RefreshTokenValidator(Validator[RawRefreshToken, ValidatedRefreshToken]):
    """Validator for refresh tokens issued by ``issuer``."""

    def __init__(self, issuer: str = DEFAULT_ISSUER):
        self.issuer = issuer
        super().__init__(
            rules=[
                not_blank("sub", lambda raw: raw.sub),
                not_blank("iss", lambda raw: raw.iss),
                not_null("exp", lambda raw: raw.exp),
                not_blank("jti", lambda raw: raw.jti),
                matches_value("iss", issuer, lambda raw: raw.iss),
            ],
            transform=self._build,
        )

    @staticmethod
    def _build(raw: RawRefreshToken) -> Optional[ValidatedRefreshToken]:
        if raw.sub is not None and raw.iss is not None and raw.exp is not None and raw.jti is not None:
            return ValidatedRefreshToken(sub=raw.sub, iss=raw.iss, exp=raw.exp, jti=raw.jti)
        return None


class AccessTokenValidator(Validator[RawAccessToken, ValidatedAccessToken]):
    """Validator for access tokens with nested claims.

    Claims are validated twice: once by the ``nested`` rule, which reports
    prefixed field errors, and again in the transform, which needs the
    validated claims value. Rules always run first, so callers only ever see
    the rule-level errors for bad claims.
    """

    def __init__(self, claims_validator: Optional[ClaimsValidator] = None, issuer: str = DEFAULT_ISSUER):
        self.claims_validator = claims_validator or ClaimsValidator()
        self.issuer = issuer
        super().__init__(
            rules=[
                not_blank("sub", lambda raw: raw.sub),
                not_blank("iss", lambda raw: raw.iss),
                not_null("exp", lambda raw: raw.exp),
                matches_value("iss", issuer, lambda raw: raw.iss),
                nested("claims", lambda raw: raw.claims, self.claims_validator),
            ],
            transform=self._build,
        )

    def _build(self, raw: RawAccessToken) -> Optional[ValidatedAccessToken]:
        if raw.sub is None or raw.iss is None or raw.exp is None or raw.claims is None:
            return None
        claims_result = self.claims_validator.validate(raw.claims)
        if not claims_result.is_valid:
            return None
        return ValidatedAccessToken(sub=raw.sub, iss=raw.iss, exp=raw.exp, claims=claims_result.value)


__all__ = [
    "RawClaims",
    "ValidatedClaims",
    "RawRefreshToken",
    "ValidatedRefreshToken",
    "RawAccessToken",
    "ValidatedAccessToken",
    "ClaimsValidator",
    "RefreshTokenValidator",
    "AccessTokenValidator",
]
