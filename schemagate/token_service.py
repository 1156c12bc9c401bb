"""Caller-facing token operations built on the token validators.

TokenService shows the three ways a caller can consume a typed validation
result: raise on failure, degrade to None, or return a detailed response.
It also validates tokens in batches and summarizes the outcome.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from schemagate.config import Settings, get_logger
from schemagate.errors import ValidationError, ValidationException
from schemagate.tokens import (
    AccessTokenValidator,
    RawAccessToken,
    RawRefreshToken,
    RefreshTokenValidator,
    ValidatedAccessToken,
    ValidatedRefreshToken,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenValidationResponse:
    is_valid: bool
    token: Optional[ValidatedAccessToken]
    errors: List[ValidationError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "token": self.token.to_dict() if self.token is not None else None,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class BatchTokenResult:
    raw: RawAccessToken
    validated: Optional[ValidatedAccessToken]
    errors: List[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class BatchValidationResult:
    """Summary of a batch run.

    Attributes:
        total: Number of tokens submitted
        valid: Tokens that produced a validated value
        invalid: Tokens that did not
        results: Per-token outcome, in input order
    """
    total: int
    valid: int
    invalid: int
    results: List[BatchTokenResult] = field(default_factory=list)


class TokenService:
    """Validates access and refresh tokens on behalf of request handlers."""

    def __init__(
        self,
        access_token_validator: Optional[AccessTokenValidator] = None,
        refresh_token_validator: Optional[RefreshTokenValidator] = None,
    ):
        self.access_token_validator = access_token_validator or AccessTokenValidator()
        self.refresh_token_validator = refresh_token_validator or RefreshTokenValidator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Create a TokenService whose validators expect ``settings.issuer``."""
        return cls(
            access_token_validator=AccessTokenValidator(issuer=settings.issuer),
            refresh_token_validator=RefreshTokenValidator(issuer=settings.issuer),
        )

    def process_access_token(self, raw: RawAccessToken) -> ValidatedAccessToken:
        """Return the validated access token.

        Raises:
            ValidationException: If the token fails validation
        """
        result = self.access_token_validator.validate(raw)
        if not result.is_valid:
            raise ValidationException("Access token validation failed", result.errors)
        return result.value

    def process_refresh_token(self, raw: RawRefreshToken) -> Optional[ValidatedRefreshToken]:
        """Return the validated refresh token, or None if it is invalid."""
        result = self.refresh_token_validator.validate(raw)
        if not result.is_valid:
            logger.warning(
                "Refresh token validation failed",
                errors=[e.to_dict() for e in result.errors],
            )
            return None
        return result.value

    def validate_with_details(self, raw: RawAccessToken) -> TokenValidationResponse:
        result = self.access_token_validator.validate(raw)
        if result.is_valid:
            return TokenValidationResponse(is_valid=True, token=result.value, errors=[])
        return TokenValidationResponse(is_valid=False, token=None, errors=list(result.errors))

    def validate_batch(self, tokens: Sequence[RawAccessToken]) -> BatchValidationResult:
        """Validate every token and count the outcomes."""
        results: List[BatchTokenResult] = []
        for raw in tokens:
            result = self.access_token_validator.validate(raw)
            if result.is_valid:
                results.append(BatchTokenResult(raw=raw, validated=result.value, errors=[]))
            else:
                results.append(BatchTokenResult(raw=raw, validated=None, errors=list(result.errors)))

        valid = sum(1 for r in results if r.validated is not None)
        summary = BatchValidationResult(
            total=len(results),
            valid=valid,
            invalid=len(results) - valid,
            results=results,
        )
        logger.info(
            "Batch validation completed",
            total=summary.total,
            valid=summary.valid,
            invalid=summary.invalid,
        )
        return summary


__all__ = [
    "TokenValidationResponse",
    "BatchTokenResult",
    "BatchValidationResult",
    "TokenService",
]
