"""Pydantic models for the Frontegg SDK.

Frozen value objects: a held access token is replaced wholesale, never
mutated field by field.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenType(StrEnum):
    """Kinds of tokens issued by the platform."""

    VENDOR_TOKEN = "vendorToken"
    USER_TOKEN = "userToken"
    TENANT_API_TOKEN = "tenantApiToken"


class RequestContext(BaseModel):
    """Tenant and user resolved from a host application request."""

    model_config = ConfigDict(frozen=True)

    tenant_id: str | None = None
    user_id: str | None = None
    permissions: list[str] = Field(default_factory=list)


class AuthenticationResponse(BaseModel):
    """Vendor credential exchange response."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    token: str = Field(..., min_length=1)
    expires_in: Annotated[int, Field(gt=0, alias="expiresIn")]


class AccessToken(BaseModel):
    """The SDK's own outbound access token."""

    model_config = ConfigDict(frozen=True)

    value: str
    type: TokenType = TokenType.VENDOR_TOKEN
    expires_at: datetime

    @classmethod
    def from_ttl(
        cls,
        value: str,
        ttl_seconds: int,
        *,
        type: TokenType = TokenType.VENDOR_TOKEN,
        now: datetime | None = None,
        buffer_seconds: int = 0,
    ) -> Self:
        """Create a token that expires ``ttl_seconds`` from ``now``."""
        issued = now or datetime.now(UTC)
        return cls(
            value=value,
            type=type,
            expires_at=issued + timedelta(seconds=ttl_seconds - buffer_seconds),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if token is expired."""
        return (now or datetime.now(UTC)) >= self.expires_at

    def time_until_expiry(self, now: datetime | None = None) -> timedelta:
        """Get time remaining until token expires."""
        return self.expires_at - (now or datetime.now(UTC))


class ApiError(BaseModel):
    """Error recorded from a failed API response."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    message: str
    http_status: int | None = None


class JWK(BaseModel):
    """JSON Web Key representation."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kty: str = Field(..., description="Key type")
    kid: str | None = Field(default=None, description="Key ID")
    use: str | None = Field(default=None, description="Key use")
    alg: str | None = Field(default=None, description="Algorithm")

    # RSA keys
    n: str | None = None
    e: str | None = None

    # Symmetric keys
    k: str | None = None

    def to_jwk_dict(self) -> dict[str, Any]:
        """Key as a plain JWK dictionary."""
        return self.model_dump(exclude_none=True)


class JWKS(BaseModel):
    """JSON Web Key Set."""

    model_config = ConfigDict(frozen=True)

    keys: list[JWK]

    def get_key(self, kid: str) -> JWK | None:
        """Get key by ID."""
        for key in self.keys:
            if key.kid == kid:
                return key
        return None

    def get_signing_keys(self) -> list[JWK]:
        """Get all keys suitable for signature verification."""
        return [k for k in self.keys if k.use in (None, "sig")]


class TokenHeader(BaseModel):
    """Protected header of a presented token."""

    model_config = ConfigDict(frozen=True, extra="allow")

    alg: str | None = None
    kid: str | None = None
    typ: str | None = None


class TokenClaims(BaseModel):
    """Claims of a presented token, scoped to a single validation call."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    exp: float = Field(
        ..., allow_inf_nan=False, description="Expiration time (Unix timestamp)"
    )
    tenant_id: str = Field(..., alias="tenantId")
    type: str
    sub: str | None = None

    @field_validator("exp", mode="before")
    @classmethod
    def validate_exp(cls, v: Any) -> Any:
        """Accept only JSON numbers; booleans and numeric strings are rejected."""
        if isinstance(v, bool) or not isinstance(v, int | float):
            msg = "exp must be a number"
            raise ValueError(msg)
        return v

    @property
    def expires_at(self) -> datetime:
        """Get expiration as datetime."""
        return datetime.fromtimestamp(self.exp, tz=UTC)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Expired unless ``exp`` is strictly in the future."""
        return self.exp <= (now or datetime.now(UTC)).timestamp()


class PKCEChallenge(BaseModel):
    """PKCE challenge data for the hosted login flow."""

    model_config = ConfigDict(frozen=True)

    code_verifier: str = Field(..., min_length=43, max_length=128)
    code_challenge: str = Field(..., min_length=43)
    code_challenge_method: str = Field(default="S256")

    @field_validator("code_challenge_method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate PKCE method is S256 (plain is insecure)."""
        if v != "S256":
            msg = "Only S256 code_challenge_method is supported"
            raise ValueError(msg)
        return v
