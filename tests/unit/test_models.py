"""Unit tests for SDK models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from frontegg_sdk.models import (
    JWK,
    JWKS,
    AccessToken,
    AuthenticationResponse,
    TokenClaims,
    TokenType,
)

NOW = datetime(2026, 1, 1, tzinfo=UTC)


class TestAccessToken:
    """Tests for the SDK's own access token."""

    def test_from_ttl(self) -> None:
        token = AccessToken.from_ttl("t", 3600, now=NOW)

        assert token.type == TokenType.VENDOR_TOKEN
        assert token.expires_at == NOW + timedelta(seconds=3600)
        assert token.time_until_expiry(NOW) == timedelta(seconds=3600)

    def test_expired_at_boundary(self) -> None:
        token = AccessToken.from_ttl("t", 60, now=NOW)

        assert not token.is_expired(NOW + timedelta(seconds=59))
        assert token.is_expired(NOW + timedelta(seconds=60))

    def test_frozen(self) -> None:
        token = AccessToken.from_ttl("t", 60, now=NOW)

        with pytest.raises(ValidationError):
            token.value = "other"


class TestAuthenticationResponse:
    """Tests for the vendor exchange response."""

    def test_alias(self) -> None:
        response = AuthenticationResponse.model_validate(
            {"token": "t", "expiresIn": 10, "extra": True}
        )

        assert response.expires_in == 10

    def test_positive_lifetime_required(self) -> None:
        with pytest.raises(ValidationError):
            AuthenticationResponse.model_validate({"token": "t", "expiresIn": -5})


class TestTokenClaims:
    """Tests for presented token claims."""

    def test_alias_and_extra_claims(self) -> None:
        claims = TokenClaims(exp=1, tenantId="t", type="userToken", roles=["admin"])

        assert claims.tenant_id == "t"
        assert claims.model_extra == {"roles": ["admin"]}

    def test_expiry_is_exclusive(self) -> None:
        claims = TokenClaims(exp=NOW.timestamp(), tenantId="t", type="userToken")

        assert claims.is_expired(NOW)
        assert not claims.is_expired(NOW - timedelta(seconds=1))
        assert claims.expires_at == NOW

    @pytest.mark.parametrize("exp", ["123", True, None, float("nan"), float("inf")])
    def test_exp_must_be_numeric(self, exp: object) -> None:
        with pytest.raises(ValidationError):
            TokenClaims(exp=exp, tenantId="t", type="userToken")


class TestJWKS:
    """Tests for key sets."""

    def test_lookup_and_signing_keys(self) -> None:
        jwks = JWKS(
            keys=[
                JWK(kty="RSA", kid="sig", use="sig", n="n", e="AQAB"),
                JWK(kty="RSA", kid="enc", use="enc", n="n", e="AQAB"),
                JWK(kty="oct", kid="any", k="c2VjcmV0"),
            ]
        )

        assert jwks.get_key("enc").use == "enc"
        assert jwks.get_key("missing") is None
        assert [key.kid for key in jwks.get_signing_keys()] == ["sig", "any"]
