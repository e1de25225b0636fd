"""Property tests for access token validation.

Claims gates are decided before any key material is fetched, and only
allow-listed algorithms ever reach the key set.
"""

from __future__ import annotations

from typing import Any

import httpx
import jwt
import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from frontegg_sdk.config import FronteggConfig, TelemetryConfig
from frontegg_sdk.core.http_executor import HTTPExecutor
from frontegg_sdk.core.token_validator import TokenValidator
from frontegg_sdk.errors import (
    ExpiredTokenError,
    MalformedTokenError,
    TenantMismatchError,
    TokenValidationError,
    UnsupportedAlgorithmError,
    WrongTokenTypeError,
)
from frontegg_sdk.http import create_http_client
from frontegg_sdk.jwks import KeySetResolver

from conftest import (
    BASE_URL,
    HMAC_KID,
    HMAC_SECRET,
    JWKS_PATH,
    TENANT_ID,
    FakeClock,
    RecordingTransport,
    forge_token,
    token_claims,
)

CONFIG = FronteggConfig(
    client_id="test-client-id",
    client_secret="test-client-secret",
    base_url=BASE_URL,
    telemetry=TelemetryConfig(enabled=False),
)

identifiers = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N")),
    min_size=1,
    max_size=20,
)
unsupported_algs = st.one_of(
    st.text(max_size=10).filter(lambda alg: alg.upper() not in {"HS256", "RS256"}),
    st.sampled_from(["none", "NONE", "ES256", "HS384", "HS512", "RS512", "PS256", "EdDSA"]),
    st.none(),
)


def build_validator(jwks_body: dict[str, Any]) -> tuple[TokenValidator, RecordingTransport]:
    transport = RecordingTransport()
    transport.add("GET", JWKS_PATH, json_body=jwks_body)
    client = create_http_client(CONFIG, transport=httpx.MockTransport(transport))
    resolver = KeySetResolver(BASE_URL + JWKS_PATH, HTTPExecutor(client))
    return TokenValidator(resolver, clock=FakeClock()), transport


def hs256(claims: dict[str, Any]) -> str:
    return jwt.encode(claims, HMAC_SECRET, algorithm="HS256", headers={"kid": HMAC_KID})


class TestClaimGateProperties:
    """Property tests for the claim gates."""

    @given(expired_by=st.integers(min_value=0, max_value=10**8))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_expired_never_fetches(self, expired_by: int, jwks_body: dict[str, Any]) -> None:
        """Any token whose exp is not in the future is rejected offline."""
        validator, transport = build_validator(jwks_body)
        token = hs256(token_claims(expires_in=-expired_by))

        with pytest.raises(ExpiredTokenError):
            validator.validate(token, TENANT_ID, "tenantApiToken")

        assert transport.calls(JWKS_PATH) == 0

    @given(tenant=identifiers, other=identifiers)
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_tenant_must_match_exactly(
        self,
        tenant: str,
        other: str,
        jwks_body: dict[str, Any],
    ) -> None:
        validator, transport = build_validator(jwks_body)
        token = hs256(token_claims(tenant_id=tenant))

        if tenant == other:
            assert validator.validate(token, other, "tenantApiToken") is True
        else:
            with pytest.raises(TenantMismatchError):
                validator.validate(token, other, "tenantApiToken")
            assert transport.calls(JWKS_PATH) == 0

    @given(claimed=identifiers, expected=identifiers)
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_type_must_match_exactly(
        self,
        claimed: str,
        expected: str,
        jwks_body: dict[str, Any],
    ) -> None:
        validator, _ = build_validator(jwks_body)
        token = hs256(token_claims(type=claimed))

        if claimed == expected:
            assert validator.validate(token, TENANT_ID, expected) is True
        else:
            with pytest.raises(WrongTokenTypeError):
                validator.validate(token, TENANT_ID, expected)


class TestAlgorithmProperties:
    """Property tests for the algorithm allow-list."""

    @given(alg=unsupported_algs)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_unsupported_algorithm_never_fetches(
        self,
        alg: Any,
        jwks_body: dict[str, Any],
    ) -> None:
        validator, transport = build_validator(jwks_body)
        token = forge_token({"alg": alg, "kid": HMAC_KID}, token_claims())

        with pytest.raises(UnsupportedAlgorithmError):
            validator.validate(token, TENANT_ID, "tenantApiToken")

        assert transport.calls(JWKS_PATH) == 0


class TestInputRobustness:
    """Property tests for arbitrary input."""

    @given(token=st.text(max_size=200))
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_arbitrary_text_never_crashes(self, token: str, jwks_body: dict[str, Any]) -> None:
        """Arbitrary input either validates or raises a validation error."""
        validator, _ = build_validator(jwks_body)

        try:
            result = validator.validate(token, TENANT_ID, "tenantApiToken")
        except TokenValidationError:
            return
        assert isinstance(result, bool)

    @given(signature=st.binary(min_size=0, max_size=64))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_forged_signature_rejected(self, signature: bytes, jwks_body: dict[str, Any]) -> None:
        validator, _ = build_validator(jwks_body)
        token = forge_token({"alg": "HS256", "kid": HMAC_KID}, token_claims(), signature)

        assert validator.validate(token, TENANT_ID, "tenantApiToken") is False

    @given(segments=st.lists(st.text(alphabet="abcXYZ019-_", max_size=8), max_size=6))
    @settings(max_examples=100)
    def test_wrong_segment_count_malformed(self, segments: list[str]) -> None:
        token = ".".join(segments)
        if len(segments) == 3 and all(segments[:2]):
            return
        validator = TokenValidator(KeySetResolver(BASE_URL + JWKS_PATH, None))

        with pytest.raises(MalformedTokenError):
            validator.validate(token, TENANT_ID, "tenantApiToken")
