"""
Shared test fixtures for Frontegg SDK tests.

Provides a recording mock transport, configuration, signing keys and
token minting helpers.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm
from jwt.utils import base64url_encode

from frontegg_sdk.authenticator import Authenticator
from frontegg_sdk.config import FronteggConfig, TelemetryConfig
from frontegg_sdk.core.http_executor import HTTPExecutor
from frontegg_sdk.http import create_http_client

BASE_URL = "https://api.example.com"
AUTH_PATH = "/auth/vendor"
JWKS_PATH = "/.well-known/jwks.json"
TENANT_ID = "tenant-1"
RSA_KID = "rs-key"
HMAC_KID = "hs-key"
HMAC_SECRET = b"a-shared-secret-that-is-long-enough-for-hs256"
FIXED_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

Route = Callable[[httpx.Request], httpx.Response]


class RecordingTransport:
    """Mock transport that routes by method and path and records requests."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        handler: Route | None = None,
    ) -> None:
        """Register a route; a fresh response is built for every request."""

        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            if json_body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=json_body)

        self.routes[(method, path)] = handler or respond

    def fail(self, method: str, path: str, exc_type: type[httpx.TransportError]) -> None:
        """Register a route whose requests fail at the transport level."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_type("transport failure", request=request)

        self.routes[(method, path)] = handler

    def calls(self, path: str, method: str | None = None) -> int:
        """Count recorded requests to ``path``."""
        return sum(
            1
            for request in self.requests
            if request.url.path == path and method in (None, request.method)
        )

    def last(self, path: str) -> httpx.Request:
        """Last recorded request to ``path``."""
        return [r for r in self.requests if r.url.path == path][-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "No route"})
        return route(request)


class FakeClock:
    """Mutable aware-datetime clock."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def forge_token(
    header: dict[str, Any],
    payload: dict[str, Any],
    signature: bytes = b"signature",
) -> str:
    """Assemble a compact token from raw parts without signing it."""
    parts = [
        base64url_encode(json.dumps(header).encode()),
        base64url_encode(json.dumps(payload).encode()),
        base64url_encode(signature),
    ]
    return b".".join(parts).decode("ascii")


def token_claims(
    *,
    tenant_id: str = TENANT_ID,
    type: str = "tenantApiToken",
    expires_in: float = 3600,
    now: datetime = FIXED_NOW,
    **extra: Any,
) -> dict[str, Any]:
    """Claims of a token that passes every claim gate by default."""
    return {
        "exp": int(now.timestamp() + expires_in),
        "tenantId": tenant_id,
        "type": type,
        "sub": "user-1",
        **extra,
    }


@pytest.fixture
def config() -> FronteggConfig:
    """Provide a basic SDK configuration for testing."""
    return FronteggConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        base_url=BASE_URL,
        telemetry=TelemetryConfig(enabled=False),
    )


@pytest.fixture
def transport() -> RecordingTransport:
    """Provide a recording transport with a working vendor auth route."""
    recorder = RecordingTransport()
    recorder.add(
        "POST",
        AUTH_PATH,
        json_body={"token": "vendor-token", "expiresIn": 3600},
    )
    return recorder


@pytest.fixture
def http_client(
    config: FronteggConfig, transport: RecordingTransport
) -> Iterator[httpx.Client]:
    """Provide an HTTP client bound to the recording transport."""
    client = create_http_client(config, transport=httpx.MockTransport(transport))
    yield client
    client.close()


@pytest.fixture
def executor(http_client: httpx.Client) -> HTTPExecutor:
    """Provide an HTTP executor over the mock client."""
    return HTTPExecutor(http_client)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def authenticator(
    config: FronteggConfig,
    executor: HTTPExecutor,
    clock: FakeClock,
) -> Authenticator:
    """Provide an authenticator over the mock transport."""
    return Authenticator(config, executor, clock=clock)


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Provide an RSA signing key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_jwk(rsa_private_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    """Provide the public JWK of the RSA signing key."""
    jwk = RSAAlgorithm.to_jwk(rsa_private_key.public_key(), as_dict=True)
    return {**jwk, "kid": RSA_KID, "use": "sig", "alg": "RS256"}


@pytest.fixture(scope="session")
def hmac_jwk() -> dict[str, Any]:
    """Provide a symmetric JWK for HS256."""
    return {
        "kty": "oct",
        "kid": HMAC_KID,
        "k": base64url_encode(HMAC_SECRET).decode("ascii"),
    }


@pytest.fixture
def jwks_body(rsa_jwk: dict[str, Any], hmac_jwk: dict[str, Any]) -> dict[str, Any]:
    """Provide a published key set with both keys."""
    return {"keys": [rsa_jwk, hmac_jwk]}


@pytest.fixture
def rs256_token(rsa_private_key: rsa.RSAPrivateKey) -> Callable[..., str]:
    """Provide a factory for RS256 tokens signed with the RSA key."""

    def mint(claims: dict[str, Any] | None = None, kid: str = RSA_KID) -> str:
        return jwt.encode(
            claims or token_claims(),
            rsa_private_key,
            algorithm="RS256",
            headers={"kid": kid},
        )

    return mint


@pytest.fixture
def hs256_token() -> Callable[..., str]:
    """Provide a factory for HS256 tokens signed with the shared secret."""

    def mint(claims: dict[str, Any] | None = None, kid: str = HMAC_KID) -> str:
        return jwt.encode(
            claims or token_claims(),
            HMAC_SECRET,
            algorithm="HS256",
            headers={"kid": kid},
        )

    return mint
