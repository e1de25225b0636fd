"""Vendor credential exchange and the SDK's own access token.

The authenticator trades the configured client credentials for a vendor
token on the authentication plane and hands that token to resource
clients. The held token is replaced wholesale on every exchange.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Self

from pydantic import ValidationError as PydanticValidationError

from .config import FronteggConfig, ServiceKey
from .core.error_reporter import ErrorReporter
from .core.http_executor import HTTPExecutor
from .core.json_codec import JsonCodec
from .errors import AuthenticationError, FronteggError
from .http import create_http_client
from .models import AccessToken, ApiError, AuthenticationResponse, TokenType
from .telemetry import get_logger, trace_operation


class AuthState(StrEnum):
    """Lifecycle of the SDK's own access token."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"


class Authenticator:
    """Obtains, holds and refreshes the SDK's vendor access token.

    ``validate_authentication`` is safe to call before every outbound
    request: it only talks to the network when no fresh token is held, and
    concurrent callers share a single exchange.
    """

    def __init__(
        self,
        config: FronteggConfig,
        executor: HTTPExecutor | None = None,
        *,
        codec: JsonCodec | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize authenticator.

        Args:
            config: SDK configuration.
            executor: HTTP executor; one owning a new client is built if omitted.
            codec: JSON codec for request and response bodies.
            clock: Returns the current aware datetime; injectable for tests.
        """
        self.config = config
        self._owns_client = executor is None
        self._executor = executor or HTTPExecutor(create_http_client(config))
        self._codec = codec or JsonCodec()
        self._reporter = ErrorReporter(self._codec)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._access_token: AccessToken | None = None
        self._authenticating = False
        self._lock = threading.RLock()
        self._logger = get_logger().bind(client_id=config.client_id)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Drop the held token and close the HTTP client if owned."""
        with self._lock:
            self._access_token = None
        if self._owns_client:
            self._executor.client.close()

    @property
    def executor(self) -> HTTPExecutor:
        """Get the HTTP executor shared with resource clients."""
        return self._executor

    @property
    def state(self) -> AuthState:
        """Get the current authentication state."""
        if self._authenticating:
            return AuthState.AUTHENTICATING
        token = self._access_token
        if token is None:
            return AuthState.UNAUTHENTICATED
        if token.is_expired(self._clock()):
            return AuthState.EXPIRED
        return AuthState.AUTHENTICATED

    @property
    def access_token(self) -> AccessToken | None:
        """Get the held token, fresh or not, without any I/O."""
        return self._access_token

    def get_access_token(self) -> AccessToken | None:
        """Get the held token, fresh or not, without any I/O."""
        return self._access_token

    def get_api_error(self) -> ApiError | None:
        """Get the error recorded by the last failed exchange."""
        return self._reporter.get_api_error()

    def authenticate(self) -> bool:
        """Exchange the client credentials for a new vendor token.

        Returns:
            True on success; False on failure when ``throw_on_error`` is off.

        Raises:
            AuthenticationError: On failure when ``throw_on_error`` is on.
        """
        with self._lock:
            return self._authenticate()

    def validate_authentication(self) -> None:
        """Make sure a fresh token is held, authenticating if needed.

        Raises:
            AuthenticationError: If the exchange fails and ``throw_on_error``
                is on.
        """
        if self._has_fresh_token():
            return
        with self._lock:
            # Another caller may have refreshed while we waited
            if self._has_fresh_token():
                return
            self._authenticate()

    def _has_fresh_token(self) -> bool:
        token = self._access_token
        return token is not None and not token.is_expired(self._clock())

    def _authenticate(self) -> bool:
        self._authenticating = True
        try:
            with trace_operation(
                "authenticate",
                attributes={"frontegg.client_id": self.config.client_id},
            ):
                return self._exchange_credentials()
        finally:
            self._authenticating = False

    def _exchange_credentials(self) -> bool:
        url = self.config.get_authentication_url(ServiceKey.AUTHENTICATION)
        body = {
            "clientId": self.config.client_id,
            "secret": self.config.client_secret.get_secret_value(),
        }
        self._logger.debug("Authenticating with vendor credentials", url=url)

        try:
            response = self._executor.execute(
                "POST",
                url,
                content=self._codec.encode(body),
                headers={"Content-Type": "application/json"},
            )
        except FronteggError as e:
            self._access_token = None
            self._reporter.set_api_error(e.code, e.message)
            return self._fail(e.message, cause=e)

        if not self._reporter.classify(response, throw_on_error=False):
            self._access_token = None
            api_error = self._reporter.get_api_error()
            message = api_error.message if api_error else "Authentication failed"
            return self._fail(message, status_code=response.status_code)

        try:
            auth = AuthenticationResponse.model_validate(
                self._codec.decode(response.content)
            )
        except PydanticValidationError as e:
            self._access_token = None
            message = "Invalid authentication response"
            self._reporter.set_api_error("invalid_response", message, response.status_code)
            return self._fail(message, status_code=response.status_code, cause=e)

        self._access_token = AccessToken.from_ttl(
            auth.token,
            auth.expires_in,
            type=TokenType.VENDOR_TOKEN,
            now=self._clock(),
            buffer_seconds=self.config.cache.token_buffer,
        )
        self._reporter.clear_api_error()
        self._logger.info("Authenticated", expires_in=auth.expires_in)
        return True

    def _fail(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> bool:
        self._logger.warning(
            "Authentication failed",
            status=status_code,
            error=message,
        )
        if self.config.throw_on_error:
            raise AuthenticationError(message, status_code=status_code) from cause
        return False
