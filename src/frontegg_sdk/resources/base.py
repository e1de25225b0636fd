"""Base class for resource clients that call the API with the vendor token."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from ..core.error_reporter import ErrorReporter
from ..core.json_codec import JsonCodec
from ..errors import AuthenticationError, ErrorCode, FronteggError
from ..telemetry import get_logger

if TYPE_CHECKING:
    from ..authenticator import Authenticator
    from ..config import FronteggConfig, ServiceKey
    from ..models import ApiError

ACCESS_TOKEN_HEADER = "x-access-token"
FRONTEGG_TENANT_HEADER = "frontegg-tenant-id"
TENANT_HEADER = "x-tenant-id"


class AuthenticatedClient:
    """Shared request plumbing for resource clients.

    Every call validates the SDK's own authentication first, sends the vendor
    token as ``x-access-token`` and runs the response through the error
    reporter under the configured ``throw_on_error`` policy.
    """

    service: ServiceKey | None = None
    tenant_header: str = FRONTEGG_TENANT_HEADER

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        codec: JsonCodec | None = None,
    ) -> None:
        self.authenticator = authenticator
        self._codec = codec or JsonCodec()
        self._reporter = self._create_reporter()
        self._logger = get_logger().bind(client=type(self).__name__)

    def _create_reporter(self) -> ErrorReporter:
        return ErrorReporter(self._codec)

    @property
    def config(self) -> FronteggConfig:
        """Get the SDK configuration."""
        return self.authenticator.config

    def get_api_error(self) -> ApiError | None:
        """Get the error recorded by the last failed call."""
        return self._reporter.get_api_error()

    def get_access_token_value(self) -> str:
        """Get the vendor token sent in the ``x-access-token`` header."""
        token = self.authenticator.get_access_token()
        if token is None:
            raise AuthenticationError(
                "Authentication problem", ErrorCode.NOT_AUTHENTICATED
            )
        return token.value

    def validate_authentication(self) -> None:
        """Ensure the SDK holds a fresh vendor token.

        Raises:
            AuthenticationError: If no token could be obtained.
        """
        self.authenticator.validate_authentication()
        if self.authenticator.get_access_token() is None:
            raise AuthenticationError(
                "Authentication problem", ErrorCode.NOT_AUTHENTICATED
            )

    def service_url(self, suffix: str = "") -> str:
        """Get this client's service URL with an optional path suffix."""
        if self.service is None:
            msg = f"{type(self).__name__} has no service configured"
            raise NotImplementedError(msg)
        return self.config.get_service_url(self.service) + suffix

    def build_headers(self, tenant_id: str | None = None) -> dict[str, str]:
        """Build request headers, adding the tenant header when scoped."""
        headers = {
            "Content-Type": "application/json",
            ACCESS_TOKEN_HEADER: self.get_access_token_value(),
        }
        if tenant_id:
            headers[self.tenant_header] = tenant_id
        return headers

    def send(
        self,
        method: str,
        url: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        tenant_id: str | None = None,
    ) -> httpx.Response | None:
        """Send an authenticated request and apply the error policy.

        Returns:
            The response, or None if the transport failed and
            ``throw_on_error`` is off.

        Raises:
            AuthenticationError: If the SDK cannot authenticate.
            ApiRequestError: On a failed response when ``throw_on_error`` is on.
            NetworkError: On a transport failure when ``throw_on_error`` is on.
        """
        self.validate_authentication()
        throw_on_error = self.config.throw_on_error

        try:
            response = self.authenticator.executor.execute(
                method,
                url,
                content=self._codec.encode(json_body) if json_body is not None else None,
                params=params,
                headers=self.build_headers(tenant_id),
            )
        except FronteggError as e:
            self._reporter.set_api_error(e.code, e.message)
            if throw_on_error:
                raise
            return None

        self._reporter.classify(response, throw_on_error)
        return response

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        tenant_id: str | None = None,
    ) -> Any:
        """Send an authenticated request and decode the JSON response body."""
        response = self.send(
            method,
            url,
            json_body=json_body,
            params=params,
            tenant_id=tenant_id,
        )
        if response is None:
            return None
        return self._codec.decode(response.content)

    def succeeded(self, response: httpx.Response | None) -> bool:
        """Check whether a response from :meth:`send` counts as success."""
        return response is not None and self._reporter.is_success(response)
