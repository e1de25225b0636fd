"""HTTP executor shared by the authenticator, key set resolver and resource clients."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from ..telemetry import get_logger, trace_operation
from .errors import ErrorFactory


class HTTPExecutorProtocol(Protocol):
    """Protocol for HTTP executors."""

    def execute(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute HTTP request."""
        ...


class HTTPExecutor:
    """Synchronous single-shot HTTP executor.

    Non-2xx responses are returned to the caller, which applies the error
    policy; only transport failures raise.
    """

    def __init__(self, client: httpx.Client) -> None:
        """Initialize HTTP executor.

        Args:
            client: HTTP client.
        """
        self._client = client
        self._logger = get_logger()

    @property
    def client(self) -> httpx.Client:
        """Get the underlying HTTP client."""
        return self._client

    def execute(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute one HTTP request.

        Args:
            method: HTTP method.
            url: Request URL.
            **kwargs: Additional request arguments.

        Returns:
            HTTP response, whatever its status.

        Raises:
            NetworkError: On connection failure.
            TimeoutError: When the fixed timeout elapses.
        """
        with trace_operation(
            "http_request",
            attributes={"http.method": method, "http.url": url},
        ) as span:
            try:
                response = self._client.request(method, url, **kwargs)
            except httpx.HTTPError as e:
                self._logger.warning(
                    "HTTP request failed",
                    method=method,
                    url=url,
                    error=str(e),
                )
                timeout = self._client.timeout.read
                raise ErrorFactory.from_exception(e, timeout_seconds=timeout) from e

            span.set_attribute("http.status_code", response.status_code)
            return response
