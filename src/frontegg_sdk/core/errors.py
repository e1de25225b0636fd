"""Centralized error factory for the Frontegg SDK.

Provides consistent transformation of transport exceptions into SDK errors.
"""

from __future__ import annotations

import httpx

from ..errors import FronteggError, NetworkError, TimeoutError


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def from_exception(
        exc: Exception,
        *,
        timeout_seconds: float | None = None,
    ) -> FronteggError:
        """Create SDK error from exception.

        Args:
            exc: Original exception.
            timeout_seconds: Timeout in force when the request was made.

        Returns:
            Appropriate FronteggError subclass.
        """
        if isinstance(exc, FronteggError):
            return exc

        if isinstance(exc, httpx.TimeoutException):
            error: FronteggError = TimeoutError(
                f"Request timed out: {exc}",
                timeout_seconds=timeout_seconds,
            )
            error.__cause__ = exc
            return error

        if isinstance(exc, httpx.ConnectError):
            return NetworkError(f"Connection failed: {exc}", cause=exc)

        if isinstance(exc, httpx.HTTPError):
            return NetworkError(f"HTTP error: {exc}", cause=exc)

        return NetworkError(f"Unexpected error: {exc}", cause=exc)
