"""Classification of API responses into recorded or raised errors."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

import httpx

from ..errors import ApiRequestError
from ..models import ApiError
from ..telemetry import get_logger
from .json_codec import JsonCodec


class ErrorReporter:
    """Decides whether a response failed and records or raises the failure.

    The last recorded error stays queryable through :meth:`get_api_error`
    until it is replaced or cleared.
    """

    def __init__(
        self,
        codec: JsonCodec | None = None,
        *,
        success_statuses: Collection[int] | None = None,
    ) -> None:
        """Initialize error reporter.

        Args:
            codec: JSON codec used to decode error bodies.
            success_statuses: Statuses treated as success; any 2xx when omitted.
        """
        self._codec = codec or JsonCodec()
        self._success_statuses = (
            frozenset(success_statuses) if success_statuses is not None else None
        )
        self._api_error: ApiError | None = None
        self._logger = get_logger()

    def get_api_error(self) -> ApiError | None:
        """Get the last recorded API error."""
        return self._api_error

    def set_api_error(
        self,
        code: str,
        message: str,
        http_status: int | None = None,
    ) -> ApiError:
        """Record an API error."""
        self._api_error = ApiError(code=code, message=message, http_status=http_status)
        return self._api_error

    def clear_api_error(self) -> None:
        """Forget the last recorded API error."""
        self._api_error = None

    def is_success(self, response: httpx.Response) -> bool:
        """Check whether a response status counts as success."""
        if self._success_statuses is not None:
            return response.status_code in self._success_statuses
        return 200 <= response.status_code < 300

    def classify(self, response: httpx.Response, throw_on_error: bool) -> bool:
        """Classify a response, recording and optionally raising its error.

        Args:
            response: Raw API response.
            throw_on_error: Raise instead of returning False on failure.

        Returns:
            True if the response succeeded, False if an error was recorded.

        Raises:
            ApiRequestError: On failure when ``throw_on_error`` is set.
        """
        if self.is_success(response):
            return True

        payload = self._codec.decode(response.content)
        if not isinstance(payload, dict):
            payload = {}

        message = self.compose_message(payload, response)
        api_error = self.set_api_error(
            _as_text(payload.get("error")),
            message,
            _status_from(payload, response),
        )
        self._logger.warning(
            "API request failed",
            status=response.status_code,
            error=api_error.code or None,
        )

        if not throw_on_error:
            return False

        self.raise_for_payload(payload, response, api_error)
        raise ApiRequestError(
            message,
            status_code=response.status_code,
            api_error=api_error,
        )

    def raise_for_payload(
        self,
        payload: dict[str, Any],
        response: httpx.Response,
        api_error: ApiError,
    ) -> None:
        """Hook for raising a more specific error than ApiRequestError."""

    @staticmethod
    def compose_message(payload: dict[str, Any], response: httpx.Response) -> str:
        """Pick the most useful error message for a failed response.

        Priority: joined ``errors`` list, ``message`` field, raw body,
        generic message with the status code.
        """
        errors = payload.get("errors")
        if errors:
            if isinstance(errors, list):
                joined = ", ".join(_as_text(error) for error in errors)
            else:
                joined = _as_text(errors)
            if joined:
                return joined

        if payload.get("message"):
            return _as_text(payload["message"])

        if response.text:
            return response.text

        return f"Unknown error. Response code {response.status_code}"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return JsonCodec().encode(value)


def _status_from(payload: dict[str, Any], response: httpx.Response) -> int:
    status = payload.get("statusCode")
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return response.status_code
