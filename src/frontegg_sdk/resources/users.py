"""Users service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import ServiceKey
from ..core.error_reporter import ErrorReporter
from ..errors import UserNotFoundError
from ..models import ApiError
from .base import FRONTEGG_TENANT_HEADER, AuthenticatedClient

USER_NOT_FOUND = "User not found"


class UsersErrorReporter(ErrorReporter):
    """Error reporter that only accepts 200 and recognises missing users."""

    def raise_for_payload(
        self,
        payload: dict[str, Any],
        response: httpx.Response,
        api_error: ApiError,
    ) -> None:
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and USER_NOT_FOUND in str(errors[0]):
            raise UserNotFoundError(
                str(errors[0]),
                status_code=response.status_code,
                api_error=api_error,
            )


class UsersClient(AuthenticatedClient):
    """Lookup and update of users."""

    service = ServiceKey.USERS
    tenant_header = FRONTEGG_TENANT_HEADER

    def _create_reporter(self) -> ErrorReporter:
        return UsersErrorReporter(self._codec, success_statuses={httpx.codes.OK})

    def get_user(self, user_id: str, tenant_id: str) -> dict[str, Any] | None:
        """Get a user within a tenant.

        Raises:
            UserNotFoundError: If the user does not exist and errors are thrown.
        """
        return self.request(
            "GET",
            self.service_url(f"/{quote(user_id, safe='')}"),
            tenant_id=tenant_id,
        )

    def get_user_by_email(
        self,
        email: str,
        tenant_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Get a user by email address."""
        return self.request(
            "GET",
            self.service_url("/email"),
            params={"email": email},
            tenant_id=tenant_id,
        )

    def update_user_email(
        self,
        user_id: str,
        email: str,
        tenant_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Change a user's email address."""
        return self.request(
            "PUT",
            self.service_url(f"/{quote(user_id, safe='')}/email"),
            json_body={"email": email},
            tenant_id=tenant_id,
        )

    def update_user_globally(
        self,
        user_id: str,
        *,
        phone_number: str | None = None,
        profile_picture_url: str | None = None,
        metadata: dict[str, Any] | None = None,
        vendor_metadata: dict[str, Any] | None = None,
        mfa_bypass: bool | None = None,
        name: str | None = None,
        tenant_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Update user fields across all tenants; only given fields are sent.

        ``metadata`` and ``vendor_metadata`` are sent as JSON-encoded strings.
        """
        params: dict[str, Any] = {}
        if phone_number is not None:
            params["phoneNumber"] = phone_number
        if profile_picture_url is not None:
            params["profilePictureUrl"] = profile_picture_url
        if metadata is not None:
            params["metadata"] = self._codec.encode(metadata)
        if vendor_metadata is not None:
            params["vendorMetadata"] = self._codec.encode(vendor_metadata)
        if mfa_bypass is not None:
            params["mfaBypass"] = mfa_bypass
        if name is not None:
            params["name"] = name

        return self.request(
            "PUT",
            self.service_url(f"/{quote(user_id, safe='')}"),
            json_body=params,
            tenant_id=tenant_id,
        )
