"""Tenant API token authentication client."""

from __future__ import annotations

from typing import Any

from ..config import ServiceKey
from .base import AuthenticatedClient


class ApiAuthClient(AuthenticatedClient):
    """Exchanges tenant API credentials for tenant API tokens."""

    service = ServiceKey.API_AUTHENTICATION

    def get_access_token(
        self,
        client_id: str,
        client_secret: str,
    ) -> dict[str, Any] | None:
        """Exchange a tenant API client id and secret for an access token."""
        return self.request(
            "POST",
            self.service_url(),
            json_body={"clientId": client_id, "secret": client_secret},
        )

    def refresh_access_token(self, refresh_token: str) -> dict[str, Any] | None:
        """Refresh a tenant API access token."""
        return self.request(
            "POST",
            self.service_url("/token/refresh"),
            json_body={"refreshToken": refresh_token},
        )
