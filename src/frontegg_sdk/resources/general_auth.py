"""Hosted login helpers on the vendor plane.

The code exchange itself is an opaque call to the vendor's token endpoint;
its result is returned as decoded JSON under the usual error policy.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from ..pkce import generate_code_challenge
from .base import AuthenticatedClient


class GeneralAuthClient(AuthenticatedClient):
    """Hosted login, portal and logout URLs plus the token endpoint calls."""

    @property
    def vendor_url(self) -> str:
        """Vendor plane base URL."""
        return self.config.vendor_base_url or self.config.base_url

    def get_login_redirect_url(self, code_verifier: str, redirect_uri: str) -> str:
        """Build the hosted login URL for a PKCE S256 authorization request."""
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": "openid",
            "code_challenge": generate_code_challenge(code_verifier),
            "code_challenge_method": "S256",
        }
        return f"{self.vendor_url}/oauth/authorize?{urlencode(params)}"

    def verify_callback(
        self,
        code_verifier: str,
        redirect_uri: str,
        authorization_code: str,
    ) -> dict[str, Any] | None:
        """Exchange the authorization code returned to ``redirect_uri``."""
        return self.request(
            "POST",
            f"{self.vendor_url}/oauth/token",
            json_body={
                "grant_type": "authorization_code",
                "code": authorization_code,
                "redirect_uri": redirect_uri,
                "code_verifier": code_verifier,
            },
        )

    def refresh_access_token(self, refresh_token: str) -> dict[str, Any] | None:
        """Refresh a hosted-login user token."""
        return self.request(
            "POST",
            f"{self.vendor_url}/oauth/token",
            json_body={
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
        )

    def get_portal_redirect_url(self) -> str:
        """URL of the hosted self-service portal."""
        return f"{self.vendor_url}/oauth/portal"

    def get_logout_redirect_url(self) -> str:
        """URL that ends the hosted login session."""
        return f"{self.vendor_url}/oauth/account/logout"
