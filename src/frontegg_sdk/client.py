"""Frontegg SDK client facade.

Wires one HTTP client, one authenticator, one token validator and the
resource clients around a single configuration.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Self

import httpx

from .authenticator import Authenticator
from .config import FronteggConfig
from .core.http_executor import HTTPExecutor
from .core.jwks_base import KeySetCache
from .core.token_validator import TokenValidator
from .http import create_http_client
from .jwks import KeySetResolver
from .models import AccessToken, TokenType
from .resources import (
    AccountRolesClient,
    ApiAuthClient,
    EventsClient,
    GeneralAuthClient,
    PermissionsClient,
    RolesClient,
    UsersClient,
)


class FronteggClient:
    """Synchronous Frontegg client."""

    def __init__(
        self,
        config: FronteggConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: SDK configuration.
            http_client: HTTP client to use; the client owns one it creates.
        """
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(config)
        self._executor = HTTPExecutor(self._http)

        self.authenticator = Authenticator(config, self._executor)
        cache = KeySetCache(config.cache.jwks_ttl) if config.cache.jwks_ttl else None
        self.key_set_resolver = KeySetResolver(
            config.jwks_url, self._executor, cache=cache
        )
        self.token_validator = TokenValidator(self.key_set_resolver)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Drop the held token and close the HTTP client if owned."""
        self.authenticator.close()
        if self._owns_http:
            self._http.close()

    def authenticate(self) -> bool:
        """Exchange the configured credentials for a vendor token."""
        return self.authenticator.authenticate()

    def get_access_token(self) -> AccessToken | None:
        """Get the held vendor token without any I/O."""
        return self.authenticator.get_access_token()

    def validate_access_token(
        self,
        token: str,
        tenant_id: str,
        expected_type: TokenType | str,
    ) -> bool:
        """Validate a token presented to the host application.

        See :meth:`TokenValidator.validate` for the errors raised.
        """
        return self.token_validator.validate(token, tenant_id, expected_type)

    @cached_property
    def users(self) -> UsersClient:
        return UsersClient(self.authenticator)

    @cached_property
    def roles(self) -> RolesClient:
        return RolesClient(self.authenticator)

    @cached_property
    def permissions(self) -> PermissionsClient:
        return PermissionsClient(self.authenticator)

    @cached_property
    def account_roles(self) -> AccountRolesClient:
        return AccountRolesClient(self.authenticator)

    @cached_property
    def events(self) -> EventsClient:
        return EventsClient(self.authenticator)

    @cached_property
    def api_auth(self) -> ApiAuthClient:
        return ApiAuthClient(self.authenticator)

    @cached_property
    def general_auth(self) -> GeneralAuthClient:
        return GeneralAuthClient(self.authenticator)
