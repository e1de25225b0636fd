"""Configuration for the Frontegg SDK.

Uses Pydantic v2 frozen models so a configuration cannot change once the
SDK objects that share it have been built.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)

from .errors import ConfigurationError, ErrorCode
from .models import RequestContext

DEFAULT_BASE_URL = "https://api.frontegg.com"


class ServiceKey(StrEnum):
    """Closed set of API services the SDK knows how to address."""

    ACCOUNT_ROLES = "account-roles"
    AUTHENTICATION = "authentication"
    AUDITS = "audits"
    EVENTS = "events"
    PERMISSIONS = "permissions"
    USERS = "users"
    ROLES = "roles"
    API_AUTHENTICATION = "api-authentication"


SERVICE_DEFAULT_URLS: MappingProxyType[ServiceKey, str] = MappingProxyType(
    {
        ServiceKey.ACCOUNT_ROLES: "/identity/resources/roles/v2",
        ServiceKey.AUTHENTICATION: "/auth/vendor",
        ServiceKey.AUDITS: "/audits",
        ServiceKey.EVENTS: "/event/resources/triggers/v2",
        ServiceKey.PERMISSIONS: "/identity/resources/permissions/v1",
        ServiceKey.USERS: "/identity/resources/users/v1",
        ServiceKey.ROLES: "/identity/resources/roles/v1",
        ServiceKey.API_AUTHENTICATION: "/identity/resources/auth/v1/api-token",
    }
)

ContextResolver = Callable[[Any], RequestContext]


def default_context_resolver(request: Any) -> RequestContext:
    """Resolve no tenant, user or permissions for any request."""
    return RequestContext()


def _to_service_key(key: ServiceKey | str) -> ServiceKey:
    try:
        return ServiceKey(key)
    except ValueError:
        msg = f'URL "{key}" is not a part of allowed API'
        raise ConfigurationError(msg, ErrorCode.UNKNOWN_SERVICE, field="urls") from None


class TelemetryConfig(BaseModel):
    """Structured logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "frontegg-sdk"
    log_level: str = "INFO"


class CacheConfig(BaseModel):
    """Cache configuration for the key set and the SDK access token."""

    model_config = ConfigDict(frozen=True)

    # 0 fetches the key set on every validation; capped so a rotated or
    # revoked key is never served for more than an hour.
    jwks_ttl: Annotated[int, Field(ge=0, le=3600)] = 0
    token_buffer: Annotated[int, Field(ge=0)] = 0


class FronteggConfig(BaseModel):
    """Main configuration for the Frontegg SDK."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # Required
    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr

    # Endpoints
    base_url: str = DEFAULT_BASE_URL
    authentication_base_url: str | None = None
    vendor_base_url: str | None = None
    urls: dict[ServiceKey, str] = Field(default_factory=dict)

    # Policy
    disable_cors: bool = False
    throw_on_error: bool = True
    context_resolver: ContextResolver = default_context_resolver

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 10.0

    # Sub-configurations
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("client_secret")
    @classmethod
    def validate_client_secret(cls, v: SecretStr) -> SecretStr:
        """Reject an empty client secret."""
        if not v.get_secret_value():
            msg = "client_secret must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("urls", mode="before")
    @classmethod
    def validate_url_overrides(cls, v: Any) -> Any:
        """Reject overrides for services outside the known set."""
        if isinstance(v, dict):
            return {_to_service_key(key): path for key, path in v.items()}
        return v

    @field_validator("base_url", "authentication_base_url", "vendor_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Store base URLs without a trailing slash."""
        if v is None:
            return None
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            msg = f"Invalid base URL: {v!r}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def set_default_base_urls(self) -> Self:
        """Derive the authentication and vendor planes from base_url."""
        # Use object.__setattr__ since model is frozen
        if self.authentication_base_url is None:
            object.__setattr__(self, "authentication_base_url", self.base_url)
        if self.vendor_base_url is None:
            object.__setattr__(self, "vendor_base_url", self.base_url)
        return self

    def get_service_url(self, key: ServiceKey | str) -> str:
        """Return the API URL of a service.

        Raises:
            ConfigurationError: If ``key`` is not a known service.
        """
        service = _to_service_key(key)
        return self.base_url + self._service_path(service)

    def get_authentication_url(self, key: ServiceKey | str) -> str:
        """Return the URL of a service on the authentication plane.

        Raises:
            ConfigurationError: If ``key`` is not a known service.
        """
        service = _to_service_key(key)
        return f"{self.authentication_base_url}{self._service_path(service)}"

    def _service_path(self, service: ServiceKey) -> str:
        return self.urls.get(service, SERVICE_DEFAULT_URLS[service])

    @property
    def jwks_url(self) -> str:
        """URL of the vendor's published key set."""
        return f"{self.vendor_base_url}/.well-known/jwks.json"

    @property
    def proxy_url(self) -> str:
        """URL the host application proxies Frontegg traffic to."""
        return self.base_url

    def resolve_context(self, request: Any) -> RequestContext:
        """Run the configured context resolver against a host request."""
        return self.context_resolver(request)

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = dict(self)
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "FRONTEGG_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        def get_flag(key: str, default: bool) -> bool:
            value = get_env(key)
            if value is None:
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        client_id = get_env("CLIENT_ID")
        if not client_id:
            msg = f"{prefix}CLIENT_ID environment variable is required"
            raise ConfigurationError(msg, field="client_id")

        client_secret = get_env("CLIENT_SECRET")
        if not client_secret:
            msg = f"{prefix}CLIENT_SECRET environment variable is required"
            raise ConfigurationError(msg, field="client_secret")

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            base_url=get_env("BASE_URL", DEFAULT_BASE_URL),
            authentication_base_url=get_env("AUTHENTICATION_BASE_URL"),
            vendor_base_url=get_env("VENDOR_BASE_URL"),
            throw_on_error=get_flag("THROW_ON_ERROR", True),
            disable_cors=get_flag("DISABLE_CORS", False),
            timeout=float(get_env("TIMEOUT", "10.0")),
        )
