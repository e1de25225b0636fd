"""Frontegg Python SDK."""

from .authenticator import AuthState, Authenticator
from .client import FronteggClient
from .config import FronteggConfig, ServiceKey
from .core import SUPPORTED_ALGORITHMS, TokenValidator
from .errors import (
    ApiRequestError,
    AuthenticationError,
    ConfigurationError,
    ExpiredTokenError,
    FronteggError,
    InvalidParameterError,
    KeyFetchError,
    KeyNotFoundError,
    MalformedTokenError,
    NetworkError,
    SignatureVerificationError,
    TenantMismatchError,
    TokenValidationError,
    UnsupportedAlgorithmError,
    UserNotFoundError,
    WrongTokenTypeError,
)
from .jwks import KeySetResolver
from .models import AccessToken, ApiError, RequestContext, TokenType

__all__ = [
    "AccessToken",
    "ApiError",
    "ApiRequestError",
    "AuthState",
    "AuthenticationError",
    "Authenticator",
    "ConfigurationError",
    "ExpiredTokenError",
    "FronteggClient",
    "FronteggConfig",
    "FronteggError",
    "InvalidParameterError",
    "KeyFetchError",
    "KeyNotFoundError",
    "KeySetResolver",
    "MalformedTokenError",
    "NetworkError",
    "RequestContext",
    "SUPPORTED_ALGORITHMS",
    "ServiceKey",
    "SignatureVerificationError",
    "TenantMismatchError",
    "TokenType",
    "TokenValidationError",
    "TokenValidator",
    "UnsupportedAlgorithmError",
    "UserNotFoundError",
    "WrongTokenTypeError",
]

__version__ = "0.1.0"
