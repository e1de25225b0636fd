"""Error classes for the Frontegg SDK.

Implements a structured error hierarchy with error codes so callers can
tell every failure apart, in particular each token validation gate.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ApiError


class ErrorCode(StrEnum):
    """Standardized error codes for the Frontegg SDK."""

    # Configuration errors (1xxx)
    INVALID_CONFIG = "CFG_1001"
    UNKNOWN_SERVICE = "CFG_1002"

    # Authentication errors (2xxx)
    AUTHENTICATION_FAILED = "AUTH_2001"
    NOT_AUTHENTICATED = "AUTH_2002"

    # Token validation errors (3xxx)
    TOKEN_MALFORMED = "TOKEN_3001"
    TOKEN_EXPIRED = "TOKEN_3002"
    TENANT_MISMATCH = "TOKEN_3003"
    WRONG_TOKEN_TYPE = "TOKEN_3004"
    UNSUPPORTED_ALGORITHM = "TOKEN_3005"
    SIGNATURE_VERIFICATION_FAILED = "TOKEN_3006"

    # Key set errors (4xxx)
    KEY_FETCH_FAILED = "KEY_4001"
    KEY_NOT_FOUND = "KEY_4002"

    # API errors (5xxx)
    API_ERROR = "API_5001"
    USER_NOT_FOUND = "API_5002"
    INVALID_PARAMETER = "API_5003"

    # Network errors (6xxx)
    NETWORK_ERROR = "NET_6001"
    TIMEOUT_ERROR = "NET_6002"


class FronteggError(Exception):
    """Base error for the Frontegg SDK with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(FronteggError):
    """Invalid SDK configuration or unknown service key."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            details={"field": field} if field else None,
        )


class AuthenticationError(FronteggError):
    """The SDK could not obtain or hold a valid access token of its own."""

    def __init__(
        self,
        message: str = "Authentication problem",
        code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, code, status_code=status_code)


class TokenValidationError(FronteggError):
    """A presented token was rejected by one of the validation gates."""

    default_message = "Access token is invalid."
    default_code = ErrorCode.TOKEN_MALFORMED

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message or self.default_message,
            self.default_code,
            status_code=401,
            details=details,
        )


class MalformedTokenError(TokenValidationError):
    """Token is not a well-formed compact JWT with the required claims."""

    default_message = "Access token is malformed."
    default_code = ErrorCode.TOKEN_MALFORMED


class ExpiredTokenError(TokenValidationError):
    """Token ``exp`` claim is not in the future."""

    default_message = "Access token has expired."
    default_code = ErrorCode.TOKEN_EXPIRED


class TenantMismatchError(TokenValidationError):
    """Token was issued for another tenant."""

    default_message = "Access token is not valid for this account."
    default_code = ErrorCode.TENANT_MISMATCH


class WrongTokenTypeError(TokenValidationError):
    """Token ``type`` claim differs from the expected type."""

    default_message = "Access token is not of a valid type."
    default_code = ErrorCode.WRONG_TOKEN_TYPE


class KeyFetchError(TokenValidationError):
    """The published key set could not be fetched or parsed."""

    default_message = "Error fetching API Key signature keys."
    default_code = ErrorCode.KEY_FETCH_FAILED


class KeyNotFoundError(TokenValidationError):
    """No key in the published key set matches the token ``kid``."""

    default_message = "Invalid API Key signature - not found."
    default_code = ErrorCode.KEY_NOT_FOUND


class UnsupportedAlgorithmError(TokenValidationError):
    """Token header names an algorithm outside the allow-list."""

    default_message = "Unsupported API Key algorithm."
    default_code = ErrorCode.UNSUPPORTED_ALGORITHM


class SignatureVerificationError(TokenValidationError):
    """The verifier failed internally (bad key material, key/alg mismatch)."""

    default_message = "Signature verification failed."
    default_code = ErrorCode.SIGNATURE_VERIFICATION_FAILED


class ApiRequestError(FronteggError):
    """A resource API call returned a non-2xx response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        api_error: ApiError | None = None,
        code: ErrorCode = ErrorCode.API_ERROR,
    ) -> None:
        super().__init__(
            message,
            code,
            status_code=status_code,
            details={"error": api_error.code} if api_error and api_error.code else None,
        )
        self.api_error = api_error


class UserNotFoundError(ApiRequestError):
    """The users service reported that the user does not exist."""

    def __init__(
        self,
        message: str = "User not found",
        *,
        status_code: int | None = None,
        api_error: ApiError | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            api_error=api_error,
            code=ErrorCode.USER_NOT_FOUND,
        )


class InvalidParameterError(FronteggError):
    """A resource call was given parameters it cannot send."""

    def __init__(self, message: str, *, parameter: str | None = None) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_PARAMETER,
            details={"parameter": parameter} if parameter else None,
        )


class NetworkError(FronteggError):
    """Network request failed."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.NETWORK_ERROR,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TimeoutError(FronteggError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TIMEOUT_ERROR,
            status_code=408,
            details={"timeout_seconds": timeout_seconds} if timeout_seconds else None,
        )
