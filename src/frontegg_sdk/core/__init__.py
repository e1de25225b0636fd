"""Core components for the Frontegg SDK.

Token verification and the shared infrastructure used by the
authenticator and the resource clients.
"""

from __future__ import annotations

from .errors import ErrorFactory
from .error_reporter import ErrorReporter
from .http_executor import HTTPExecutor
from .json_codec import JsonCodec
from .jwks_base import KeySetCache
from .signature import SUPPORTED_ALGORITHMS, SignatureVerifier
from .token_validator import TokenValidator

__all__ = [
    "ErrorFactory",
    "ErrorReporter",
    "HTTPExecutor",
    "JsonCodec",
    "KeySetCache",
    "SUPPORTED_ALGORITHMS",
    "SignatureVerifier",
    "TokenValidator",
]
