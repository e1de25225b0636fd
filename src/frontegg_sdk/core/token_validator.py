"""Validation of tokens presented to the host application.

Each gate fails fast with its own error. Claims are checked before any
network access, and the header algorithm is checked against the allow-list
before the key set is fetched.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jwt
from jwt.utils import base64url_decode
from pydantic import ValidationError as PydanticValidationError

from ..errors import (
    ExpiredTokenError,
    KeyNotFoundError,
    MalformedTokenError,
    TenantMismatchError,
    WrongTokenTypeError,
)
from ..models import TokenClaims, TokenHeader, TokenType
from ..telemetry import get_logger, trace_operation
from .signature import SignatureVerifier

if TYPE_CHECKING:
    from ..jwks import KeySetResolver


class TokenValidator:
    """Validates third-party tokens against the vendor's published keys.

    Holds no per-call state, so one instance may be shared across workers.
    """

    def __init__(
        self,
        resolver: KeySetResolver,
        *,
        verifier: SignatureVerifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize token validator.

        Args:
            resolver: Key set resolver for the vendor plane.
            verifier: Signature verifier (allow-listed algorithms).
            clock: Returns the current aware datetime; injectable for tests.
        """
        self._resolver = resolver
        self._verifier = verifier or SignatureVerifier()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._logger = get_logger()

    def validate(
        self,
        token: str,
        tenant_id: str,
        expected_type: TokenType | str,
    ) -> bool:
        """Validate a compact token for a tenant and token type.

        Args:
            token: Compact ``header.payload.signature`` token.
            tenant_id: Tenant the token must be bound to.
            expected_type: Expected ``type`` claim, e.g. ``tenantApiToken``.

        Returns:
            True if the signature verifies, False if it does not.

        Raises:
            MalformedTokenError: Token structure or required claims are invalid.
            ExpiredTokenError: ``exp`` is not in the future.
            TenantMismatchError: ``tenantId`` differs from ``tenant_id``.
            WrongTokenTypeError: ``type`` differs from ``expected_type``.
            UnsupportedAlgorithmError: Header ``alg`` is not HS256 or RS256.
            KeyFetchError: The key set could not be fetched.
            KeyNotFoundError: No published key matches the header ``kid``.
            SignatureVerificationError: The verifier failed internally.
        """
        with trace_operation("validate_access_token") as span:
            try:
                header, claims = self.parse(token)
                signing_input, signature = self._split_signed(token)

                if claims.is_expired(self._clock()):
                    raise ExpiredTokenError(details={"exp": claims.exp})

                if claims.tenant_id != tenant_id:
                    raise TenantMismatchError()

                if claims.type != str(expected_type):
                    raise WrongTokenTypeError(
                        details={"expected": str(expected_type), "actual": claims.type}
                    )

                algorithm = self._verifier.resolve_algorithm(header.alg)
                span.set_attribute("jwt.alg", algorithm)

                if not header.kid:
                    raise KeyNotFoundError("Access token header has no key id.")
                jwk = self._resolver.get_key(header.kid)

                valid = self._verifier.verify(algorithm, jwk, signing_input, signature)

            except Exception as e:
                self._logger.info(
                    "Access token rejected",
                    reason=type(e).__name__,
                    tenant_id=tenant_id,
                )
                raise

            if not valid:
                self._logger.info(
                    "Access token signature mismatch",
                    kid=header.kid,
                    tenant_id=tenant_id,
                )
            return valid

    def parse(self, token: str) -> tuple[TokenHeader, TokenClaims]:
        """Parse a compact token without verifying it.

        Raises:
            MalformedTokenError: If the token is not a well-formed compact
                JWT carrying ``exp``, ``tenantId`` and ``type`` claims.
        """
        if not isinstance(token, str):
            raise MalformedTokenError("Access token must be a string.")

        segments = token.split(".")
        if len(segments) != 3 or not all(segments[:2]):
            raise MalformedTokenError(
                "Access token must have three dot-separated segments."
            )

        try:
            raw_header = jwt.get_unverified_header(token)
            raw_claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.exceptions.InvalidTokenError as e:
            raise MalformedTokenError(f"Access token is malformed: {e}") from e

        try:
            header = TokenHeader(**raw_header)
            claims = TokenClaims(**raw_claims)
        except PydanticValidationError as e:
            raise MalformedTokenError(
                "Access token is missing required claims.",
                details={"errors": [err["loc"] for err in e.errors()]},
            ) from e

        return header, claims

    @staticmethod
    def _split_signed(token: str) -> tuple[bytes, bytes]:
        """Split a token into its signing input and decoded signature."""
        signing_input, _, encoded_signature = token.rpartition(".")
        try:
            signature = base64url_decode(encoded_signature.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as e:
            raise MalformedTokenError("Access token signature is not base64url.") from e
        return signing_input.encode("ascii"), signature
