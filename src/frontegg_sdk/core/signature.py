"""Signature verification for presented tokens.

The set of accepted algorithms is a fixed allow-list. The algorithm named in
a token header is only ever compared against it, never used to look up an
implementation, so a token cannot pick ``none`` or swap an asymmetric key
for a shared secret.
"""

from __future__ import annotations

from typing import Any

from jwt.algorithms import Algorithm, HMACAlgorithm, RSAAlgorithm
from jwt.exceptions import InvalidKeyError

from ..errors import SignatureVerificationError, UnsupportedAlgorithmError
from ..models import JWK

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset({"HS256", "RS256"})


class SignatureVerifier:
    """Verifies compact-token signatures for the allow-listed algorithms."""

    def resolve_algorithm(self, alg: Any) -> str:
        """Normalize a header ``alg`` and check it against the allow-list.

        Args:
            alg: Raw ``alg`` value from the token header.

        Returns:
            Canonical algorithm name.

        Raises:
            UnsupportedAlgorithmError: For anything outside the allow-list.
        """
        if not isinstance(alg, str):
            raise UnsupportedAlgorithmError(details={"alg": repr(alg)})

        canonical = alg.upper()
        if canonical not in SUPPORTED_ALGORITHMS:
            raise UnsupportedAlgorithmError(details={"alg": alg})
        return canonical

    def verify(
        self,
        algorithm: str,
        jwk: JWK,
        signing_input: bytes,
        signature: bytes,
    ) -> bool:
        """Verify a signature over ``header.payload``.

        Args:
            algorithm: Algorithm name, resolved through :meth:`resolve_algorithm`.
            jwk: Verification key.
            signing_input: The ASCII ``header.payload`` segment.
            signature: Decoded signature bytes.

        Returns:
            True only if the signature is cryptographically valid.

        Raises:
            UnsupportedAlgorithmError: If ``algorithm`` is not allow-listed.
            SignatureVerificationError: If the key cannot be used for ``algorithm``.
        """
        algorithm = self.resolve_algorithm(algorithm)

        if jwk.alg is not None and jwk.alg.upper() != algorithm:
            msg = f"Key {jwk.kid!r} is published for {jwk.alg}, not {algorithm}"
            raise SignatureVerificationError(msg)

        verifier, key = self._prepare(algorithm, jwk)
        try:
            return bool(verifier.verify(signing_input, key, signature))
        except (InvalidKeyError, ValueError, TypeError) as e:
            raise SignatureVerificationError(f"Signature verification failed: {e}") from e

    def _prepare(self, algorithm: str, jwk: JWK) -> tuple[Algorithm, Any]:
        """Build the algorithm implementation and key for a JWK."""
        jwk_dict = jwk.to_jwk_dict()
        try:
            if algorithm == "HS256":
                if jwk.kty != "oct":
                    msg = f"HS256 requires a symmetric key, got kty={jwk.kty!r}"
                    raise SignatureVerificationError(msg)
                return (
                    HMACAlgorithm(HMACAlgorithm.SHA256),
                    HMACAlgorithm.from_jwk(jwk_dict),
                )

            if jwk.kty != "RSA":
                msg = f"RS256 requires an RSA key, got kty={jwk.kty!r}"
                raise SignatureVerificationError(msg)
            key = RSAAlgorithm.from_jwk(jwk_dict)
            # A published private key still verifies with its public half
            if hasattr(key, "public_key"):
                key = key.public_key()
            return RSAAlgorithm(RSAAlgorithm.SHA256), key

        except (InvalidKeyError, KeyError, ValueError, TypeError) as e:
            msg = f"Unusable {algorithm} key {jwk.kid!r}: {e}"
            raise SignatureVerificationError(msg) from e
