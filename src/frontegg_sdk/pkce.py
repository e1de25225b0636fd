"""PKCE helpers for the hosted login flow (RFC 7636, S256 only)."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from jwt.utils import base64url_encode

from .models import PKCEChallenge

VERIFIER_MIN_LENGTH = 43
VERIFIER_MAX_LENGTH = 128


def generate_code_verifier(length: int = 64) -> str:
    """Generate a random code verifier of ``length`` URL-safe characters.

    Raises:
        ValueError: If ``length`` is outside 43..128.
    """
    if not VERIFIER_MIN_LENGTH <= length <= VERIFIER_MAX_LENGTH:
        msg = (
            f"Code verifier length must be between {VERIFIER_MIN_LENGTH} "
            f"and {VERIFIER_MAX_LENGTH} characters"
        )
        raise ValueError(msg)

    # token_urlsafe yields about 1.3 characters per byte
    return secrets.token_urlsafe(length)[:length]


def generate_code_challenge(code_verifier: str) -> str:
    """S256 challenge: unpadded base64url of the verifier's SHA-256 digest."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64url_encode(digest).decode("ascii")


def create_pkce_challenge(verifier_length: int = 64) -> PKCEChallenge:
    """Create a fresh verifier together with its S256 challenge."""
    code_verifier = generate_code_verifier(verifier_length)
    return PKCEChallenge(
        code_verifier=code_verifier,
        code_challenge=generate_code_challenge(code_verifier),
    )


def verify_code_challenge(code_verifier: str, code_challenge: str) -> bool:
    """Check in constant time that a verifier produces a challenge."""
    return hmac.compare_digest(
        generate_code_challenge(code_verifier).encode("ascii"),
        code_challenge.encode("ascii"),
    )


def generate_state(length: int = 32) -> str:
    """Random ``state`` value binding a login redirect to its callback."""
    return secrets.token_urlsafe(length)
