"""Unit tests for the hosted login PKCE helpers."""

import pytest
from hypothesis import given, settings, strategies as st
from pydantic import ValidationError

from frontegg_sdk.models import PKCEChallenge
from frontegg_sdk.pkce import (
    create_pkce_challenge,
    generate_code_challenge,
    generate_code_verifier,
    generate_state,
    verify_code_challenge,
)

URL_SAFE = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")


class TestCodeVerifier:
    """Tests for code verifier generation."""

    @given(length=st.integers(min_value=43, max_value=128))
    @settings(max_examples=50)
    def test_length_and_alphabet(self, length: int) -> None:
        verifier = generate_code_verifier(length)

        assert len(verifier) == length
        assert set(verifier) <= URL_SAFE

    @pytest.mark.parametrize("length", [42, 129])
    def test_length_out_of_range(self, length: int) -> None:
        with pytest.raises(ValueError, match="between 43 and 128"):
            generate_code_verifier(length)


class TestCodeChallenge:
    """Tests for S256 challenges."""

    def test_rfc7636_vector(self) -> None:
        """Known verifier/challenge pair from RFC 7636 appendix B."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert generate_code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGjSstw-cM"

    def test_create_challenge(self) -> None:
        pkce = create_pkce_challenge()

        assert pkce.code_challenge_method == "S256"
        assert verify_code_challenge(pkce.code_verifier, pkce.code_challenge)

    def test_mismatched_verifier(self) -> None:
        pkce = create_pkce_challenge()

        assert not verify_code_challenge(generate_code_verifier(), pkce.code_challenge)

    def test_plain_method_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PKCEChallenge(code_verifier="v" * 43, code_challenge="c" * 43, code_challenge_method="plain")


class TestState:
    """Tests for state generation."""

    def test_state_unique_and_url_safe(self) -> None:
        states = {generate_state() for _ in range(50)}

        assert len(states) == 50
        assert all(set(state) <= URL_SAFE for state in states)
