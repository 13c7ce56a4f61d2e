# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Google ID token verification."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import GoogleAuthError

from educasem.domains.auth.oauth import (
    GoogleIdentityProvider,
    OAuthProfile,
    OAuthVerificationError,
)

CLIENT_ID = "test-client.apps.googleusercontent.com"


@pytest.fixture
def claims() -> dict[str, Any]:
    """Claims of a verified Google ID token."""
    return {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "110248495921238986420",
        "email": "someone@gmail.com",
        "email_verified": True,
        "name": "Some One",
        "picture": "https://lh3.googleusercontent.com/a/photo",
    }


class TestGoogleIdentityProvider:
    """Tests for GoogleIdentityProvider.verify."""

    def test_valid_token(self, claims: dict[str, Any]) -> None:
        """Test that verified claims become an OAuthProfile."""
        verifier = MagicMock(return_value=claims)
        provider = GoogleIdentityProvider(CLIENT_ID, verifier=verifier)

        profile = provider.verify("id-token")

        assert profile == OAuthProfile(
            provider="google",
            sub="110248495921238986420",
            email="someone@gmail.com",
            name="Some One",
            picture="https://lh3.googleusercontent.com/a/photo",
            email_verified=True,
        )
        args = verifier.call_args.args
        assert args[0] == "id-token"
        assert args[2] == CLIENT_ID

    def test_missing_credential(self) -> None:
        verifier = MagicMock()
        provider = GoogleIdentityProvider(CLIENT_ID, verifier=verifier)

        with pytest.raises(OAuthVerificationError, match="Missing Google credential"):
            provider.verify("")
        verifier.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [ValueError("Token has wrong audience"), GoogleAuthError("Could not fetch certificates")],
    )
    def test_rejected_token(self, error: Exception) -> None:
        """Test that verification failures surface as OAuthVerificationError."""
        provider = GoogleIdentityProvider(CLIENT_ID, verifier=MagicMock(side_effect=error))

        with pytest.raises(OAuthVerificationError, match="Invalid Google token"):
            provider.verify("id-token")

    @pytest.mark.parametrize("missing", ["sub", "email"])
    def test_token_without_identity(self, claims: dict[str, Any], missing: str) -> None:
        del claims[missing]
        provider = GoogleIdentityProvider(CLIENT_ID, verifier=MagicMock(return_value=claims))

        with pytest.raises(OAuthVerificationError):
            provider.verify("id-token")

    def test_unverified_email_flag(self, claims: dict[str, Any]) -> None:
        del claims["email_verified"]
        provider = GoogleIdentityProvider(CLIENT_ID, verifier=MagicMock(return_value=claims))

        assert provider.verify("id-token").email_verified is False
