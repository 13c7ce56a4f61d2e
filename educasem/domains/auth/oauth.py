# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""External identity provider verification.

The browser completes the Google sign-in and posts the resulting ID token;
this module verifies its signature, audience and expiry with google-auth
and exposes the identity claims as an OAuthProfile.

Example:
    >>> provider = GoogleIdentityProvider(client_id="...apps.googleusercontent.com")
    >>> profile = provider.verify(credential)
    >>> profile.email
    'someone@gmail.com'
"""

import logging
from typing import Any, Callable

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from pydantic import BaseModel

logger = logging.getLogger(__name__)

GOOGLE_PROVIDER = "google"

TokenVerifier = Callable[[str, Any, str], dict[str, Any]]


class OAuthVerificationError(Exception):
    """Raised when a provider identity assertion cannot be trusted."""

    pass


class OAuthProfile(BaseModel):
    """Identity claims asserted by an external provider."""

    provider: str
    sub: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    email_verified: bool = False


class GoogleIdentityProvider:
    """Verifies Google ID tokens for a single OAuth client.

    Attributes:
        _client_id: Expected token audience.
        _verifier: Function performing the signature check; defaults to
            google.oauth2.id_token.verify_oauth2_token.
    """

    name = GOOGLE_PROVIDER

    def __init__(
        self,
        client_id: str,
        verifier: TokenVerifier | None = None,
    ) -> None:
        self._client_id = client_id
        self._verifier = verifier or id_token.verify_oauth2_token

    def verify(self, credential: str) -> OAuthProfile:
        """Verify an ID token and extract the identity claims.

        Args:
            credential: Google ID token (JWT) from the sign-in button.

        Returns:
            OAuthProfile with the Google subject and profile claims.

        Raises:
            OAuthVerificationError: If the token is missing, invalid, for
                another audience, or lacks an email.
        """
        if not credential:
            raise OAuthVerificationError("Missing Google credential")

        try:
            claims = self._verifier(credential, google_requests.Request(), self._client_id)
        except (ValueError, GoogleAuthError) as e:
            logger.warning("Google token rejected: %s", str(e))
            raise OAuthVerificationError(f"Invalid Google token: {str(e)}")

        if not claims.get("sub") or not claims.get("email"):
            raise OAuthVerificationError("Google token missing subject or email")

        return OAuthProfile(
            provider=self.name,
            sub=str(claims["sub"]),
            email=claims["email"],
            name=claims.get("name"),
            picture=claims.get("picture"),
            email_verified=bool(claims.get("email_verified", False)),
        )
