# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client-side session binding over httpx.

AuthClient drives the sign-in endpoints the way the login form does:
validate the fields locally, post the credentials, and report a short
user-facing message. Session cookies are kept by the underlying
httpx.Client, so the same client can then browse protected pages.

Example:
    >>> with httpx.Client(base_url="http://localhost:8000") as http:
    ...     auth = AuthClient(http)
    ...     outcome = auth.login("estudiante@educasem.com", "123456789")
    ...     outcome.redirect_to
    '/dashboard'
"""

import logging
from typing import NamedTuple

import httpx

from educasem.domains.auth.session import Session, SessionUser
from educasem.domains.auth.validation import validate_login_form

logger = logging.getLogger(__name__)

CREDENTIALS_CALLBACK_PATH = "/api/auth/callback/credentials"
SESSION_PATH = "/api/auth/session"
SIGNOUT_PATH = "/api/auth/signout"
LOGIN_PAGE = "/auth/login"
DEFAULT_CALLBACK_URL = "/dashboard"

INVALID_CREDENTIALS_MESSAGE = "Incorrect email or password"
SIGN_IN_FAILED_MESSAGE = "Error signing in"
CONNECTION_ERROR_MESSAGE = "Connection error. Please try again."


class LoginOutcome(NamedTuple):
    """Result of a login attempt as shown to the user."""

    success: bool
    error: str | None = None
    field_errors: dict[str, str] | None = None
    redirect_to: str | None = None


class AuthClient:
    """Sign-in, sign-out and session access for one browser-like client.

    Attributes:
        _http: HTTP client holding the session cookie.
        _session: Last session read from the server, if loaded.
        _loaded: Whether _session reflects the server.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http
        self._session: Session | None = None
        self._loaded = False

    @property
    def login_url(self) -> str:
        """Where to send a user who needs to sign in."""
        return LOGIN_PAGE

    def login(
        self,
        email: str,
        password: str,
        callback_url: str = DEFAULT_CALLBACK_URL,
    ) -> LoginOutcome:
        """Sign in with email and password.

        Field errors are reported without contacting the server. A
        rejection by the server is reported with a generic message so the
        form never reveals which of the two fields was wrong.

        Args:
            email: Email typed by the user.
            password: Password typed by the user.
            callback_url: Page to land on after sign-in.

        Returns:
            LoginOutcome; on success redirect_to is callback_url.
        """
        field_errors = validate_login_form(email, password)
        if field_errors:
            return LoginOutcome(success=False, field_errors=field_errors)

        try:
            response = self._http.post(
                CREDENTIALS_CALLBACK_PATH,
                json={"email": email, "password": password, "callbackUrl": callback_url},
            )
        except httpx.HTTPError as e:
            logger.warning("Sign-in request failed: %s", str(e))
            return LoginOutcome(success=False, error=CONNECTION_ERROR_MESSAGE)

        self._loaded = False

        if response.status_code == httpx.codes.UNAUTHORIZED:
            return LoginOutcome(success=False, error=INVALID_CREDENTIALS_MESSAGE)

        if response.is_success and response.json().get("ok"):
            return LoginOutcome(success=True, redirect_to=callback_url)

        return LoginOutcome(success=False, error=SIGN_IN_FAILED_MESSAGE)

    def logout(self) -> str:
        """Sign out and return the page to go to next."""
        try:
            self._http.post(SIGNOUT_PATH)
        except httpx.HTTPError as e:
            logger.warning("Sign-out request failed: %s", str(e))
        # The cookie is gone server side; drop any local copy as well.
        self._http.cookies.clear()
        self._session = None
        self._loaded = True
        return LOGIN_PAGE

    def session(self) -> Session | None:
        """Fetch the current session from the server.

        Returns:
            The session, or None when signed out or unreachable.
        """
        try:
            response = self._http.get(SESSION_PATH)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning("Session request failed: %s", str(e))
            return None

        self._session = Session.model_validate(data) if data else None
        self._loaded = True
        return self._session

    @property
    def user(self) -> SessionUser | None:
        """Signed-in user, loading the session on first access."""
        if not self._loaded:
            self.session()
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
