# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session layer tying sign-in providers to session tokens and cookies.

Sign-in (credentials or an external provider) produces a SignInUser, the
common identity shape. A SignInUser is turned into a signed session token
that travels in an HTTP-only cookie. Reading a session decodes the token
and refreshes the user from the store, falling back to the token claims
when the user is no longer stored.

Example:
    >>> manager = SessionManager(auth_service, jwt_manager, settings)
    >>> user = manager.authorize_credentials("admin@educasem.com", "123456789")
    >>> token = manager.issue_session(user)
    >>> manager.build_session(manager.verify_session(token)).user.role
    'admin'
"""

import logging
from datetime import datetime
from typing import Mapping
from urllib.parse import urlsplit

from pydantic import BaseModel
from starlette.responses import Response

from educasem.core.config.settings import Settings
from educasem.domains.auth.jwt import JWTManager, SessionClaims, TokenPayload
from educasem.domains.auth.oauth import OAuthProfile
from educasem.domains.auth.roles import DEFAULT_ROLE, dashboard_url_for_role, parse_role
from educasem.domains.auth.service import AuthError, AuthService, LoginCredentials
from educasem.domains.users.models import User
from educasem.utils.datetime import format_iso

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
BEARER_PREFIX = "bearer "


class CredentialsSignInError(AuthError):
    """Raised when an email and password sign-in is refused."""

    pass


class SignInUser(BaseModel):
    """Identity produced by any sign-in provider."""

    id: str
    email: str
    name: str | None = None
    role: str = DEFAULT_ROLE.value
    avatar: str | None = None
    is_email_verified: bool = False
    is_active: bool = True
    provider: str = CREDENTIALS_PROVIDER

    @classmethod
    def from_user(cls, user: User, provider: str = CREDENTIALS_PROVIDER) -> "SignInUser":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role.value,
            avatar=user.avatar,
            is_email_verified=user.is_email_verified,
            is_active=user.is_active,
            provider=provider,
        )


class SessionUser(BaseModel):
    """User as exposed by the session endpoint."""

    id: str
    email: str
    name: str | None = None
    role: str
    avatar: str | None = None
    is_email_verified: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Session(BaseModel):
    """Externally visible session."""

    user: SessionUser
    expires: str


def resolve_redirect(url: str | None, base_url: str, role: str | None = None) -> str:
    """Decide where to send a user after sign-in.

    Relative paths are joined to base_url and absolute URLs on the same
    origin are returned unchanged. Anything else (another origin, a
    protocol-relative ``//host`` URL, or garbage) is replaced by the
    role's dashboard.

    Args:
        url: Requested callback URL.
        base_url: Public origin of the application.
        role: Role of the signed-in user, if known.

    Returns:
        Absolute URL on base_url's origin.
    """
    base = base_url.rstrip("/")
    fallback = f"{base}{dashboard_url_for_role(role)}"

    if not url:
        return fallback

    if url.startswith("/") and not url.startswith("//") and "\\" not in url:
        return f"{base}{url}"

    try:
        target = urlsplit(url)
        origin = urlsplit(base)
    except ValueError:
        return fallback

    if target.scheme in ("http", "https") and target.netloc and (
        (target.scheme, target.netloc.lower()) == (origin.scheme, origin.netloc.lower())
    ):
        return url

    return fallback


def extract_session_token(
    cookies: Mapping[str, str],
    authorization: str | None,
    cookie_name: str,
) -> str | None:
    """Read a session token from the session cookie or a Bearer header.

    The cookie wins when both are present.
    """
    token = cookies.get(cookie_name)
    if token:
        return token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


class SessionManager:
    """Issues, reads and clears sessions.

    Attributes:
        _auth_service: Credential authentication service.
        _jwt_manager: Session token manager.
        _settings: Application settings (cookie and redirect config).
    """

    def __init__(
        self,
        auth_service: AuthService,
        jwt_manager: JWTManager,
        settings: Settings,
    ) -> None:
        self._auth_service = auth_service
        self._jwt_manager = jwt_manager
        self._settings = settings

    @property
    def cookie_name(self) -> str:
        return self._settings.session_cookie_name

    @property
    def base_url(self) -> str:
        return self._settings.auth.base_url

    def authorize_credentials(self, email: str | None, password: str | None) -> SignInUser:
        """Sign in with an email and password.

        Args:
            email: Submitted email.
            password: Submitted password.

        Returns:
            SignInUser for the authenticated account.

        Raises:
            CredentialsSignInError: With the login failure message.
        """
        if not email or not password:
            raise CredentialsSignInError("Email and password are required")

        result = self._auth_service.login(LoginCredentials(email=email, password=password))
        if not result.success or result.user is None:
            raise CredentialsSignInError(result.error or "Invalid credentials")

        self._auth_service.update_last_login(result.user.id)
        logger.info("User signed in: %s", result.user.id)
        return SignInUser.from_user(result.user)

    def sign_in_oauth(self, profile: OAuthProfile) -> SignInUser:
        """Map a verified provider identity onto a SignInUser.

        A profile whose email belongs to a stored user signs in as that
        user. Unknown identities get a provider-scoped id and the default
        role; they are not persisted.
        """
        known = self._auth_service.get_user_by_email(profile.email) if profile.email else None

        if known is not None:
            logger.info("User signed in via %s: %s", profile.provider, known.id)
            return SignInUser(
                id=known.id,
                email=known.email,
                name=profile.name or known.name,
                role=known.role.value,
                avatar=profile.picture or known.avatar,
                is_email_verified=profile.email_verified or known.is_email_verified,
                is_active=known.is_active,
                provider=profile.provider,
            )

        logger.info("Would create new user from %s sign-in: %s", profile.provider, profile.email)
        return SignInUser(
            id=f"{profile.provider}:{profile.sub}",
            email=profile.email or "",
            name=profile.name,
            role=DEFAULT_ROLE.value,
            avatar=profile.picture,
            is_email_verified=profile.email_verified,
            provider=profile.provider,
        )

    def build_token_claims(self, user: SignInUser) -> SessionClaims:
        role = parse_role(user.role) or DEFAULT_ROLE
        return SessionClaims(
            id=user.id,
            email=user.email,
            name=user.name,
            role=role.value,
            avatar=user.avatar,
            email_verified=user.is_email_verified,
        )

    def issue_session(self, user: SignInUser) -> str:
        """Sign a fresh session token for a signed-in user."""
        return self._jwt_manager.create_token(
            self.build_token_claims(user),
            provider=user.provider,
        )

    def verify_session(self, token: str | None) -> TokenPayload | None:
        return self._jwt_manager.verify_token(token)

    def build_session(self, payload: TokenPayload) -> Session:
        """Build the session view for a decoded token.

        The user is re-read from the store so role or profile changes show
        up without a new sign-in. Users missing from the store (external
        sign-ins, removed accounts) are described by the token claims.
        """
        stored = self._auth_service.get_user_by_id(payload.sub)

        if stored is not None:
            user = SessionUser(
                id=stored.id,
                email=stored.email,
                name=stored.name,
                role=stored.role.value,
                avatar=stored.avatar,
                is_email_verified=stored.is_email_verified,
                is_active=stored.is_active,
                created_at=stored.created_at,
                updated_at=stored.updated_at,
            )
        else:
            user = SessionUser(
                id=payload.sub,
                email=payload.email,
                name=payload.name,
                role=payload.role,
                avatar=payload.avatar,
                is_email_verified=payload.email_verified,
            )

        return Session(user=user, expires=format_iso(payload.expires_at))

    def resolve_redirect(self, url: str | None, role: str | None = None) -> str:
        return resolve_redirect(url, self.base_url, role)

    def set_session_cookie(self, response: Response, token: str) -> None:
        """Attach the session cookie to a response."""
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self._settings.jwt.session_max_age_seconds,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self._settings.session_cookie_secure,
        )

    def destroy_session(self, response: Response) -> None:
        """Clear the session cookie.

        Issued tokens stay valid until they expire; there is no revocation.
        """
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self._settings.session_cookie_secure,
        )
