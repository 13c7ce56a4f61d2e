# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session token management using python-jose.

A session token is a signed, time-boxed JWT carrying the identity claims
the rest of the application needs: user id, email, name, role, avatar and
email verification flag. A new token is issued at every sign-in; there is
no server-side revocation list.

Example:
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> token = jwt_manager.create_session_token(user)
    >>> jwt_manager.verify_token(token).role
    'student'
"""

import logging
import secrets
from datetime import datetime, timedelta

from jose import ExpiredSignatureError, jwt
from pydantic import BaseModel

from educasem.core.config.settings import JWTSettings
from educasem.domains.auth.roles import DEFAULT_ROLE, parse_role
from educasem.domains.users.models import User
from educasem.utils.datetime import utc_from_timestamp, utc_now

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """Decoded session token claims.

    Attributes:
        sub: Subject (user ID).
        email: User email.
        name: Display name.
        role: Role name.
        avatar: Avatar URL.
        email_verified: Whether the email was verified.
        provider: Sign-in provider that issued the session.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: Token ID.
    """

    sub: str
    email: str
    name: str | None = None
    role: str = DEFAULT_ROLE.value
    avatar: str | None = None
    email_verified: bool = False
    provider: str = "credentials"
    exp: int
    iat: int
    jti: str

    @property
    def expires_at(self) -> datetime:
        """Expiry as a timezone-aware datetime."""
        return utc_from_timestamp(self.exp)


class SessionClaims(BaseModel):
    """Identity claims embedded in a session token, before signing."""

    id: str
    email: str
    name: str | None = None
    role: str = DEFAULT_ROLE.value
    avatar: str | None = None
    email_verified: bool = False

    @classmethod
    def from_user(cls, user: User) -> "SessionClaims":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role.value,
            avatar=user.avatar,
            email_verified=user.is_email_verified,
        )


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """Session token creation and validation.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    @property
    def max_age(self) -> timedelta:
        """Lifetime of newly issued tokens."""
        return timedelta(days=self._settings.session_max_age_days)

    def create_token(
        self,
        claims: SessionClaims,
        provider: str = "credentials",
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a session token for the given claims.

        Args:
            claims: Identity claims to embed.
            provider: Sign-in provider name.
            expires_delta: Override of the configured lifetime.

        Returns:
            Encoded JWT string.
        """
        now = utc_now()
        exp = now + (expires_delta if expires_delta is not None else self.max_age)
        role = parse_role(claims.role) or DEFAULT_ROLE

        payload = {
            "sub": claims.id,
            "email": claims.email,
            "name": claims.name,
            "role": role.value,
            "avatar": claims.avatar,
            "email_verified": claims.email_verified,
            "provider": provider,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def create_session_token(
        self,
        user: User,
        provider: str = "credentials",
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a session token for a stored user."""
        return self.create_token(
            SessionClaims.from_user(user),
            provider=provider,
            expires_delta=expires_delta,
        )

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate a session token.

        Args:
            token: JWT token string.

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the signature or claims are invalid.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
            return TokenPayload.model_validate(payload)

        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except Exception as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

    def verify_token(self, token: str | None) -> TokenPayload | None:
        """Decode a token, returning None instead of raising.

        Callers decide how to react to a missing or invalid session.
        """
        if not token:
            return None
        try:
            return self.decode_token(token)
        except TokenExpiredError:
            logger.debug("Session token expired")
            return None
        except InvalidTokenError:
            return None
