# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Credential authentication service.

Checks an email and password pair against the user store and issues a
session token on success. Failures are returned as a LoginResult carrying
a human readable message and a machine readable error code, so callers
never have to catch exceptions for expected outcomes.

Example:
    >>> auth_service = AuthService(store, jwt_manager, password_hasher)
    >>> result = auth_service.login(LoginCredentials("admin@educasem.com", "123456789"))
    >>> result.user.role
    <Role.ADMIN: 'admin'>
"""

import logging
from enum import Enum
from typing import NamedTuple

from educasem.domains.auth.jwt import JWTManager
from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.validation import is_valid_email
from educasem.domains.users.models import User
from educasem.domains.users.store import UserStore

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base exception for authentication errors."""

    pass


class AuthErrorCode(str, Enum):
    """Machine readable reasons a login or registration failed."""

    INVALID_EMAIL = "INVALID_EMAIL"
    PASSWORD_REQUIRED = "PASSWORD_REQUIRED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    SERVER_ERROR = "SERVER_ERROR"


class LoginCredentials(NamedTuple):
    """Email and password submitted by a user."""

    email: str
    password: str


class LoginResult(NamedTuple):
    """Outcome of a login attempt.

    On success user and token are set; on failure error and error_code are.
    """

    success: bool
    user: User | None = None
    token: str | None = None
    error: str | None = None
    error_code: AuthErrorCode | None = None

    @classmethod
    def failure(cls, error: str, error_code: AuthErrorCode) -> "LoginResult":
        return cls(success=False, error=error, error_code=error_code)


class AuthService:
    """Authenticates users by email and password.

    There is no retry and no lockout: every attempt is evaluated on its own.

    Attributes:
        _store: User store.
        _jwt_manager: Session token manager.
        _password_hasher: Password hashing utility.
    """

    def __init__(
        self,
        store: UserStore,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            store: User store to authenticate against.
            jwt_manager: Session token manager.
            password_hasher: Password hasher (uses default if not provided).
        """
        self._store = store
        self._jwt_manager = jwt_manager
        self._password_hasher = password_hasher or PasswordHasher()

    def login(self, credentials: LoginCredentials) -> LoginResult:
        """Authenticate a user.

        Checks run in a fixed order and stop at the first failure: email
        format, blank password, unknown user, inactive account, wrong
        password.

        Args:
            credentials: Submitted email and password.

        Returns:
            LoginResult with the public user and a session token on success.
        """
        email, password = credentials

        try:
            if not is_valid_email(email):
                return LoginResult.failure("Invalid email format", AuthErrorCode.INVALID_EMAIL)

            if not password or not password.strip():
                return LoginResult.failure("Password is required", AuthErrorCode.PASSWORD_REQUIRED)

            record = self._store.find_by_email(email)
            if record is None:
                logger.warning("Login failed: unknown email")
                return LoginResult.failure("User not found", AuthErrorCode.USER_NOT_FOUND)

            if not record.is_active:
                logger.warning("Login failed: inactive account %s", record.id)
                return LoginResult.failure("Account is not active", AuthErrorCode.ACCOUNT_INACTIVE)

            if not self._password_hasher.verify(password, record.hashed_password):
                logger.warning("Login failed: invalid password for user %s", record.id)
                return LoginResult.failure("Incorrect password", AuthErrorCode.INVALID_PASSWORD)

            if self._password_hasher.needs_rehash(record.hashed_password):
                logger.info("Password hash for user %s uses an outdated cost factor", record.id)

            user = record.to_public()
            token = self._jwt_manager.create_session_token(user)

            logger.info("User logged in: %s (%s)", user.id, user.role.value)
            return LoginResult(success=True, user=user, token=token)

        except Exception:
            logger.exception("Unexpected error during login")
            return LoginResult.failure("Internal server error", AuthErrorCode.SERVER_ERROR)

    def get_user_by_id(self, user_id: str) -> User | None:
        """Get the public view of a user by id."""
        record = self._store.find_by_id(user_id)
        return record.to_public() if record else None

    def get_user_by_email(self, email: str) -> User | None:
        """Get the public view of a user by email, ignoring case."""
        record = self._store.find_by_email(email)
        return record.to_public() if record else None

    def update_last_login(self, user_id: str) -> None:
        """Record a successful sign-in.

        The store keeps no login history, so this only logs the event.
        """
        logger.info("Last login updated for user %s", user_id)
