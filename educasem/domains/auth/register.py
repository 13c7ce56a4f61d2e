# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User registration service.

Field validation happens before this service is called (see
validate_register_form); the service only decides whether the email is
still free, hashes the password and stores the new account.

Example:
    >>> register_service = RegisterService(store, password_hasher)
    >>> result = register_service.register(payload)
    >>> result.user_id
    'user_3f2a...'
"""

import logging
from typing import NamedTuple

from pydantic import BaseModel, Field

from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.roles import DEFAULT_ROLE, USER_ROLES, Role, parse_role
from educasem.domains.auth.service import AuthErrorCode
from educasem.domains.users.models import NewUser
from educasem.domains.users.store import UserAlreadyExistsError, UserStore
from educasem.utils.datetime import parse_date

logger = logging.getLogger(__name__)

# Addresses that always count as taken, whether or not they are in the store.
RESERVED_EMAILS = frozenset({
    "admin@educasem.com",
    "tutor@educasem.com",
    "student@educasem.com",
})

EMAIL_EXISTS_MESSAGE = "This email is already registered"
REGISTER_SUCCESS_MESSAGE = "User registered successfully"
REGISTER_ERROR_MESSAGE = "Error registering user"


class RegistrationPayload(BaseModel):
    """Data sent to the server to create an account.

    The form variant additionally carries confirm_password, which is
    dropped before submission.
    """

    first_name: str
    last_name: str
    email: str
    phone: str
    password: str = Field(repr=False)
    birth_date: str
    country: str
    role: str = DEFAULT_ROLE.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()


class RegisterResult(NamedTuple):
    """Outcome of a registration attempt."""

    success: bool
    message: str
    user_id: str | None = None
    error: AuthErrorCode | None = None


class RegisterService:
    """Creates user accounts in the user store.

    Attributes:
        _store: User store receiving new accounts.
        _password_hasher: Password hashing utility.
    """

    def __init__(
        self,
        store: UserStore,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self._store = store
        self._password_hasher = password_hasher or PasswordHasher()

    def register(self, payload: RegistrationPayload) -> RegisterResult:
        """Register a new user.

        Args:
            payload: Validated registration data.

        Returns:
            RegisterResult with the generated user id on success.
        """
        try:
            if self.check_email_exists(payload.email):
                return RegisterResult(
                    success=False,
                    message=EMAIL_EXISTS_MESSAGE,
                    error=AuthErrorCode.EMAIL_EXISTS,
                )

            record = self._store.create(
                NewUser(
                    email=payload.email,
                    name=payload.full_name,
                    hashed_password=self._password_hasher.hash(payload.password),
                    role=self._registration_role(payload.role),
                    first_name=payload.first_name.strip(),
                    last_name=payload.last_name.strip(),
                    phone=payload.phone.strip(),
                    birth_date=parse_date(payload.birth_date),
                    country=payload.country,
                )
            )

            logger.info("User registered: %s", record.id)
            return RegisterResult(
                success=True,
                message=REGISTER_SUCCESS_MESSAGE,
                user_id=record.id,
            )

        except UserAlreadyExistsError:
            # Lost a race with a concurrent registration of the same email.
            return RegisterResult(
                success=False,
                message=EMAIL_EXISTS_MESSAGE,
                error=AuthErrorCode.EMAIL_EXISTS,
            )
        except Exception:
            logger.exception("Unexpected error during registration")
            return RegisterResult(
                success=False,
                message=REGISTER_ERROR_MESSAGE,
                error=AuthErrorCode.SERVER_ERROR,
            )

    def check_email_exists(self, email: str) -> bool:
        """Whether an email is reserved or already stored, ignoring case."""
        normalized = email.strip().lower()
        if normalized in RESERVED_EMAILS:
            return True
        return self._store.find_by_email(normalized) is not None

    def check_phone_exists(self, phone: str) -> bool:
        """Phones are not indexed by the store, so no phone is ever taken."""
        return False

    @staticmethod
    def _registration_role(value: str | None) -> Role:
        role = parse_role(value)
        if role is None or role not in USER_ROLES:
            return DEFAULT_ROLE
        return role
