# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User models.

UserRecord is the internal representation and carries the password hash.
It must be converted with to_public() before leaving the service layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from educasem.domains.auth.roles import DEFAULT_ROLE, Role
from educasem.utils.datetime import utc_now


class User(BaseModel):
    """Public view of a user, safe to return to clients.

    Attributes:
        id: User identifier.
        email: Email address (unique, case-insensitive).
        name: Display name.
        role: Platform role.
        avatar: Avatar URL, if any.
        is_email_verified: Whether the email address was confirmed.
        is_active: Whether the account may sign in.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: str
    email: str
    name: str
    role: Role
    avatar: str | None = None
    is_email_verified: bool = False
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class UserRecord(User):
    """Stored user, including credentials and registration profile."""

    hashed_password: str = Field(repr=False)
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    country: str | None = None

    def to_public(self) -> User:
        """Strip the password hash and profile-only fields."""
        return User.model_validate(self.model_dump(include=set(User.model_fields)))


class NewUser(BaseModel):
    """Data needed to create a user record."""

    email: str
    name: str
    hashed_password: str = Field(repr=False)
    role: Role = DEFAULT_ROLE
    avatar: str | None = None
    is_email_verified: bool = False
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    country: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
