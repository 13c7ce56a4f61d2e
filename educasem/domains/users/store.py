# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User store abstraction and its in-memory implementation.

The in-memory store is seeded with the demo accounts at construction and
keeps any created users for the lifetime of the process only. A database
backed store only needs to implement the UserStore interface.

Example:
    >>> store = InMemoryUserStore.with_seed_users(PasswordHasher(rounds=4))
    >>> store.find_by_email("ADMIN@educasem.com").role
    <Role.ADMIN: 'admin'>
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable, NamedTuple

from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.roles import Role
from educasem.domains.users.models import NewUser, User, UserRecord

logger = logging.getLogger(__name__)

SEED_PASSWORD = "123456789"


class SeedUser(NamedTuple):
    """Demo account definition."""

    id: str
    email: str
    name: str
    role: Role
    avatar: str | None
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SEED_USERS: tuple[SeedUser, ...] = (
    SeedUser("1", "admin@educasem.com", "Admin Usuario", Role.ADMIN,
             "/images/avatars/admin.jpg", True, _day(2024, 1, 1), _day(2024, 1, 15)),
    SeedUser("2", "instructor@educasem.com", "Carlos Mendez", Role.INSTRUCTOR,
             "/images/avatars/instructor.jpg", True, _day(2024, 1, 5), _day(2024, 1, 20)),
    SeedUser("3", "estudiante@educasem.com", "María García", Role.STUDENT,
             "/images/avatars/student.jpg", True, _day(2024, 1, 10), _day(2024, 1, 25)),
    SeedUser("4", "instructor2@educasem.com", "Ana Rodriguez", Role.INSTRUCTOR,
             "/images/avatars/instructor2.jpg", True, _day(2024, 1, 12), _day(2024, 1, 28)),
    SeedUser("5", "estudiante2@educasem.com", "Pedro López", Role.STUDENT,
             None, False, _day(2024, 1, 15), _day(2024, 1, 30)),
)


class UserStoreError(Exception):
    """Base exception for user store operations."""

    pass


class UserAlreadyExistsError(UserStoreError):
    """Raised when creating a user whose email is already stored."""

    pass


class UserStore(ABC):
    """Lookup and creation of user records."""

    @abstractmethod
    def find_by_email(self, email: str) -> UserRecord | None:
        """Find a user by email, ignoring case."""

    @abstractmethod
    def find_by_id(self, user_id: str) -> UserRecord | None:
        """Find a user by id."""

    @abstractmethod
    def create(self, new_user: NewUser) -> UserRecord:
        """Store a new user and return the record with its generated id.

        Raises:
            UserAlreadyExistsError: If the email is already taken.
        """

    @abstractmethod
    def all(self) -> list[UserRecord]:
        """Return every stored record."""

    def get_all_users(self) -> list[User]:
        """Return every user as a public view, for administration screens."""
        return [record.to_public() for record in self.all()]


class InMemoryUserStore(UserStore):
    """Thread-safe in-memory user table.

    Records are keyed by id with a secondary lower-cased email index.
    A single lock guards both.
    """

    def __init__(self, records: Iterable[UserRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, UserRecord] = {}
        self._id_by_email: dict[str, str] = {}
        for record in records:
            self._insert(record)

    @classmethod
    def with_seed_users(
        cls,
        password_hasher: PasswordHasher,
        seed_users: Iterable[SeedUser] = SEED_USERS,
        seed_password: str = SEED_PASSWORD,
    ) -> "InMemoryUserStore":
        """Build a store holding the demo accounts.

        All demo accounts share one password, so it is hashed once.
        """
        hashed = password_hasher.hash(seed_password)
        records = [
            UserRecord(
                id=seed.id,
                email=seed.email,
                name=seed.name,
                role=seed.role,
                avatar=seed.avatar,
                is_email_verified=seed.is_email_verified,
                is_active=True,
                created_at=seed.created_at,
                updated_at=seed.updated_at,
                hashed_password=hashed,
            )
            for seed in seed_users
        ]
        store = cls(records)
        logger.info("User store seeded with %d users", len(records))
        return store

    def _insert(self, record: UserRecord) -> None:
        key = record.email.lower()
        if key in self._id_by_email:
            raise UserAlreadyExistsError(f"Email already registered: {record.email}")
        self._by_id[record.id] = record
        self._id_by_email[key] = record.id

    def find_by_email(self, email: str) -> UserRecord | None:
        if not email:
            return None
        with self._lock:
            user_id = self._id_by_email.get(email.strip().lower())
            return self._by_id.get(user_id) if user_id else None

    def find_by_id(self, user_id: str) -> UserRecord | None:
        with self._lock:
            return self._by_id.get(user_id)

    def create(self, new_user: NewUser) -> UserRecord:
        record = UserRecord(
            id=f"user_{uuid.uuid4().hex}",
            email=new_user.email.strip().lower(),
            name=new_user.name,
            role=new_user.role,
            avatar=new_user.avatar,
            is_email_verified=new_user.is_email_verified,
            is_active=True,
            created_at=new_user.created_at,
            updated_at=new_user.created_at,
            hashed_password=new_user.hashed_password,
            first_name=new_user.first_name,
            last_name=new_user.last_name,
            phone=new_user.phone,
            birth_date=new_user.birth_date,
            country=new_user.country,
        )
        with self._lock:
            self._insert(record)
        logger.info("User created: %s", record.id)
        return record

    def all(self) -> list[UserRecord]:
        with self._lock:
            return list(self._by_id.values())
