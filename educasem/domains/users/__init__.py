# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain: user models and the user store.

Exports:
    User: Public view of a user.
    UserRecord: Stored user including the password hash.
    NewUser: Data needed to create a user.
    UserStore: Store interface.
    InMemoryUserStore: Process-lifetime store seeded with demo accounts.
"""

from educasem.domains.users.models import NewUser, User, UserRecord
from educasem.domains.users.store import (
    SEED_USERS,
    InMemoryUserStore,
    UserAlreadyExistsError,
    UserStore,
    UserStoreError,
)

__all__ = [
    "User",
    "UserRecord",
    "NewUser",
    "UserStore",
    "InMemoryUserStore",
    "UserStoreError",
    "UserAlreadyExistsError",
    "SEED_USERS",
]
