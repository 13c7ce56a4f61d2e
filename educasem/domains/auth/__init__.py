# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

This package provides authentication and authorization for Educasem:
- Role hierarchy and role landing pages (roles)
- Login and registration form validation (validation)
- Password hashing with bcrypt (password)
- Session token creation and validation (jwt)
- Credential login (service) and account registration (register)
- Session cookies, redirects and provider sign-in (session, oauth)

Only the leaf modules are re-exported here; the services depend on the
users domain and are imported from their own modules.

Exports:
    Role: Closed set of platform roles.
    has_role: Hierarchy comparison used by the route guard.
    dashboard_url_for_role: Landing page of a role.
    PasswordHasher: Secure password hashing using bcrypt.
"""

from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.roles import (
    DEFAULT_ROLE,
    Role,
    dashboard_url_for_role,
    has_role,
    parse_role,
)

__all__ = [
    "PasswordHasher",
    "Role",
    "DEFAULT_ROLE",
    "parse_role",
    "has_role",
    "dashboard_url_for_role",
]
