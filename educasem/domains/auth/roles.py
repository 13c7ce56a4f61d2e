# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role hierarchy and role-based landing pages.

Single source of truth for role comparisons. Both the route guard and
service-level checks go through has_role().

Hierarchy:
    guest (1) < student (2) < instructor (3) < admin (4)

Legacy role names are accepted on input: ``user`` maps to student and
``tutor`` maps to instructor.

Example:
    >>> has_role("instructor", Role.STUDENT)
    True
    >>> dashboard_url_for_role("admin")
    '/admin/dashboard'
"""

from enum import Enum


class Role(str, Enum):
    """Closed set of platform roles."""

    GUEST = "guest"
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"

    @property
    def level(self) -> int:
        """Position of the role in the hierarchy."""
        return ROLE_LEVELS[self]


ROLE_LEVELS: dict[Role, int] = {
    Role.GUEST: 1,
    Role.STUDENT: 2,
    Role.INSTRUCTOR: 3,
    Role.ADMIN: 4,
}

ROLE_ALIASES: dict[str, Role] = {
    "user": Role.STUDENT,
    "tutor": Role.INSTRUCTOR,
}

# Roles a stored user may hold; guest only exists for anonymous visitors.
USER_ROLES = frozenset({Role.STUDENT, Role.INSTRUCTOR, Role.ADMIN})

DEFAULT_ROLE = Role.STUDENT

DASHBOARD_URLS: dict[Role, str] = {
    Role.ADMIN: "/admin/dashboard",
    Role.INSTRUCTOR: "/instructor/dashboard",
    Role.STUDENT: "/student/dashboard",
}


def parse_role(value: "str | Role | None") -> Role | None:
    """Normalize a role string, resolving legacy aliases.

    Args:
        value: Role name in any case, or a Role.

    Returns:
        The matching Role, or None for unknown or empty values.
    """
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    normalized = value.strip().lower()
    if normalized in ROLE_ALIASES:
        return ROLE_ALIASES[normalized]
    try:
        return Role(normalized)
    except ValueError:
        return None


def role_level(value: "str | Role | None") -> int:
    """Hierarchy level of a role; 0 for unknown roles."""
    role = parse_role(value)
    return role.level if role else 0


def has_role(user_role: "str | Role | None", required: "str | Role") -> bool:
    """Check whether a role meets or exceeds a required role.

    Args:
        user_role: Role held by the user.
        required: Minimum role needed.

    Returns:
        True if the user's level is at least the required level. Unknown
        required roles are never satisfied.
    """
    required_level = role_level(required)
    if required_level == 0:
        return False
    return role_level(user_role) >= required_level


def dashboard_url_for_role(value: "str | Role | None") -> str:
    """Default landing path for a role.

    Unknown roles fall back to the lowest-privilege dashboard.
    """
    role = parse_role(value)
    return DASHBOARD_URLS.get(role, DASHBOARD_URLS[Role.STUDENT])
