# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

Exports:
    RouteGuardMiddleware: Session and role based route protection.
    evaluate_request: The guard's decision function.
"""

from educasem.api.middleware.route_guard import (
    GuardDecision,
    RouteGuardMiddleware,
    evaluate_request,
    get_current_user,
    is_public_path,
)

__all__ = [
    "RouteGuardMiddleware",
    "GuardDecision",
    "evaluate_request",
    "is_public_path",
    "get_current_user",
]
