# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session and role based route protection.

Every request passes through RouteGuardMiddleware. Public pages and the
auth endpoints are let through untouched; every other path needs a valid
session token, read from the session cookie or an ``Authorization:
Bearer`` header. Role prefixes (``/admin``, ``/instructor``) are checked
against the role hierarchy, and ``/dashboard`` sends the user to the
landing page of their role.

The decision itself is the pure function evaluate_request(), so it can be
tested without an application.

Example:
    >>> evaluate_request("/admin/users", payload_with_role("student"))
    GuardDecision(action='redirect', location='/unauthorized')
"""

import logging
import re
from typing import Callable, Literal, NamedTuple
from urllib.parse import urlencode

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from educasem.domains.auth.jwt import TokenPayload
from educasem.domains.auth.roles import Role, dashboard_url_for_role, has_role
from educasem.domains.auth.session import SessionManager, extract_session_token
from educasem.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
UNAUTHORIZED_PATH = "/unauthorized"
DASHBOARD_PATH = "/dashboard"

# Paths that don't require authentication
PUBLIC_PATHS = frozenset({
    "/",
    "/about",
    "/contact",
    "/courses",
    "/instructors",
    "/plans",
    "/auth/login",
    "/auth/register",
    "/auth/forgot-password",
    "/auth/reset-password",
    "/auth/error",
    "/auth/verify-request",
    "/unauthorized",
    "/health",
    "/docs",
    "/openapi.json",
    "/api/auth/callback",
    "/api/auth/signin",
    "/api/auth/signout",
    "/api/auth/session",
    "/api/auth/csrf",
    "/api/auth/providers",
})

# Path patterns that don't require authentication
PUBLIC_PATH_PATTERNS = (
    re.compile(r"^/courses/[^/]+$"),
    re.compile(r"^/instructors/[^/]+$"),
    re.compile(r"^/api/auth/"),
    re.compile(r"^/api/public/"),
    re.compile(r"^/api/catalog/"),
    re.compile(r"^/_next/"),
    re.compile(r"^/favicon\.ico$"),
    re.compile(r"^/images/"),
    re.compile(r"^/icons/"),
    re.compile(r"^/static/"),
)

# Minimum role per path prefix, checked in order
ROLE_PREFIXES: tuple[tuple[str, Role], ...] = (
    ("/admin", Role.ADMIN),
    ("/instructor", Role.INSTRUCTOR),
    ("/student", Role.STUDENT),
)


class GuardDecision(NamedTuple):
    """What to do with a request: let it through or redirect it."""

    action: Literal["allow", "redirect"]
    location: str | None = None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls("allow")

    @classmethod
    def redirect(cls, location: str) -> "GuardDecision":
        return cls("redirect", location)


def is_public_path(path: str) -> bool:
    """Check if path is public (no auth required)."""
    if path in PUBLIC_PATHS:
        return True
    return any(pattern.match(path) for pattern in PUBLIC_PATH_PATTERNS)


def login_redirect(path: str) -> str:
    """Login page URL that returns to path after sign-in."""
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}"


def evaluate_request(path: str, payload: TokenPayload | None) -> GuardDecision:
    """Decide whether a request may proceed.

    Args:
        path: Request path.
        payload: Decoded session token, or None when there is no valid one.

    Returns:
        GuardDecision to allow the request or redirect it.
    """
    if is_public_path(path):
        return GuardDecision.allow()

    if payload is None:
        return GuardDecision.redirect(login_redirect(path))

    for prefix, required in ROLE_PREFIXES:
        if path.startswith(prefix):
            if not has_role(payload.role, required):
                return GuardDecision.redirect(UNAUTHORIZED_PATH)
            break

    if path == DASHBOARD_PATH:
        return GuardDecision.redirect(dashboard_url_for_role(payload.role))

    return GuardDecision.allow()


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Middleware enforcing sessions and roles on every request.

    Allowed requests carry the decoded token in request.state.user
    (None on public paths without a session).

    Attributes:
        _session_manager_factory: Returns the session manager, resolved per
            request so the app's services can be swapped in tests.
    """

    def __init__(
        self,
        app: ASGIApp,
        session_manager_factory: Callable[[Request], SessionManager],
    ) -> None:
        """Initialize the route guard.

        Args:
            app: ASGI application.
            session_manager_factory: Callable returning the session manager
                for a request.
        """
        super().__init__(app)
        self._session_manager_factory = session_manager_factory

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Authenticate the request and enforce route rules.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response, or a 307 redirect.
        """
        request.state.user = None
        path = request.url.path

        session_manager = self._session_manager_factory(request)
        token = extract_session_token(
            request.cookies,
            request.headers.get("Authorization"),
            session_manager.cookie_name,
        )
        payload = session_manager.verify_session(token)

        bind_context(path=path, user_id=payload.sub if payload else None)
        try:
            decision = evaluate_request(path, payload)
            if decision.action == "redirect":
                logger.debug("Redirecting %s to %s", path, decision.location)
                return RedirectResponse(decision.location, status_code=307)

            request.state.user = payload
            return await call_next(request)
        finally:
            clear_context()


def get_current_user(request: Request) -> TokenPayload | None:
    """Get the session payload set by the route guard.

    Args:
        request: HTTP request with state.

    Returns:
        TokenPayload or None if not authenticated.
    """
    return getattr(request.state, "user", None)
