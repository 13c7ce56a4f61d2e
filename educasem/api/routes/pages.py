# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Page endpoints.

The landing page, the unauthorized page and one dashboard per role. Access
to the dashboards is enforced by the route guard; by the time a handler
runs, the session payload is available through require_auth.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from educasem.api.dependencies import require_auth
from educasem.domains.auth.jwt import TokenPayload
from educasem.domains.auth.roles import Role, dashboard_url_for_role

router = APIRouter()


def _dashboard(role: Role, payload: TokenPayload) -> dict[str, Any]:
    return {
        "dashboard": role.value,
        "user": {
            "id": payload.sub,
            "email": payload.email,
            "name": payload.name,
            "role": payload.role,
            "avatar": payload.avatar,
        },
    }


@router.get("/", summary="Landing page")
async def index(request: Request) -> dict[str, Any]:
    payload = getattr(request.state, "user", None)
    return {
        "name": "Educasem",
        "authenticated": payload is not None,
        "dashboard": dashboard_url_for_role(payload.role) if payload else None,
        "links": {
            "courses": "/api/catalog/courses",
            "instructors": "/api/catalog/instructors",
            "login": "/auth/login",
            "register": "/auth/register",
        },
    }


@router.get("/unauthorized", summary="Unauthorized page")
async def unauthorized() -> JSONResponse:
    return JSONResponse(
        {"message": "You do not have permission to access this page"},
        status_code=status.HTTP_403_FORBIDDEN,
    )


@router.get("/admin/dashboard", summary="Admin dashboard")
async def admin_dashboard(
    request: Request,
    payload: TokenPayload = Depends(require_auth),
) -> dict[str, Any]:
    """Admin landing page, with the registered users."""
    page = _dashboard(Role.ADMIN, payload)
    store = request.app.state.user_store
    page["users"] = [user.model_dump(mode="json") for user in store.get_all_users()]
    return page


@router.get("/instructor/dashboard", summary="Instructor dashboard")
async def instructor_dashboard(
    payload: TokenPayload = Depends(require_auth),
) -> dict[str, Any]:
    return _dashboard(Role.INSTRUCTOR, payload)


@router.get("/student/dashboard", summary="Student dashboard")
async def student_dashboard(
    payload: TokenPayload = Depends(require_auth),
) -> dict[str, Any]:
    return _dashboard(Role.STUDENT, payload)
