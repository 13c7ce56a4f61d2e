# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoint.

Reports process uptime and the state of the in-process services. There are
no external backends, so a running process with its services attached is
healthy.
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from educasem import __version__
from educasem.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentsHealth(BaseModel):
    """In-process component status."""

    user_store: str = Field(description="User store status")
    users: int = Field(description="Number of stored users")
    google_sign_in: str = Field(description="Google sign-in availability")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    components: ComponentsHealth


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check if the API is healthy.

    Returns:
        HealthResponse with component details.
    """
    state = request.app.state
    store = getattr(state, "user_store", None)
    users = len(store.all()) if store is not None else 0

    return HealthResponse(
        status="healthy" if store is not None else "unhealthy",
        timestamp=utc_now(),
        version=__version__,
        environment=state.settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        components=ComponentsHealth(
            user_store="healthy" if store is not None else "unavailable",
            users=users,
            google_sign_in="enabled" if state.google_provider else "disabled",
        ),
    )
