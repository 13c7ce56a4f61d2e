# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the Educasem API.

Run with:
    uvicorn educasem.api.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from educasem import __version__
from educasem.api.dependencies import get_session_manager, init_services
from educasem.api.middleware.route_guard import RouteGuardMiddleware
from educasem.api.routes import health, pages
from educasem.api.v1 import router as api_router
from educasem.core.config import Settings, get_settings
from educasem.domains.auth.oauth import GoogleIdentityProvider
from educasem.domains.users.store import UserStore
from educasem.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Services are built in create_app(); there are no connections to open
    or close, so this only logs startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting Educasem API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    yield

    logger.info("Shutting down Educasem API")


def create_app(
    settings: Settings | None = None,
    store: UserStore | None = None,
    google_provider: GoogleIdentityProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and services applied.

    Args:
        settings: Settings to use instead of the environment.
        store: User store to use instead of the seeded in-memory store.
        google_provider: Google verifier to use instead of the configured one.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Educasem API",
        description="Education platform backend: catalog, sign-in and sessions",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    init_services(app, settings, store=store, google_provider=google_provider)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    # Route guard - session and role checks on every request
    app.add_middleware(
        RouteGuardMiddleware,
        session_manager_factory=get_session_manager,
    )

    # CORS middleware (added last to execute first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(api_router)

    return app
