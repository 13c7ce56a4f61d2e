# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Services are built once per application by init_services() and stored on
app.state; the dependency functions below hand them to endpoints.

Example:
    @router.post("/login")
    async def login(
        auth_service: AuthService = Depends(get_auth_service),
    ):
        ...
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from educasem.api.middleware.route_guard import get_current_user
from educasem.core.config import Settings
from educasem.domains.auth.jwt import JWTManager, TokenPayload
from educasem.domains.auth.oauth import GoogleIdentityProvider
from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.register import RegisterService
from educasem.domains.auth.service import AuthService
from educasem.domains.auth.session import SessionManager
from educasem.domains.catalog import CatalogService
from educasem.domains.users.store import InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


def init_services(
    app: FastAPI,
    settings: Settings,
    store: UserStore | None = None,
    google_provider: GoogleIdentityProvider | None = None,
) -> None:
    """Build the application services and attach them to app.state.

    Args:
        app: Application receiving the services.
        settings: Application settings.
        store: User store; a seeded in-memory store when not provided.
        google_provider: Google verifier; built from settings when Google
            is configured.
    """
    password_hasher = PasswordHasher.from_settings(settings.password)
    jwt_manager = JWTManager(settings.jwt)
    store = store or InMemoryUserStore.with_seed_users(password_hasher)
    auth_service = AuthService(store, jwt_manager, password_hasher)

    if google_provider is None and settings.auth.google_enabled:
        google_provider = GoogleIdentityProvider(settings.auth.google_client_id)

    app.state.settings = settings
    app.state.password_hasher = password_hasher
    app.state.jwt_manager = jwt_manager
    app.state.user_store = store
    app.state.auth_service = auth_service
    app.state.register_service = RegisterService(store, password_hasher)
    app.state.session_manager = SessionManager(auth_service, jwt_manager, settings)
    app.state.catalog_service = CatalogService()
    app.state.google_provider = google_provider

    logger.info(
        "Services initialized (google sign-in %s)",
        "enabled" if google_provider else "disabled",
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_register_service(request: Request) -> RegisterService:
    return request.app.state.register_service


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_google_provider(request: Request) -> GoogleIdentityProvider | None:
    return request.app.state.google_provider


async def require_auth(request: Request) -> TokenPayload:
    """Require an authenticated session.

    Args:
        request: HTTP request.

    Returns:
        Session payload of the current user.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

