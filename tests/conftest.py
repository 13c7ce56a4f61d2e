# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (services, validators, token utilities)
- Integration tests (FastAPI application through TestClient)

bcrypt runs at its minimum cost factor so the seeded store builds quickly.
"""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr

from educasem.api.app import create_app
from educasem.core.config.settings import JWTSettings, PasswordSettings, Settings
from educasem.domains.auth.jwt import JWTManager
from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.register import RegisterService
from educasem.domains.auth.service import AuthService
from educasem.domains.auth.session import SessionManager
from educasem.domains.users.store import SEED_PASSWORD, InMemoryUserStore

TEST_SECRET = "test-secret-key-for-jwt-testing"


# =============================================================================
# Settings Fixtures
# =============================================================================


def build_settings(environment: str = "development", **overrides) -> Settings:
    """Settings isolated from the environment, with a fast bcrypt cost."""
    values = {
        "environment": environment,
        "debug": environment == "development",
        "log_level": "DEBUG",
        "jwt": JWTSettings(secret_key=SecretStr(TEST_SECRET)),
        "password": PasswordSettings(bcrypt_rounds=4),
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    """Development settings."""
    return build_settings()


@pytest.fixture
def production_settings() -> Settings:
    """Production settings with a non-default secret."""
    return build_settings("production")


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def seed_password() -> str:
    """Password shared by all seeded accounts."""
    return SEED_PASSWORD


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Fast password hasher."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_manager(settings: Settings) -> JWTManager:
    """JWT manager with test settings."""
    return JWTManager(settings.jwt)


@pytest.fixture
def user_store(password_hasher: PasswordHasher) -> InMemoryUserStore:
    """Store seeded with the demo accounts."""
    return InMemoryUserStore.with_seed_users(password_hasher)


@pytest.fixture
def auth_service(
    user_store: InMemoryUserStore,
    jwt_manager: JWTManager,
    password_hasher: PasswordHasher,
) -> AuthService:
    return AuthService(user_store, jwt_manager, password_hasher)


@pytest.fixture
def register_service(
    user_store: InMemoryUserStore,
    password_hasher: PasswordHasher,
) -> RegisterService:
    return RegisterService(user_store, password_hasher)


@pytest.fixture
def session_manager(
    auth_service: AuthService,
    jwt_manager: JWTManager,
    settings: Settings,
) -> SessionManager:
    return SessionManager(auth_service, jwt_manager, settings)


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(settings: Settings, user_store: InMemoryUserStore) -> FastAPI:
    """Application wired to the test store."""
    return create_app(settings, store=user_store)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client that does not follow redirects."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-process app)"
    )
