# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the authentication endpoints."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from educasem.api.app import create_app
from educasem.core.config import Settings
from educasem.domains.auth.oauth import (
    GoogleIdentityProvider,
    OAuthProfile,
    OAuthVerificationError,
)
from educasem.domains.users.store import InMemoryUserStore

COOKIE_NAME = "educasem.session-token"


@pytest.fixture
def registration() -> dict[str, Any]:
    return {
        "firstName": "Lucía",
        "lastName": "Fernández",
        "email": "Lucia@Example.com",
        "phone": "+54 11 4567 8901",
        "password": "Abcdefg1",
        "confirmPassword": "Abcdefg1",
        "birthDate": "2001-04-20",
        "country": "AR",
    }


@pytest.fixture
def production_client(
    production_settings: Settings,
    user_store: InMemoryUserStore,
) -> Generator[TestClient, None, None]:
    app = create_app(production_settings, store=user_store)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def google_provider() -> MagicMock:
    return MagicMock(spec=GoogleIdentityProvider)


@pytest.fixture
def google_client(
    settings: Settings,
    user_store: InMemoryUserStore,
    google_provider: MagicMock,
) -> Generator[TestClient, None, None]:
    app = create_app(settings, store=user_store, google_provider=google_provider)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


class TestLoginEndpoint:
    """Tests for POST /api/auth/login."""

    def test_login_success(self, client: TestClient, seed_password: str) -> None:
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@educasem.com", "password": seed_password},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["id"] == "1"
        assert data["user"]["role"] == "admin"
        assert "hashed_password" not in data["user"]

    @pytest.mark.parametrize(
        "body",
        [{}, {"email": "admin@educasem.com"}, {"password": "123456789"}, {"email": "", "password": ""}],
    )
    def test_missing_fields(self, client: TestClient, body: dict[str, str]) -> None:
        response = client.post("/api/auth/login", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email and password are required"}

    def test_missing_body(self, client: TestClient) -> None:
        response = client.post("/api/auth/login")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email and password are required"}

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email and password are required"}

    @pytest.mark.parametrize(
        "body",
        [
            {"email": 123, "password": "123456789"},
            {"email": "admin@educasem.com", "password": ["123456789"]},
            ["admin@educasem.com", "123456789"],
            "admin@educasem.com",
        ],
    )
    def test_non_string_credentials(self, client: TestClient, body: Any) -> None:
        """Test that mistyped JSON gets the login error shape instead of a 422."""
        response = client.post("/api/auth/login", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email and password are required"}

    def test_whitespace_password_reaches_service(self, client: TestClient) -> None:
        """Test that only absent or empty fields are a 400."""
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@educasem.com", "password": "   "},
        )

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Password is required",
            "errorCode": "PASSWORD_REQUIRED",
        }

    def test_wrong_password(self, client: TestClient) -> None:
        """Test that development responses name the failure."""
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@educasem.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Incorrect password",
            "errorCode": "INVALID_PASSWORD",
        }

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "123456789"},
        )

        assert response.status_code == 401
        assert response.json()["errorCode"] == "USER_NOT_FOUND"

    def test_production_collapses_failure_reasons(
        self,
        production_client: TestClient,
    ) -> None:
        """Test that production does not reveal whether an account exists."""
        unknown = production_client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "123456789"},
        )
        wrong = production_client.post(
            "/api/auth/login",
            json={"email": "admin@educasem.com", "password": "wrong-password"},
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {
            "success": False,
            "error": "Invalid email or password",
        }

    def test_store_failure_is_500(self, settings: Settings) -> None:
        store = MagicMock()
        store.find_by_email.side_effect = RuntimeError("store offline")
        app = create_app(settings, store=store)

        with TestClient(app) as test_client:
            response = test_client.post(
                "/api/auth/login",
                json={"email": "admin@educasem.com", "password": "123456789"},
            )

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    def test_get_is_not_allowed(self, client: TestClient) -> None:
        assert client.get("/api/auth/login").status_code == 405


class TestRegisterEndpoint:
    """Tests for POST /api/auth/register."""

    def test_register_success(
        self,
        client: TestClient,
        user_store: InMemoryUserStore,
        registration: dict[str, Any],
    ) -> None:
        response = client.post("/api/auth/register", json=registration)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User registered successfully"
        record = user_store.find_by_id(data["userId"])
        assert record.email == "lucia@example.com"
        assert record.role.value == "student"

    def test_registered_user_can_log_in(
        self,
        client: TestClient,
        registration: dict[str, Any],
    ) -> None:
        client.post("/api/auth/register", json=registration)

        response = client.post(
            "/api/auth/login",
            json={"email": "lucia@example.com", "password": "Abcdefg1"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "student"

    def test_client_role_is_ignored(
        self,
        client: TestClient,
        user_store: InMemoryUserStore,
        registration: dict[str, Any],
    ) -> None:
        """Test that self registration always creates a student."""
        registration["role"] = "admin"

        response = client.post("/api/auth/register", json=registration)

        assert user_store.find_by_id(response.json()["userId"]).role.value == "student"

    def test_snake_case_keys_are_accepted(
        self,
        client: TestClient,
        registration: dict[str, Any],
    ) -> None:
        body = {
            "first_name": registration["firstName"],
            "last_name": registration["lastName"],
            "email": registration["email"],
            "phone": registration["phone"],
            "password": registration["password"],
            "birth_date": registration["birthDate"],
            "country": registration["country"],
        }

        assert client.post("/api/auth/register", json=body).status_code == 201

    def test_invalid_form(self, client: TestClient, registration: dict[str, Any]) -> None:
        registration["password"] = "short"
        registration["confirmPassword"] = "other"
        registration["birthDate"] = "2020-01-01"

        response = client.post("/api/auth/register", json=registration)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Please correct the errors in the form"
        assert set(data["errors"]) == {"password", "confirm_password", "birth_date"}

    @pytest.mark.parametrize("email", ["estudiante@educasem.com", "tutor@educasem.com"])
    def test_email_taken(
        self,
        client: TestClient,
        registration: dict[str, Any],
        email: str,
    ) -> None:
        registration["email"] = email

        response = client.post("/api/auth/register", json=registration)

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "This email is already registered",
            "error": "EMAIL_EXISTS",
        }


class TestCredentialsCallback:
    """Tests for POST /api/auth/callback/credentials and the session cookie."""

    def test_sign_in_sets_cookie(self, client: TestClient, seed_password: str) -> None:
        response = client.post(
            "/api/auth/callback/credentials",
            json={
                "email": "instructor@educasem.com",
                "password": seed_password,
                "callbackUrl": "/courses/1",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "url": "http://localhost:3000/courses/1"}
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{COOKIE_NAME}=")
        assert "HttpOnly" in cookie

    def test_foreign_callback_uses_role_dashboard(
        self,
        client: TestClient,
        seed_password: str,
    ) -> None:
        response = client.post(
            "/api/auth/callback/credentials",
            json={
                "email": "admin@educasem.com",
                "password": seed_password,
                "callbackUrl": "https://evil.example.com",
            },
        )

        assert response.json()["url"] == "http://localhost:3000/admin/dashboard"

    def test_rejected_credentials(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/callback/credentials",
            json={"email": "admin@educasem.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json() == {"ok": False, "error": "Incorrect password"}
        assert "set-cookie" not in response.headers

    def test_session_round_trip(self, client: TestClient, seed_password: str) -> None:
        """Test that the cookie opens protected pages and the session endpoint."""
        client.post(
            "/api/auth/callback/credentials",
            json={"email": "estudiante@educasem.com", "password": seed_password},
        )

        session = client.get("/api/auth/session").json()
        dashboard = client.get("/student/dashboard")

        assert session["user"]["id"] == "3"
        assert session["user"]["role"] == "student"
        assert session["expires"]
        assert dashboard.status_code == 200
        assert dashboard.json()["dashboard"] == "student"

    def test_signout_clears_cookie(self, client: TestClient, seed_password: str) -> None:
        client.post(
            "/api/auth/callback/credentials",
            json={"email": "estudiante@educasem.com", "password": seed_password},
        )

        response = client.post("/api/auth/signout")

        assert response.status_code == 200
        assert response.json() == {"url": "/auth/login"}
        assert client.get("/api/auth/session").json() == {}
        assert client.get("/student/dashboard").status_code == 307


class TestSessionEndpoint:
    """Tests for GET /api/auth/session."""

    def test_signed_out(self, client: TestClient) -> None:
        response = client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {}

    def test_garbage_cookie(self, client: TestClient) -> None:
        response = client.get("/api/auth/session", headers={"Cookie": f"{COOKIE_NAME}=garbage"})

        assert response.json() == {}


class TestGoogleSignIn:
    """Tests for POST /api/auth/callback/google."""

    def test_not_configured(self, client: TestClient) -> None:
        response = client.post("/api/auth/callback/google", json={"credential": "id-token"})

        assert response.status_code == 503
        assert response.json()["ok"] is False

    def test_known_user(
        self,
        google_client: TestClient,
        google_provider: MagicMock,
    ) -> None:
        """Test that a Google account with a stored email signs in as that user."""
        google_provider.verify.return_value = OAuthProfile(
            provider="google",
            sub="1098",
            email="admin@educasem.com",
            email_verified=True,
        )

        response = google_client.post("/api/auth/callback/google", json={"credential": "id-token"})

        assert response.status_code == 200
        assert response.json()["url"] == "http://localhost:3000/admin/dashboard"
        assert google_client.get("/api/auth/session").json()["user"]["id"] == "1"

    def test_new_user_session_comes_from_token(
        self,
        google_client: TestClient,
        google_provider: MagicMock,
    ) -> None:
        google_provider.verify.return_value = OAuthProfile(
            provider="google",
            sub="42",
            email="someone@gmail.com",
            name="Some One",
        )

        google_client.post("/api/auth/callback/google", json={"credential": "id-token"})
        session = google_client.get("/api/auth/session").json()

        assert session["user"]["id"] == "google:42"
        assert session["user"]["role"] == "student"
        assert session["user"]["name"] == "Some One"

    def test_rejected_token(
        self,
        google_client: TestClient,
        google_provider: MagicMock,
    ) -> None:
        google_provider.verify.side_effect = OAuthVerificationError("Invalid Google token: bad")

        response = google_client.post("/api/auth/callback/google", json={"credential": "bad"})

        assert response.status_code == 401
        assert response.json() == {"ok": False, "error": "Invalid Google credential"}


class TestProvidersEndpoint:
    """Tests for GET /api/auth/providers."""

    def test_credentials_only(self, client: TestClient) -> None:
        assert set(client.get("/api/auth/providers").json()) == {"credentials"}

    def test_with_google(self, google_client: TestClient) -> None:
        assert set(google_client.get("/api/auth/providers").json()) == {"credentials", "google"}
