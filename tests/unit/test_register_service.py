# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the registration service."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from educasem.domains.auth.password import PasswordHasher
from educasem.domains.auth.register import (
    EMAIL_EXISTS_MESSAGE,
    REGISTER_ERROR_MESSAGE,
    REGISTER_SUCCESS_MESSAGE,
    RegisterService,
    RegistrationPayload,
)
from educasem.domains.auth.roles import Role
from educasem.domains.auth.service import AuthErrorCode
from educasem.domains.users.store import InMemoryUserStore, UserAlreadyExistsError


@pytest.fixture
def payload() -> RegistrationPayload:
    return RegistrationPayload(
        first_name=" Lucía ",
        last_name="Fernández",
        email="Lucia@Example.com",
        phone="+54 11 4567 8901",
        password="Abcdefg1",
        birth_date="2001-04-20",
        country="AR",
    )


class TestRegister:
    """Tests for RegisterService.register."""

    def test_successful_registration(
        self,
        register_service: RegisterService,
        user_store: InMemoryUserStore,
        password_hasher: PasswordHasher,
        payload: RegistrationPayload,
    ) -> None:
        """Test that a new account is stored with a hashed password."""
        result = register_service.register(payload)

        assert result.success is True
        assert result.message == REGISTER_SUCCESS_MESSAGE
        assert result.error is None

        record = user_store.find_by_id(result.user_id)
        assert record.email == "lucia@example.com"
        assert record.name == "Lucía Fernández"
        assert record.first_name == "Lucía"
        assert record.role is Role.STUDENT
        assert record.birth_date == date(2001, 4, 20)
        assert record.country == "AR"
        assert record.hashed_password != "Abcdefg1"
        assert password_hasher.verify("Abcdefg1", record.hashed_password)

    def test_existing_email(
        self,
        register_service: RegisterService,
        payload: RegistrationPayload,
    ) -> None:
        """Test that an email already in the store is refused."""
        result = register_service.register(payload.model_copy(update={"email": "ESTUDIANTE@educasem.com"}))

        assert result.success is False
        assert result.message == EMAIL_EXISTS_MESSAGE
        assert result.error is AuthErrorCode.EMAIL_EXISTS
        assert result.user_id is None

    def test_registering_twice(
        self,
        register_service: RegisterService,
        payload: RegistrationPayload,
    ) -> None:
        assert register_service.register(payload).success is True

        second = register_service.register(payload)

        assert second.success is False
        assert second.error is AuthErrorCode.EMAIL_EXISTS

    @pytest.mark.parametrize(
        "email",
        ["admin@educasem.com", "tutor@educasem.com", "STUDENT@educasem.com"],
    )
    def test_reserved_emails(self, register_service: RegisterService, email: str) -> None:
        """Test that reserved addresses always count as taken."""
        assert register_service.check_email_exists(email) is True

    def test_free_email(self, register_service: RegisterService) -> None:
        assert register_service.check_email_exists("free@example.com") is False

    def test_phone_is_never_taken(self, register_service: RegisterService) -> None:
        assert register_service.check_phone_exists("+34 600 123 456") is False

    @pytest.mark.parametrize(
        ("requested", "stored"),
        [
            ("student", Role.STUDENT),
            ("instructor", Role.INSTRUCTOR),
            ("tutor", Role.INSTRUCTOR),
            ("guest", Role.STUDENT),
            ("wizard", Role.STUDENT),
        ],
    )
    def test_role_is_normalized(
        self,
        register_service: RegisterService,
        user_store: InMemoryUserStore,
        payload: RegistrationPayload,
        requested: str,
        stored: Role,
    ) -> None:
        """Test that unknown or guest roles fall back to student."""
        result = register_service.register(payload.model_copy(update={"role": requested}))

        assert user_store.find_by_id(result.user_id).role is stored

    def test_concurrent_duplicate_reports_email_exists(
        self,
        password_hasher: PasswordHasher,
        payload: RegistrationPayload,
    ) -> None:
        """Test that a duplicate detected by the store is not a server error."""
        store = MagicMock()
        store.find_by_email.return_value = None
        store.create.side_effect = UserAlreadyExistsError("taken")

        result = RegisterService(store, password_hasher).register(payload)

        assert result.success is False
        assert result.error is AuthErrorCode.EMAIL_EXISTS

    def test_unexpected_error(
        self,
        password_hasher: PasswordHasher,
        payload: RegistrationPayload,
    ) -> None:
        store = MagicMock()
        store.find_by_email.return_value = None
        store.create.side_effect = RuntimeError("disk full")

        result = RegisterService(store, password_hasher).register(payload)

        assert result.success is False
        assert result.message == REGISTER_ERROR_MESSAGE
        assert result.error is AuthErrorCode.SERVER_ERROR

    def test_payload_repr_hides_password(self, payload: RegistrationPayload) -> None:
        assert "Abcdefg1" not in repr(payload)
