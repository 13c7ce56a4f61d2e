# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration form state and submission.

RegisterFlow holds the registration form the way the browser form does:
field values, per-field errors, a submitting flag and a success message.
A successful registration signs the new user in straight away.
"""

import logging
from typing import NamedTuple

import httpx

from educasem.client.auth import DEFAULT_CALLBACK_URL, AuthClient
from educasem.domains.auth.roles import DEFAULT_ROLE
from educasem.domains.auth.validation import has_errors, validate_register_form

logger = logging.getLogger(__name__)

REGISTER_PATH = "/api/auth/register"

FORM_ERRORS_MESSAGE = "Please correct the errors in the form"
REGISTER_FAILED_MESSAGE = "Error processing registration. Please try again."

INITIAL_FORM_DATA: dict[str, str] = {
    "first_name": "",
    "last_name": "",
    "email": "",
    "phone": "",
    "password": "",
    "confirm_password": "",
    "birth_date": "",
    "country": "",
}


class RegisterOutcome(NamedTuple):
    """Result of a registration submit."""

    success: bool
    message: str
    redirect_to: str | None = None


class RegisterFlow:
    """Registration form bound to the registration endpoint.

    Attributes:
        form_data: Current field values.
        errors: Field name to error message; ``general`` holds server errors.
        is_submitting: True while a submit is in flight, and after a
            successful one.
        success_message: Server message of the last successful registration.
    """

    def __init__(self, auth_client: AuthClient, http: httpx.Client) -> None:
        self._auth_client = auth_client
        self._http = http
        self.form_data: dict[str, str] = dict(INITIAL_FORM_DATA)
        self.errors: dict[str, str] = {}
        self.is_submitting = False
        self.success_message = ""

    def handle_change(self, name: str, value: str) -> None:
        """Update a field and clear its error."""
        self.form_data[name] = value
        self.errors.pop(name, None)

    def validate_form(self) -> bool:
        self.errors = validate_register_form(self.form_data)
        return not has_errors(self.errors)

    def _payload(self) -> dict[str, str]:
        data = self.form_data
        return {
            "firstName": data["first_name"].strip(),
            "lastName": data["last_name"].strip(),
            "email": data["email"].strip().lower(),
            "phone": data["phone"].strip(),
            "password": data["password"],
            "confirmPassword": data["confirm_password"],
            "birthDate": data["birth_date"],
            "country": data["country"],
            "role": DEFAULT_ROLE.value,
        }

    def submit(self) -> RegisterOutcome:
        """Validate, register and sign in.

        Returns:
            RegisterOutcome; on success redirect_to is the dashboard.
        """
        self.errors = {}
        self.success_message = ""
        self.is_submitting = True

        if not self.validate_form():
            self.is_submitting = False
            return RegisterOutcome(success=False, message=FORM_ERRORS_MESSAGE)

        payload = self._payload()
        try:
            response = self._http.post(REGISTER_PATH, json=payload)
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Registration request failed: %s", str(e))
            return self._fail(REGISTER_FAILED_MESSAGE)

        if not body.get("success"):
            self.errors.update(body.get("errors") or {})
            return self._fail(body.get("message") or REGISTER_FAILED_MESSAGE)

        self.success_message = body["message"]

        sign_in = self._auth_client.login(
            payload["email"],
            payload["password"],
            callback_url=DEFAULT_CALLBACK_URL,
        )
        if not sign_in.success:
            logger.warning("Automatic sign-in after registration failed")
            return RegisterOutcome(success=True, message=self.success_message)

        return RegisterOutcome(
            success=True,
            message=self.success_message,
            redirect_to=sign_in.redirect_to,
        )

    def _fail(self, message: str) -> RegisterOutcome:
        self.errors["general"] = message
        self.is_submitting = False
        return RegisterOutcome(success=False, message=message)

    def reset_form(self) -> None:
        self.form_data = dict(INITIAL_FORM_DATA)
        self.errors = {}
        self.success_message = ""
        self.is_submitting = False
