# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Field validators for the login and registration forms.

Every function here is pure and never raises: it returns a boolean, a
ValidationResult, or an error message (None when the field is valid) that
the caller attaches to the offending form field.

Two password policies coexist:
    - Login: required, at least 6 characters (validate_password_field).
    - Registration: at least 8 characters with an uppercase letter, a
      lowercase letter and a digit (validate_password_strength).
"""

import re
from datetime import date
from typing import Any, Mapping, NamedTuple

from educasem.utils.datetime import parse_date, utc_today, whole_years_between

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s+()-]{8,}$")
# Latin letters including the accented Latin-1 range, plus spaces.
NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÖØ-öø-ÿ\s]+$")

LOGIN_PASSWORD_MIN_LENGTH = 6
REGISTER_PASSWORD_MIN_LENGTH = 8
MINIMUM_AGE = 13
NAME_MIN_LENGTH = 2
MAX_INPUT_LENGTH = 255


class ValidationResult(NamedTuple):
    """Outcome of a validator that explains itself."""

    is_valid: bool
    message: str


def is_valid_email(email: str | None) -> bool:
    """Check an email against the ``local@domain.tld`` shape."""
    if not email or not email.strip():
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_email_field(email: str | None) -> str | None:
    """Validate the login email field.

    Returns:
        Error message, or None if the field is valid.
    """
    if not email or not email.strip():
        return "Please enter your email"
    if not is_valid_email(email):
        return "Invalid email format"
    return None


def validate_password_field(password: str | None) -> str | None:
    """Validate the login password field.

    Returns:
        Error message, or None if the field is valid.
    """
    if not password or not password.strip():
        return "Please enter your password"
    if len(password) < LOGIN_PASSWORD_MIN_LENGTH:
        return f"Password must be at least {LOGIN_PASSWORD_MIN_LENGTH} characters"
    return None


def validate_password_strength(password: str | None) -> ValidationResult:
    """Validate a registration password.

    Checks run in order and the first failure is reported.
    """
    password = password or ""
    if len(password) < REGISTER_PASSWORD_MIN_LENGTH:
        return ValidationResult(
            False,
            f"Password must be at least {REGISTER_PASSWORD_MIN_LENGTH} characters",
        )
    if not re.search(r"[A-Z]", password):
        return ValidationResult(False, "Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        return ValidationResult(False, "Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        return ValidationResult(False, "Password must contain at least one number")
    return ValidationResult(True, "Valid password")


def validate_phone(phone: str | None) -> bool:
    """At least 8 characters drawn from digits, spaces, ``+``, ``()`` and ``-``."""
    if not phone:
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def calculate_age(birth_date: date, today: date | None = None) -> int:
    """Age in whole years on the given day (defaults to today, UTC)."""
    return whole_years_between(birth_date, today or utc_today())


def validate_age(birth_date: "str | date | None", today: date | None = None) -> ValidationResult:
    """Reject users younger than 13.

    Args:
        birth_date: ``YYYY-MM-DD`` string or date.
        today: Reference day, defaults to today (UTC).
    """
    parsed = parse_date(birth_date)
    if parsed is None:
        return ValidationResult(False, "Invalid birth date")
    if calculate_age(parsed, today) < MINIMUM_AGE:
        return ValidationResult(False, f"You must be at least {MINIMUM_AGE} years old to register")
    return ValidationResult(True, "Valid age")


def validate_name(name: str | None) -> bool:
    """Letters and spaces only, at least 2 characters once trimmed."""
    if not name:
        return False
    return NAME_PATTERN.fullmatch(name) is not None and len(name.strip()) >= NAME_MIN_LENGTH


def sanitize_input(value: str) -> str:
    """Trim, drop angle brackets and cap free-text input at 255 characters."""
    return re.sub(r"[<>]", "", value.strip())[:MAX_INPUT_LENGTH]


def validate_login_form(email: str | None, password: str | None) -> dict[str, str]:
    """Validate both login fields.

    Returns:
        Mapping of field name to error message; empty when valid.
    """
    errors: dict[str, str] = {}

    email_error = validate_email_field(email)
    if email_error:
        errors["email"] = email_error

    password_error = validate_password_field(password)
    if password_error:
        errors["password"] = password_error

    return errors


def _text(data: Mapping[str, Any], field: str) -> str:
    value = data.get(field)
    return value if isinstance(value, str) else ""


def validate_register_form(data: Mapping[str, Any], today: date | None = None) -> dict[str, str]:
    """Validate every registration field.

    Args:
        data: Form values keyed by first_name, last_name, email, phone,
            password, confirm_password, birth_date and country.
        today: Reference day for the age check.

    Returns:
        Mapping of field name to error message; empty when valid.
    """
    errors: dict[str, str] = {}

    first_name = _text(data, "first_name")
    if not first_name.strip():
        errors["first_name"] = "First name is required"
    elif not validate_name(first_name):
        errors["first_name"] = "First name may only contain letters"

    last_name = _text(data, "last_name")
    if not last_name.strip():
        errors["last_name"] = "Last name is required"
    elif not validate_name(last_name):
        errors["last_name"] = "Last name may only contain letters"

    email = _text(data, "email")
    if not email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Invalid email"

    phone = _text(data, "phone")
    if not phone.strip():
        errors["phone"] = "Phone is required"
    elif not validate_phone(phone):
        errors["phone"] = "Phone must have at least 8 digits"

    password = _text(data, "password")
    if not password:
        errors["password"] = "Password is required"
    else:
        strength = validate_password_strength(password)
        if not strength.is_valid:
            errors["password"] = strength.message

    confirm_password = _text(data, "confirm_password")
    if not confirm_password:
        errors["confirm_password"] = "Please confirm your password"
    elif password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    birth_date = data.get("birth_date")
    if birth_date is None or birth_date == "":
        errors["birth_date"] = "Birth date is required"
    else:
        age = validate_age(birth_date, today)
        if not age.is_valid:
            errors["birth_date"] = age.message

    if not _text(data, "country"):
        errors["country"] = "Please select a country"

    return errors


def has_errors(errors: Mapping[str, Any]) -> bool:
    """True when a validation error mapping holds any error."""
    return any(errors.values())
