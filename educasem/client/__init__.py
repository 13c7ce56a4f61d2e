# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client bindings for the Educasem API.

These mirror what the browser forms do (sign in, register, remember the
email) on top of an httpx.Client, so scripts and tests can drive the API
the same way a user would.

Exports:
    AuthClient: Sign-in, sign-out and session access.
    RegisterFlow: Registration form state and submission.
    RememberMe: Remembered login email.
"""

from educasem.client.auth import AuthClient, LoginOutcome
from educasem.client.register import RegisterFlow, RegisterOutcome
from educasem.client.remember_me import RememberMe

__all__ = [
    "AuthClient",
    "LoginOutcome",
    "RegisterFlow",
    "RegisterOutcome",
    "RememberMe",
]
