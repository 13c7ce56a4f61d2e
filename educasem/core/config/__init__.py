# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for Educasem.

Settings are Pydantic-based and loaded from environment variables
(and an optional .env file).

Example:
    >>> from educasem.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.session_cookie_name
    'educasem.session-token'
"""

from educasem.core.config.settings import (
    APISettings,
    AuthSettings,
    CORSSettings,
    JWTSettings,
    PasswordSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "JWTSettings",
    "PasswordSettings",
    "AuthSettings",
    "CORSSettings",
    "APISettings",
]
