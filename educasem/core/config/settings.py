# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for Educasem.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from educasem.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-this-in-production"

SESSION_COOKIE_NAME = "educasem.session-token"
SECURE_SESSION_COOKIE_NAME = "__Secure-educasem.session-token"


class JWTSettings(BaseSettings):
    """Session token signing configuration.

    Attributes:
        secret_key: Secret key for signing session tokens.
        algorithm: JWT signing algorithm.
        session_max_age_days: Lifetime of a session token.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
        populate_by_name=True,
    )

    secret_key: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    algorithm: str = "HS256"
    session_max_age_days: int = Field(
        default=7,
        validation_alias="SESSION_MAX_AGE_DAYS",
    )

    @property
    def session_max_age_seconds(self) -> int:
        """Session lifetime in seconds, used for the cookie Max-Age."""
        return self.session_max_age_days * 24 * 60 * 60


class PasswordSettings(BaseSettings):
    """Password hashing configuration.

    Attributes:
        bcrypt_rounds: bcrypt cost factor (log2 of the iteration count).
    """

    model_config = SettingsConfigDict(
        env_prefix="PASSWORD_",
        extra="ignore",
    )

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class AuthSettings(BaseSettings):
    """Sign-in provider and session cookie configuration.

    Attributes:
        base_url: Public origin of the application. Post sign-in redirects
            are only honored when they stay on this origin.
        google_client_id: OAuth client id of the Google provider.
        google_client_secret: OAuth client secret of the Google provider.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str = "http://localhost:3000"
    google_client_id: str | None = Field(
        default=None,
        validation_alias="GOOGLE_CLIENT_ID",
    )
    google_client_secret: SecretStr | None = Field(
        default=None,
        validation_alias="GOOGLE_CLIENT_SECRET",
    )

    @property
    def google_enabled(self) -> bool:
        """Whether the Google provider has been configured."""
        return bool(self.google_client_id)


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        workers: Number of worker processes.
        reload: Whether to enable auto-reload.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        jwt: Session token settings.
        password: Password hashing settings.
        auth: Provider, redirect and cookie settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    password: PasswordSettings = Field(default_factory=PasswordSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.jwt.secret_key.get_secret_value() == DEFAULT_JWT_SECRET:
                raise ValueError(
                    "JWT secret key must be changed from default in production. "
                    "Set JWT_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def session_cookie_name(self) -> str:
        """Name of the session cookie; production uses the __Secure- prefix."""
        if self.is_production:
            return SECURE_SESSION_COOKIE_NAME
        return SESSION_COOKIE_NAME

    @property
    def session_cookie_secure(self) -> bool:
        """Whether the session cookie is restricted to HTTPS."""
        return self.is_production


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
