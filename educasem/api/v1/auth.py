# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication endpoints.

This module provides the sign-in, registration and session endpoints:
- POST /login - Check credentials and return a session token
- POST /register - Create a student account
- POST /callback/credentials - Sign in with email/password, set the cookie
- POST /callback/google - Sign in with a Google ID token, set the cookie
- GET /session - Current session, or an empty object
- POST /signout - Clear the session cookie
- GET /providers - Enabled sign-in providers
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from educasem.api.dependencies import (
    get_app_settings,
    get_auth_service,
    get_google_provider,
    get_register_service,
    get_session_manager,
)
from educasem.api.middleware.route_guard import LOGIN_PATH, get_current_user
from educasem.core.config import Settings
from educasem.domains.auth.oauth import GoogleIdentityProvider, OAuthVerificationError
from educasem.domains.auth.register import RegisterService, RegistrationPayload
from educasem.domains.auth.roles import DEFAULT_ROLE
from educasem.domains.auth.service import AuthErrorCode, AuthService, LoginCredentials
from educasem.domains.auth.session import (
    CredentialsSignInError,
    SessionManager,
    SignInUser,
)
from educasem.domains.auth.validation import has_errors, validate_register_form

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_LOGIN_ERROR = "Invalid email or password"
MISSING_CREDENTIALS_ERROR = "Email and password are required"
INTERNAL_ERROR = "Internal server error"
FORM_ERRORS_MESSAGE = "Please correct the errors in the form"


class CamelModel(BaseModel):
    """Request body accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    """Credential login request. Missing or empty fields are rejected with 400."""

    email: str | None = Field(None, description="User email address")
    password: str | None = Field(None, description="Password")


class RegisterRequest(CamelModel):
    """Account registration request."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirm_password: str | None = Field(
        None,
        description="Repeated password; checked only when sent",
    )
    birth_date: str = ""
    country: str = ""


class CredentialsCallbackRequest(CamelModel):
    """Credential sign-in request from the login form."""

    email: str | None = None
    password: str | None = None
    callback_url: str | None = None


class GoogleCallbackRequest(CamelModel):
    """Google sign-in request carrying the ID token from the browser."""

    credential: str = ""
    callback_url: str | None = None


async def _read_login_request(request: Request) -> LoginRequest | None:
    """Parse the login body, or None when it is absent, not JSON or mistyped."""
    try:
        return LoginRequest.model_validate(await request.json())
    except ValueError:
        # JSONDecodeError and pydantic's ValidationError are both ValueErrors
        return None


def _login_error_message(settings: Settings, message: str | None) -> str:
    """Collapse specific failure reasons in production."""
    if settings.is_production:
        return GENERIC_LOGIN_ERROR
    return message or GENERIC_LOGIN_ERROR


def _signed_in_response(
    session_manager: SessionManager,
    user: SignInUser,
    callback_url: str | None,
) -> JSONResponse:
    token = session_manager.issue_session(user)
    response = JSONResponse(
        {"ok": True, "url": session_manager.resolve_redirect(callback_url, user.role)}
    )
    session_manager.set_session_cookie(response, token)
    return response


@router.post(
    "/login",
    summary="Credential login",
    description="Authenticate with email and password and get a session token.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": LoginRequest.model_json_schema()}},
        }
    },
)
async def login(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Authenticate a user.

    Args:
        request: Incoming request carrying the JSON credentials.
        settings: Application settings.
        auth_service: Credential authentication service.

    Returns:
        200 with the token and user, 400 for missing fields, 401 for
        rejected credentials, 500 for unexpected errors.
    """
    data = await _read_login_request(request)
    if data is None or not data.email or not data.password:
        return JSONResponse(
            {"success": False, "error": MISSING_CREDENTIALS_ERROR},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        result = auth_service.login(LoginCredentials(email=data.email, password=data.password))
    except Exception:
        logger.exception("Login endpoint error")
        result = None

    if result is None or result.error_code == AuthErrorCode.SERVER_ERROR:
        return JSONResponse(
            {"success": False, "error": INTERNAL_ERROR},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if not result.success:
        body: dict[str, Any] = {
            "success": False,
            "error": _login_error_message(settings, result.error),
        }
        if not settings.is_production and result.error_code:
            body["errorCode"] = result.error_code.value
        return JSONResponse(body, status_code=status.HTTP_401_UNAUTHORIZED)

    return JSONResponse(
        {
            "success": True,
            "token": result.token,
            "user": result.user.model_dump(mode="json"),
        }
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a student account.",
)
async def register(
    data: RegisterRequest,
    register_service: RegisterService = Depends(get_register_service),
) -> JSONResponse:
    """Register a new user.

    Args:
        data: Registration form values.
        register_service: Registration service.

    Returns:
        201 with the new user id, 400 with field errors, 409 when the email
        is taken, 500 for unexpected errors.
    """
    form = data.model_dump()
    if form["confirm_password"] is None:
        form["confirm_password"] = data.password

    errors = validate_register_form(form)
    if has_errors(errors):
        return JSONResponse(
            {"success": False, "message": FORM_ERRORS_MESSAGE, "errors": errors},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    result = register_service.register(
        RegistrationPayload(
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            email=data.email.strip().lower(),
            phone=data.phone.strip(),
            password=data.password,
            birth_date=data.birth_date,
            country=data.country,
            role=DEFAULT_ROLE.value,
        )
    )

    if result.success:
        return JSONResponse(
            {"success": True, "message": result.message, "userId": result.user_id},
            status_code=status.HTTP_201_CREATED,
        )

    status_code = (
        status.HTTP_409_CONFLICT
        if result.error == AuthErrorCode.EMAIL_EXISTS
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(
        {
            "success": False,
            "message": result.message,
            "error": result.error.value if result.error else None,
        },
        status_code=status_code,
    )


@router.post(
    "/callback/credentials",
    summary="Credential sign-in",
    description="Sign in with email and password and set the session cookie.",
)
async def credentials_callback(
    data: CredentialsCallbackRequest,
    settings: Settings = Depends(get_app_settings),
    session_manager: SessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Sign in with credentials.

    Returns:
        ``{ok, url}`` with the session cookie, or 401 ``{ok: false, error}``.
    """
    try:
        user = session_manager.authorize_credentials(data.email, data.password)
    except CredentialsSignInError as e:
        return JSONResponse(
            {"ok": False, "error": _login_error_message(settings, str(e))},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return _signed_in_response(session_manager, user, data.callback_url)


@router.post(
    "/callback/google",
    summary="Google sign-in",
    description="Sign in with a Google ID token and set the session cookie.",
)
async def google_callback(
    data: GoogleCallbackRequest,
    session_manager: SessionManager = Depends(get_session_manager),
    google_provider: GoogleIdentityProvider | None = Depends(get_google_provider),
) -> JSONResponse:
    """Sign in with Google.

    Returns:
        ``{ok, url}`` with the session cookie, 401 for a rejected token,
        503 when Google sign-in is not configured.
    """
    if google_provider is None:
        return JSONResponse(
            {"ok": False, "error": "Google sign-in is not configured"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    try:
        profile = google_provider.verify(data.credential)
    except OAuthVerificationError:
        return JSONResponse(
            {"ok": False, "error": "Invalid Google credential"},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    user = session_manager.sign_in_oauth(profile)
    return _signed_in_response(session_manager, user, data.callback_url)


@router.get(
    "/session",
    summary="Current session",
    description="Return the current session, or an empty object when signed out.",
)
async def get_session(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
) -> dict[str, Any]:
    payload = get_current_user(request)
    if payload is None:
        return {}
    return session_manager.build_session(payload).model_dump(mode="json")


@router.post(
    "/signout",
    summary="Sign out",
    description="Clear the session cookie.",
)
async def signout(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
) -> JSONResponse:
    """Sign out the current user.

    The token itself stays valid until it expires; only the cookie goes.
    """
    payload = get_current_user(request)
    logger.info("User signed out: %s", payload.sub if payload else "unknown")

    response = JSONResponse({"url": LOGIN_PATH})
    session_manager.destroy_session(response)
    return response


@router.get(
    "/providers",
    summary="Sign-in providers",
    description="List the enabled sign-in providers.",
)
async def providers(
    google_provider: GoogleIdentityProvider | None = Depends(get_google_provider),
) -> dict[str, Any]:
    enabled = {
        "credentials": {
            "id": "credentials",
            "name": "Credentials",
            "type": "credentials",
            "callbackUrl": "/api/auth/callback/credentials",
        }
    }
    if google_provider is not None:
        enabled["google"] = {
            "id": "google",
            "name": "Google",
            "type": "oauth",
            "callbackUrl": "/api/auth/callback/google",
        }
    return enabled
