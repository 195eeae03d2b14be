"""
Authentication routes for password-based login.
"""

from pydantic import BaseModel
from fastapi import APIRouter, Request, Response

from ..core import (
    SESSION_COOKIE_NAME,
    AuthenticationError,
    InputValidationError,
    get_session_max_age_seconds,
    is_auth_enabled,
    is_cookie_secure,
    is_valid_username,
    get_cookie_domain,
    get_cookie_path,
    get_cookie_samesite,
    issue_auth_token,
    resolve_request_user,
    verify_auth_password,
    get_logger,
)
from ..core.auth import get_default_user
from ..models import LoginRequest

router = APIRouter(tags=["auth"])
logger = get_logger(__name__, component="auth")


class AuthStatusResponse(BaseModel):
    authenticated: bool
    auth_enabled: bool
    user: str | None = None
    token: str | None = None


@router.post("/auth/login", response_model=AuthStatusResponse)
async def login(payload: LoginRequest, response: Response):
    """
    Authenticate an account by username and password and set an HTTP-only
    session cookie bound to that username.
    """
    if not is_auth_enabled():
        return AuthStatusResponse(authenticated=True, auth_enabled=False, user=get_default_user())

    if not is_valid_username(payload.username):
        raise InputValidationError("Invalid username")

    if not verify_auth_password(payload.username, payload.password):
        logger.warning("Rejected login", extra={"username": payload.username})
        raise AuthenticationError("Invalid username or password")

    token = issue_auth_token(payload.username)
    samesite = get_cookie_samesite()
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=is_cookie_secure() or samesite == "none",
        samesite=samesite,
        domain=get_cookie_domain(),
        path=get_cookie_path(),
        max_age=get_session_max_age_seconds(),
    )
    logger.info("Login succeeded", extra={"username": payload.username})
    return AuthStatusResponse(authenticated=True, auth_enabled=True, user=payload.username, token=token)


@router.post("/auth/logout", response_model=AuthStatusResponse)
async def logout(response: Response):
    """
    Clear auth session cookie.
    """
    response.delete_cookie(
        SESSION_COOKIE_NAME,
        domain=get_cookie_domain(),
        path=get_cookie_path(),
    )
    return AuthStatusResponse(authenticated=False, auth_enabled=is_auth_enabled())


@router.get("/auth/session", response_model=AuthStatusResponse)
async def session_status(request: Request):
    """
    Check whether current request is authenticated, and as whom.
    """
    user = resolve_request_user(request)
    return AuthStatusResponse(
        authenticated=user is not None,
        auth_enabled=is_auth_enabled(),
        user=user,
    )
