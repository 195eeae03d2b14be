"""
Password-based authentication helpers.

This module provides:
- Per-account password verification (AUTH_USERS, or AUTH_PASSWORD for one user)
- Stateless signed session tokens bound to a username and their issue time
- Public path matching for auth exemptions
- Request caller resolution (bearer token or cookie)

The authenticated username is the owner id of every project the caller
creates; ownership checks downstream compare against it.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import time
from typing import Iterable

from fastapi import Request

from .exceptions import AuthenticationError
from .runtime import parse_bool_env

SESSION_COOKIE_NAME = "content_factory_session"
AUTH_BEARER_PREFIX = "Bearer "
TOKEN_SEPARATOR = "."
TOKEN_CLOCK_SKEW_SECONDS = 60

PUBLIC_PATHS_EXACT = {
    "/",
    "/health",
    "/auth/login",
    "/auth/logout",
    "/auth/session",
    "/openapi.json",
    "/docs",
    "/redoc",
}

PUBLIC_PATH_PREFIXES = (
    "/docs/",
    "/redoc/",
)


def _auth_password() -> str:
    return os.getenv("AUTH_PASSWORD", "").strip()


def _auth_secret() -> str:
    return os.getenv("AUTH_SECRET", "content-factory-auth-secret").strip()


def get_default_user() -> str:
    return os.getenv("AUTH_DEFAULT_USER", "local-user").strip() or "local-user"


def is_valid_username(username: str) -> bool:
    return bool(username) and TOKEN_SEPARATOR not in username and len(username) <= 128


def get_accounts() -> dict[str, str]:
    """Username -> password map of the accounts allowed to log in.

    AUTH_USERS holds comma-separated "username:password" pairs. Without it,
    AUTH_PASSWORD is the password of the single AUTH_DEFAULT_USER account.
    """
    accounts: dict[str, str] = {}
    for entry in os.getenv("AUTH_USERS", "").split(","):
        username, sep, password = entry.partition(":")
        username, password = username.strip(), password.strip()
        if sep and password and is_valid_username(username):
            accounts[username] = password
    if not accounts and _auth_password():
        accounts[get_default_user()] = _auth_password()
    return accounts


def is_auth_enabled() -> bool:
    return parse_bool_env(os.getenv("AUTH_ENABLED"), default=True) and bool(get_accounts())


def _custom_public_paths() -> set[str]:
    raw = os.getenv("AUTH_OPEN_PATHS", "").strip()
    if not raw:
        return set()
    return {path.strip() for path in raw.split(",") if path.strip()}


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS_EXACT or path in _custom_public_paths():
        return True
    return any(path.startswith(prefix) for prefix in PUBLIC_PATH_PREFIXES)


def _sign(username: str, issued_at: str, password: str) -> str:
    # Keyed by the account password so a password change revokes its sessions
    key = f"{password}:{_auth_secret()}".encode("utf-8")
    message = f"{username}{TOKEN_SEPARATOR}{issued_at}".encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).hexdigest()


def issue_auth_token(username: str, issued_at: int | None = None) -> str:
    """Sign a "<user>.<issued_at>.<signature>" session token for a known account."""
    if not is_valid_username(username):
        raise ValueError("username must be non-empty, at most 128 chars, without '.'")
    password = get_accounts().get(username)
    if password is None:
        raise ValueError(f"unknown account '{username}'")
    stamp = str(int(time.time()) if issued_at is None else issued_at)
    return TOKEN_SEPARATOR.join((username, stamp, _sign(username, stamp, password)))


def verify_auth_password(username: str, password: str) -> bool:
    configured = get_accounts().get(username)
    if not configured:
        return False
    return hmac.compare_digest(password.encode("utf-8"), configured.encode("utf-8"))


def verify_auth_token(token: str, now: float | None = None) -> str | None:
    """Return the username a token was issued for, or None if it is not valid.

    Tokens older than the session max age, or for accounts that no longer
    exist, are rejected.
    """
    parts = token.split(TOKEN_SEPARATOR)
    if len(parts) != 3:
        return None
    username, stamp, signature = parts
    password = get_accounts().get(username)
    if password is None or not (stamp.isascii() and stamp.isdigit()):
        return None
    expected = _sign(username, stamp, password)
    if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        return None
    age = (time.time() if now is None else now) - int(stamp)
    if age < -TOKEN_CLOCK_SKEW_SECONDS or age > get_session_max_age_seconds():
        return None
    return username


def _extract_bearer_token(authorization_header: str | None) -> str | None:
    if not authorization_header or not authorization_header.startswith(AUTH_BEARER_PREFIX):
        return None
    return authorization_header[len(AUTH_BEARER_PREFIX):].strip() or None


def extract_request_token(request: Request) -> str | None:
    return (
        _extract_bearer_token(request.headers.get("Authorization"))
        or request.cookies.get(SESSION_COOKIE_NAME)
        or None
    )


def resolve_request_user(request: Request) -> str | None:
    """Return the caller's username, or None when the request is unauthenticated."""
    if not is_auth_enabled():
        return get_default_user()
    token = extract_request_token(request)
    if not token:
        return None
    return verify_auth_token(token)


def is_request_authenticated(request: Request) -> bool:
    return resolve_request_user(request) is not None


def get_current_user(request: Request) -> str:
    """FastAPI dependency returning the authenticated caller id."""
    user = resolve_request_user(request)
    if user is None:
        raise AuthenticationError("Unauthorized")
    return user


def get_session_max_age_seconds() -> int:
    raw = os.getenv("AUTH_SESSION_MAX_AGE_SECONDS", "604800").strip()  # 7 days
    try:
        max_age = int(raw)
    except ValueError:
        return 604800
    return max(60, max_age)


def is_cookie_secure() -> bool:
    return parse_bool_env(os.getenv("AUTH_COOKIE_SECURE"), default=False)


def get_cookie_samesite() -> str:
    raw = os.getenv("AUTH_COOKIE_SAMESITE", "lax").strip().lower()
    if raw not in {"lax", "strict", "none"}:
        return "lax"
    return raw


def get_cookie_domain() -> str | None:
    raw = os.getenv("AUTH_COOKIE_DOMAIN", "").strip()
    return raw or None


def get_cookie_path() -> str:
    raw = os.getenv("AUTH_COOKIE_PATH", "/").strip()
    return raw or "/"


def list_public_paths() -> dict[str, Iterable[str]]:
    return {
        "exact": sorted(PUBLIC_PATHS_EXACT.union(_custom_public_paths())),
        "prefixes": list(PUBLIC_PATH_PREFIXES),
    }
