"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy mapped to HTTP statuses
    - auth.py: Password login and signed per-user session tokens
    - runtime.py: Environment parsing and directory guards

Usage:
    from content_factory.core import get_logger, NotFoundError
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_project_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    ContentFactoryError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    InputValidationError,
    PreconditionError,
    GenerationError,
    ResponseValidationError,
    ResponseParseError,
    ResponseSchemaError,
    InfrastructureError,
)

# Runtime guards
from .runtime import (
    parse_bool_env,
    assert_directory_writable,
    check_data_directory,
)

# Authentication
from .auth import (
    SESSION_COOKIE_NAME,
    is_auth_enabled,
    is_public_path,
    is_request_authenticated,
    resolve_request_user,
    get_current_user,
    issue_auth_token,
    verify_auth_password,
    verify_auth_token,
    is_valid_username,
    get_session_max_age_seconds,
    is_cookie_secure,
    get_cookie_samesite,
    get_cookie_domain,
    get_cookie_path,
    list_public_paths,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_project_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "ContentFactoryError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "InputValidationError",
    "PreconditionError",
    "GenerationError",
    "ResponseValidationError",
    "ResponseParseError",
    "ResponseSchemaError",
    "InfrastructureError",
    # Runtime guards
    "parse_bool_env",
    "assert_directory_writable",
    "check_data_directory",
    # Authentication
    "SESSION_COOKIE_NAME",
    "is_auth_enabled",
    "is_public_path",
    "is_request_authenticated",
    "resolve_request_user",
    "get_current_user",
    "issue_auth_token",
    "verify_auth_password",
    "verify_auth_token",
    "is_valid_username",
    "get_session_max_age_seconds",
    "is_cookie_secure",
    "get_cookie_samesite",
    "get_cookie_domain",
    "get_cookie_path",
    "list_public_paths",
]
