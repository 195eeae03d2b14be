"""
Core Exceptions
Standardized exceptions for the application.

Every exception carries the HTTP status it maps to, so routes stay thin and a
single exception handler turns them into responses.
"""

from typing import Any, List, Optional


class ContentFactoryError(Exception):
    """Base exception for all application errors."""
    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""


class AuthenticationError(ContentFactoryError):
    """Authentication required"""
    status_code = 401


class AuthorizationError(ContentFactoryError):
    """Forbidden"""
    status_code = 403


class NotFoundError(ContentFactoryError):
    """Resource not found"""
    status_code = 404


class InputValidationError(ContentFactoryError):
    """Invalid input"""
    status_code = 400


class PreconditionError(ContentFactoryError):
    """A required prior artifact or selection is missing."""
    status_code = 400


class GenerationError(ContentFactoryError):
    """The text generation backend failed."""
    status_code = 500


class ResponseValidationError(ContentFactoryError):
    """Invalid AI response format"""
    status_code = 500


class ResponseParseError(ResponseValidationError):
    """The model response is not valid JSON."""

    def __init__(self, message: str = "", raw_text: Optional[str] = None, truncated: bool = False):
        super().__init__(message)
        self.raw_text = raw_text
        self.truncated = truncated


class ResponseSchemaError(ResponseValidationError):
    """The model response does not match the expected stage schema."""

    def __init__(self, message: str = "", errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class InfrastructureError(ContentFactoryError):
    """Storage or runtime environment failure."""
    status_code = 500
