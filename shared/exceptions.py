"""
Base exception classes for the Clipvault backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API layer
maps each category to one HTTP status and a client-safe body.
"""

from typing import Optional, Any


class ClipvaultError(Exception):
    """
    Base exception for all Clipvault errors.

    All custom exceptions should inherit from this class.

    ``message``/``code`` describe the failure for logs. ``client_message``
    and ``client_code`` are what the API is allowed to show to callers; they
    default to the former and are overridden wherever internal detail must
    not leak.
    """

    client_message: Optional[str] = None
    client_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logs and internal APIs."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_client_dict(self) -> dict[str, str]:
        """Client-safe representation used in HTTP responses."""
        return {
            "error": self.client_code or self.code,
            "message": self.client_message or self.message,
        }


class NotFoundError(ClipvaultError):
    """Resource not found."""

    pass


class ValidationError(ClipvaultError):
    """Input validation failed."""

    pass


class AuthenticationError(ClipvaultError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ConflictError(ClipvaultError):
    """Resource already exists."""

    pass


class ExternalServiceError(ClipvaultError):
    """Error communicating with an external service."""

    client_message = "Internal server error"
    client_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StorageError(ExternalServiceError):
    """The object store rejected or failed a request."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="object_store", code=code, details=details)


class PersistenceError(ExternalServiceError):
    """The relational store rejected or failed a request."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="database", code=code, details=details)
