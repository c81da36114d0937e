"""
Authentication module exceptions.

These exceptions are raised by the auth module and the Session Guard and are
caught by API error handlers to return appropriate HTTP responses.

Every token failure shares one client-facing code and message; the specific
cause (signature, expiry, not-before, malformed) is only visible in logs.
"""

from shared.exceptions import AuthenticationError, ClipvaultError


class TokenValidationError(AuthenticationError):
    """Base class for a bearer token that failed validation."""

    client_code = "INVALID_TOKEN"
    client_message = "Invalid or expired token"


class InvalidSignatureError(TokenValidationError):
    """Raised when the token signature or signing algorithm does not match."""

    def __init__(self, message: str = "Token signature is invalid"):
        super().__init__(message, code="INVALID_SIGNATURE")


class ExpiredTokenError(TokenValidationError):
    """Raised when a token is used at or after its expiry time."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class NotYetValidTokenError(TokenValidationError):
    """Raised when a token is used before its not-before time."""

    def __init__(self, message: str = "Authentication token is not yet valid"):
        super().__init__(message, code="TOKEN_NOT_YET_VALID")


class MalformedTokenError(TokenValidationError):
    """Raised when a token cannot be parsed or lacks required claims."""

    def __init__(self, message: str = "Authentication token is malformed"):
        super().__init__(message, code="MALFORMED_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no Authorization header is provided."""

    def __init__(self, message: str = "Authorization header required"):
        super().__init__(message, code="MISSING_HEADER")


class MalformedHeaderError(AuthenticationError):
    """Raised when the Authorization header is not a Bearer credential."""

    def __init__(
        self,
        message: str = "Invalid authorization header format. Use Bearer token.",
    ):
        super().__init__(message, code="MALFORMED_HEADER")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised on any login failure.

    Unknown email and wrong password both raise this with the same client
    body so that callers cannot probe which accounts exist.
    """

    client_code = "INVALID_CREDENTIALS"
    client_message = "Invalid email or password"

    def __init__(self, reason: str = "invalid credentials"):
        super().__init__(f"Login rejected: {reason}", code="INVALID_CREDENTIALS")


class HashingError(ClipvaultError):
    """Raised when a password hash cannot be computed."""

    client_code = "INTERNAL_ERROR"
    client_message = "Internal server error"

    def __init__(self, message: str = "Failed to hash password"):
        super().__init__(message, code="HASHING_FAILED")
