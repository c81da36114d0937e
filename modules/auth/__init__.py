"""
Authentication module.

Handles password hashing and session token issuance/validation. The
request-boundary gate that uses these lives in api.middleware.auth.

Public API:
- ICredentialHasher / BcryptHasher: password hashing
- ITokenService / TokenService: session tokens
- SessionClaims: validated token claims
- Auth exceptions: InvalidSignatureError, ExpiredTokenError, etc.
"""

from .interfaces import ICredentialHasher, ITokenService
from .models import SessionClaims
from .hashing import BcryptHasher
from .service import TokenService
from .exceptions import (
    TokenValidationError,
    InvalidSignatureError,
    ExpiredTokenError,
    NotYetValidTokenError,
    MalformedTokenError,
    MissingTokenError,
    MalformedHeaderError,
    InvalidCredentialsError,
    HashingError,
)

__all__ = [
    # Interfaces
    "ICredentialHasher",
    "ITokenService",
    # Implementations
    "BcryptHasher",
    "TokenService",
    # Models
    "SessionClaims",
    # Exceptions
    "TokenValidationError",
    "InvalidSignatureError",
    "ExpiredTokenError",
    "NotYetValidTokenError",
    "MalformedTokenError",
    "MissingTokenError",
    "MalformedHeaderError",
    "InvalidCredentialsError",
    "HashingError",
]
