"""
Users module.

Handles the user directory, registration and login.

Public API:
- IUserRepository: User storage interface
- IUserService: Registration/login interface
- User, UserView: Stored identity and its safe view
- EmailAlreadyRegisteredError
"""

from .interfaces import IUserRepository, IUserService
from .models import (
    User,
    UserView,
    RegistrationRequest,
    RegistrationResponse,
    LoginRequest,
    LoginResponse,
)
from .exceptions import EmailAlreadyRegisteredError

__all__ = [
    # Interfaces
    "IUserRepository",
    "IUserService",
    # Models
    "User",
    "UserView",
    "RegistrationRequest",
    "RegistrationResponse",
    "LoginRequest",
    "LoginResponse",
    # Exceptions
    "EmailAlreadyRegisteredError",
]
