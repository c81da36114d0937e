"""
Users module interfaces.

IUserRepository is the User Directory: exact-match lookups and inserts over
the users table. IUserService is the registration/login flow built on it.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    User,
    RegistrationRequest,
    RegistrationResponse,
    LoginRequest,
    LoginResponse,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Interface for user storage.

    Lookups return None when no row matches. Any other failure raises
    PersistenceError, so callers can tell "absent" from "unknown".
    """

    async def create_user(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
            PersistenceError: On any other storage failure
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by exact email match, or None."""
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None."""
        ...


@runtime_checkable
class IUserService(Protocol):
    """Interface for account registration and login."""

    async def register(self, request: RegistrationRequest) -> RegistrationResponse:
        """
        Create an account.

        Raises:
            EmailAlreadyRegisteredError: If the email is already registered
            PersistenceError: If the existence check or insert fails
            HashingError: If the password cannot be hashed
        """
        ...

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Verify credentials and issue a session token.

        Raises:
            InvalidCredentialsError: For any credential failure
        """
        ...
