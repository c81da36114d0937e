"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the users table.
An in-memory implementation with the same contract backs tests and local
development.
"""

import logging
from typing import Optional, Any

from shared.exceptions import PersistenceError
from shared.repository import BaseRepository, UNIQUE_VIOLATION
from .exceptions import EmailAlreadyRegisteredError
from .models import User

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserRepository(BaseRepository[User]):
    """
    Supabase-backed user repository.

    Email uniqueness is enforced by a unique index on users.email; a
    duplicate insert that slips past the service's existence check still
    surfaces as EmailAlreadyRegisteredError.
    """

    async def create_user(self, user: User) -> User:
        data = {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "password_hash": user.password_hash,
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
        }
        try:
            await self._execute(
                "create_user",
                lambda: self._db.table(USERS_TABLE).insert(data).execute(),
            )
        except PersistenceError as e:
            if e.details.get("sqlstate") == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(user.email) from e
            raise

        logger.info(f"User created: {user.id}")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self._execute(
            "get_user_by_email",
            lambda: self._db.table(USERS_TABLE).select("*").eq("email", email).execute(),
        )
        if not result.data:
            logger.debug("User not found by email")
            return None
        return self._map_to_user(result.data[0])

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        result = await self._execute(
            "get_user_by_id",
            lambda: self._db.table(USERS_TABLE).select("*").eq("id", user_id).execute(),
        )
        if not result.data:
            logger.debug(f"User not found by id: {user_id}")
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class InMemoryUserRepository:
    """
    User repository with in-memory storage.

    For testing and development. Use UserRepository for production.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def create_user(self, user: User) -> User:
        if any(u.email == user.email for u in self._users.values()):
            raise EmailAlreadyRegisteredError(user.email)
        self._users[user.id] = user
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def __len__(self) -> int:
        return len(self._users)
