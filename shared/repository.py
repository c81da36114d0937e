"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of driver failures into
PersistenceError.
"""

import asyncio
import logging
from typing import Any, Callable, Generic, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import PersistenceError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase-backed repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute(): runs a blocking PostgREST query in a worker thread so the
      awaiting request can be cancelled, and wraps failures in
      PersistenceError
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            async def get_user_by_id(self, user_id: str) -> Optional[User]:
                result = await self._execute(
                    "get_user_by_id",
                    lambda: self._db.table("users").select("*").eq("id", user_id).execute(),
                )
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    async def _execute(self, operation: str, query: Callable[[], Any]) -> Any:
        """
        Run a PostgREST query off the event loop.

        Args:
            operation: Short name used in logs and error details.
            query: Zero-argument callable that builds and executes the query.

        Returns:
            The PostgREST response.

        Raises:
            PersistenceError: On any API or transport failure. The original
                SQLSTATE (if any) is kept in ``details["sqlstate"]``.
        """
        try:
            return await asyncio.to_thread(query)
        except APIError as e:
            logger.error(f"{operation} failed: {e.message} (code={e.code})")
            raise PersistenceError(
                f"{operation} failed",
                code="DATABASE_ERROR",
                details={"operation": operation, "sqlstate": e.code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{operation} failed: {e}")
            raise PersistenceError(
                f"{operation} failed",
                code="DATABASE_UNAVAILABLE",
                details={"operation": operation},
            ) from e
