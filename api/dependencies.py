"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from Settings.

Everything built here is read-only after construction and shared by all
requests.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ICredentialHasher, ITokenService
    from modules.users.interfaces import IUserRepository, IUserService
    from modules.uploads.interfaces import IObjectStore, IUploadRepository, IUploadService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._hasher: "ICredentialHasher | None" = None
        self._token_service: "ITokenService | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._user_service: "IUserService | None" = None
        self._object_store: "IObjectStore | None" = None
        self._upload_repository: "IUploadRepository | None" = None
        self._upload_service: "IUploadService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def hasher(self) -> "ICredentialHasher":
        """Get the credential hasher."""
        if self._hasher is None:
            from modules.auth.hashing import BcryptHasher
            self._hasher = BcryptHasher(rounds=self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service."""
        if self._token_service is None:
            from modules.auth.service import TokenService
            if not self.settings.jwt_secret_key:
                raise RuntimeError(
                    "Token signing is not configured. Set JWT_SECRET_KEY."
                )
            self._token_service = TokenService(
                secret=self.settings.jwt_secret_key,
                lifetime=timedelta(hours=self.settings.jwt_expiration_hours),
                issuer=self.settings.jwt_issuer,
                algorithm=self.settings.jwt_algorithm,
            )
        return self._token_service

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            if self.settings.use_in_memory_backends:
                from modules.users.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
            else:
                from modules.users.repository import UserRepository
                from shared.database import get_supabase_client
                self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                hasher=self.hasher,
                tokens=self.tokens,
            )
        return self._user_service

    @property
    def object_store(self) -> "IObjectStore":
        """Get the object store client."""
        if self._object_store is None:
            if self.settings.use_in_memory_backends:
                from modules.uploads.storage import InMemoryObjectStore
                self._object_store = InMemoryObjectStore(self.settings.s3_bucket_name)
            else:
                from modules.uploads.storage import S3ObjectStore
                self._object_store = S3ObjectStore.from_settings(self.settings)
        return self._object_store

    @property
    def upload_repository(self) -> "IUploadRepository":
        """Get the upload metadata repository instance."""
        if self._upload_repository is None:
            if self.settings.use_in_memory_backends:
                from modules.uploads.repository import InMemoryUploadRepository
                self._upload_repository = InMemoryUploadRepository()
            else:
                from modules.uploads.repository import UploadRepository
                from shared.database import get_supabase_client
                self._upload_repository = UploadRepository(get_supabase_client())
        return self._upload_repository

    @property
    def uploads(self) -> "IUploadService":
        """Get the upload service instance."""
        if self._upload_service is None:
            from modules.uploads.service import UploadService
            self._upload_service = UploadService(
                store=self.object_store,
                repository=self.upload_repository,
                storage_timeout=self.settings.storage_timeout_seconds,
                delete_orphans=self.settings.delete_orphaned_objects,
            )
        return self._upload_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._settings = None
        self._hasher = None
        self._token_service = None
        self._user_repository = None
        self._user_service = None
        self._object_store = None
        self._upload_repository = None
        self._upload_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() will create a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "ITokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_user_service() -> "IUserService":
    """FastAPI dependency for the user service."""
    return get_container().users


def get_upload_service() -> "IUploadService":
    """FastAPI dependency for the upload service."""
    return get_container().uploads
