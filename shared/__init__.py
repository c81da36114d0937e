"""
Shared infrastructure for Clipvault backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging: Root logger setup
- repository: Base class for Supabase-backed repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ClipvaultError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    StorageError,
    PersistenceError,
)
from .logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "ClipvaultError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "ExternalServiceError",
    "StorageError",
    "PersistenceError",
    "configure_logging",
]
