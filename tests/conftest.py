"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.dependencies import ServiceContainer, reset_container
from shared.config import Settings, get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_ISSUER = "clipvault"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    not_yet_valid: bool = False,
    issuer: str = TEST_ISSUER,
    secret: str = TEST_JWT_SECRET,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        not_yet_valid: If True, the not-before time is an hour ahead
        issuer: Issuer claim
        secret: Signing secret
        algorithm: Signing algorithm
        now: Reference time, defaults to the current time

    Returns:
        JWT token string
    """
    now = now or datetime.now(timezone.utc)
    if expired:
        iat = now - timedelta(hours=2)
        exp = now - timedelta(hours=1)
    else:
        iat = now
        exp = now + timedelta(hours=1)
    nbf = iat
    if not_yet_valid:
        nbf = now + timedelta(hours=1)
        exp = now + timedelta(hours=2)

    payload = {
        "sub": user_id,
        "email": email,
        "iss": issuer,
        "iat": int(iat.timestamp()),
        "nbf": int(nbf.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def make_test_settings(**overrides) -> Settings:
    """Settings for tests: in-memory backends, fast bcrypt, fixed secret."""
    values = {
        "jwt_secret_key": TEST_JWT_SECRET,
        "jwt_issuer": TEST_ISSUER,
        "bcrypt_rounds": 4,
        "use_in_memory_backends": True,
        "s3_endpoint": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and cached clients around each test."""
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()
    yield
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings wired for in-memory backends."""
    return make_test_settings()


@pytest.fixture
def container(test_settings: Settings) -> ServiceContainer:
    """Provide a service container built from test settings."""
    return ServiceContainer(test_settings)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
