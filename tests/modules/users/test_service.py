"""Tests for the user service."""

import threading

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from modules.auth.exceptions import InvalidCredentialsError
from modules.auth.hashing import BcryptHasher
from modules.auth.service import TokenService
from modules.users.exceptions import EmailAlreadyRegisteredError
from modules.users.models import RegistrationRequest, LoginRequest
from modules.users.repository import InMemoryUserRepository
from modules.users.service import UserService
from shared.exceptions import PersistenceError

from tests.conftest import TEST_JWT_SECRET


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> MagicMock:
    """Real bcrypt at minimum cost, wrapped so calls can be counted."""
    return MagicMock(wraps=BcryptHasher(rounds=4))


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_JWT_SECRET, timedelta(hours=24))


@pytest.fixture
def service(repository, hasher, tokens) -> UserService:
    return UserService(repository=repository, hasher=hasher, tokens=tokens)


def registration(email: str = "alice@example.com", password: str = "password123") -> RegistrationRequest:
    return RegistrationRequest(username="alice", email=email, password=password)


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_user(self, service, repository):
        """Should store a new user and return its id."""
        response = await service.register(registration())

        assert response.message == "User registered successfully"
        stored = await repository.get_user_by_id(response.user_id)
        assert stored is not None
        assert stored.username == "alice"
        assert stored.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_password(self, service, repository):
        """The stored credential should be a bcrypt hash."""
        response = await service.register(registration())

        stored = await repository.get_user_by_id(response.user_id)
        assert stored.password_hash != "password123"
        assert stored.password_hash.startswith("$2")

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, service, repository):
        """Registering an existing email should be a conflict."""
        await service.register(registration())

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.register(registration())

        assert len(repository) == 1

    @pytest.mark.asyncio
    async def test_register_duplicate_does_not_insert_or_hash(self, hasher, tokens):
        """A conflict should be detected before hashing and inserting."""
        repository = MagicMock()
        repository.get_user_by_email = AsyncMock(return_value=MagicMock())
        repository.create_user = AsyncMock()
        service = UserService(repository=repository, hasher=hasher, tokens=tokens)

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.register(registration())

        repository.create_user.assert_not_awaited()
        hasher.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_lookup_failure_propagates(self, hasher, tokens):
        """Only a definite miss should allow registration to proceed."""
        repository = MagicMock()
        repository.get_user_by_email = AsyncMock(
            side_effect=PersistenceError("get_user_by_email failed")
        )
        repository.create_user = AsyncMock()
        service = UserService(repository=repository, hasher=hasher, tokens=tokens)

        with pytest.raises(PersistenceError):
            await service.register(registration())

        repository.create_user.assert_not_awaited()


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_token_for_user(self, service, tokens):
        """A correct password should yield a token for that user."""
        registered = await service.register(registration())

        response = await service.login(LoginRequest(email="alice@example.com", password="password123"))

        claims = tokens.validate(response.token)
        assert claims.user_id == registered.user_id
        assert claims.email == "alice@example.com"
        assert response.user.id == registered.user_id
        assert response.user.username == "alice"

    @pytest.mark.asyncio
    async def test_login_response_has_no_password_hash(self, service):
        """The login response should never expose the hash."""
        await service.register(registration())

        response = await service.login(LoginRequest(email="alice@example.com", password="password123"))

        assert "password_hash" not in response.model_dump()["user"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, service):
        """A wrong password should be rejected."""
        await service.register(registration())

        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="alice@example.com", password="wrong-password"))

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, service, hasher):
        """An unknown email should be rejected after a comparable hash check."""
        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="nobody@example.com", password="password123"))

        hasher.verify.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_email_hashing_runs_off_event_loop(self, repository, tokens):
        """The placeholder hash for unknown emails should be built in a worker thread, once."""
        loop_thread = threading.get_ident()
        hash_threads = []
        bcrypt_hasher = BcryptHasher(rounds=4)

        def recording_hash(password: str) -> str:
            hash_threads.append(threading.get_ident())
            return bcrypt_hasher.hash(password)

        hasher = MagicMock(wraps=bcrypt_hasher)
        hasher.hash.side_effect = recording_hash
        service = UserService(repository=repository, hasher=hasher, tokens=tokens)

        for _ in range(2):
            with pytest.raises(InvalidCredentialsError):
                await service.login(LoginRequest(email="nobody@example.com", password="password123"))

        assert len(hash_threads) == 1
        assert hash_threads[0] != loop_thread
        assert hasher.verify.call_count == 2

    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, service):
        """Unknown email and wrong password should produce the same client body."""
        await service.register(registration())

        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login(LoginRequest(email="nobody@example.com", password="password123"))
        with pytest.raises(InvalidCredentialsError) as mismatch:
            await service.login(LoginRequest(email="alice@example.com", password="wrong-password"))

        assert unknown.value.to_client_dict() == mismatch.value.to_client_dict()
        assert unknown.value.to_client_dict() == {
            "error": "INVALID_CREDENTIALS",
            "message": "Invalid email or password",
        }

    @pytest.mark.asyncio
    async def test_login_lookup_failure_is_invalid_credentials(self, hasher, tokens):
        """A lookup failure should look like bad credentials to the client."""
        repository = MagicMock()
        repository.get_user_by_email = AsyncMock(
            side_effect=PersistenceError("get_user_by_email failed")
        )
        service = UserService(repository=repository, hasher=hasher, tokens=tokens)

        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="alice@example.com", password="password123"))
