"""
User service implementation.

Registration and login on top of the user repository, the credential hasher
and the token service.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from shared.exceptions import PersistenceError
from modules.auth.exceptions import InvalidCredentialsError
from modules.auth.interfaces import ICredentialHasher, ITokenService

from .interfaces import IUserService, IUserRepository
from .exceptions import EmailAlreadyRegisteredError
from .models import (
    User,
    UserView,
    RegistrationRequest,
    RegistrationResponse,
    LoginRequest,
    LoginResponse,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    Account registration and login.

    Password hashing and verification are CPU-bound and run in a worker
    thread so they do not stall other requests on the event loop.
    """

    def __init__(
        self,
        repository: IUserRepository,
        hasher: ICredentialHasher,
        tokens: ITokenService,
    ):
        self._repository = repository
        self._hasher = hasher
        self._tokens = tokens
        self._dummy_hash: str | None = None

    async def register(self, request: RegistrationRequest) -> RegistrationResponse:
        # Only "not found" lets registration proceed; a lookup failure
        # propagates as PersistenceError.
        existing = await self._repository.get_user_by_email(request.email)
        if existing is not None:
            logger.warning("Registration attempt for existing email")
            raise EmailAlreadyRegisteredError(request.email)

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)

        now = datetime.now(timezone.utc)
        user = User(
            id=str(uuid.uuid4()),
            username=request.username,
            email=request.email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        await self._repository.create_user(user)

        logger.info(f"User registered: {user.id}")
        return RegistrationResponse(user_id=user.id)

    async def login(self, request: LoginRequest) -> LoginResponse:
        try:
            user = await self._repository.get_user_by_email(request.email)
        except PersistenceError as e:
            logger.error(f"User lookup failed during login: {e.message}")
            raise InvalidCredentialsError("lookup failed") from e

        if user is None:
            # Burn comparable time so a miss looks like a wrong password
            dummy_hash = await self._get_dummy_hash()
            await asyncio.to_thread(self._hasher.verify, request.password, dummy_hash)
            logger.warning("Login attempt for unknown email")
            raise InvalidCredentialsError("unknown email")

        matches = await asyncio.to_thread(
            self._hasher.verify, request.password, user.password_hash
        )
        if not matches:
            logger.warning(f"Incorrect password for user {user.id}")
            raise InvalidCredentialsError("password mismatch")

        token = self._tokens.issue(user.id, user.email)
        logger.info(f"User logged in: {user.id}")
        return LoginResponse(token=token, user=UserView.from_user(user))

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(self._hasher.hash, uuid.uuid4().hex)
        return self._dummy_hash
