"""
Password hashing with bcrypt.
"""

import logging

import bcrypt

from .exceptions import HashingError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class BcryptHasher:
    """
    Credential hasher backed by bcrypt.

    The cost factor is a log2 work factor; 12 lands around a few hundred
    milliseconds per hash on commodity hardware. Tests use the minimum (4).
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, OSError) as e:
            logger.error(f"Password hashing failed: {e}")
            raise HashingError() from e

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Malformed hash or oversized password
            return False
