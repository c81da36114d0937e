"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the hashing
scheme or token format without touching callers.
"""

from typing import Protocol, runtime_checkable

from .models import SessionClaims


@runtime_checkable
class ICredentialHasher(Protocol):
    """One-way salted password hashing."""

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            HashingError: If the hash cannot be computed.
        """
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored hash.

        Returns False on mismatch and on malformed hashes; never raises.
        """
        ...


@runtime_checkable
class ITokenService(Protocol):
    """
    Issues and validates signed, time-bounded session tokens.

    Implementations hold no per-request state and perform no I/O.
    """

    def issue(self, user_id: str, email: str) -> str:
        """
        Issue a session token for a user.

        Args:
            user_id: Identity ID, stored as the ``sub`` claim
            email: Identity email

        Returns:
            Compact signed token string
        """
        ...

    def validate(self, token: str) -> SessionClaims:
        """
        Verify a token's signature, then its time window.

        Returns:
            SessionClaims carried by the token

        Raises:
            InvalidSignatureError: Signature or algorithm mismatch
            ExpiredTokenError: Current time is at or after ``exp``
            NotYetValidTokenError: Current time is before ``nbf``
            MalformedTokenError: Unparseable token or missing claims
        """
        ...
