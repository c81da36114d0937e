"""
Session token service.

Issues and validates HMAC-signed JWTs. Validation checks the signature
before anything else and pins the signing algorithm to the configured one,
so a token whose header names a different algorithm (including "none") is
rejected as a signature failure.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError as PydanticValidationError

from .interfaces import ITokenService
from .models import SessionClaims
from .exceptions import (
    InvalidSignatureError,
    ExpiredTokenError,
    NotYetValidTokenError,
    MalformedTokenError,
)

DEFAULT_ISSUER = "clipvault"

SUPPORTED_ALGORITHMS = {
    "HS256": HMACAlgorithm.SHA256,
    "HS384": HMACAlgorithm.SHA384,
    "HS512": HMACAlgorithm.SHA512,
}

REQUIRED_CLAIMS = ["sub", "email", "iss", "iat", "nbf", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService(ITokenService):
    """
    Stateless issuer/validator for session tokens.

    The secret, lifetime and issuer are fixed at construction. ``clock`` is
    injectable so time-window behaviour can be tested without sleeping.
    """

    def __init__(
        self,
        secret: str,
        lifetime: timedelta,
        issuer: str = DEFAULT_ISSUER,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if lifetime.total_seconds() < 1:
            raise ValueError("Token lifetime must be at least one second")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")

        self._secret = secret
        self._lifetime_seconds = int(lifetime.total_seconds())
        self._issuer = issuer
        self._algorithm = algorithm
        self._hmac = HMACAlgorithm(SUPPORTED_ALGORITHMS[algorithm])
        self._key = self._hmac.prepare_key(secret)
        self._clock = clock or _utcnow

    @property
    def lifetime(self) -> timedelta:
        return timedelta(seconds=self._lifetime_seconds)

    def issue(self, user_id: str, email: str) -> str:
        now = self._clock().timestamp()
        # Rounded outward so the token is valid for all of [now, now + lifetime)
        payload = {
            "sub": user_id,
            "email": email,
            "iss": self._issuer,
            "iat": math.floor(now),
            "nbf": math.floor(now),
            "exp": math.ceil(now + self._lifetime_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> SessionClaims:
        if not token:
            raise MalformedTokenError("Token is empty")

        self._verify_signature(token)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    # Time window is checked below against the injected clock
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except (jwt.InvalidAlgorithmError, jwt.InvalidSignatureError) as e:
            raise InvalidSignatureError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        try:
            claims = SessionClaims(**payload)
        except (PydanticValidationError, TypeError) as e:
            raise MalformedTokenError(f"Invalid claims: {e}") from e

        now = self._clock().timestamp()
        if now < claims.nbf:
            raise NotYetValidTokenError()
        if now >= claims.exp:
            raise ExpiredTokenError()

        return claims

    def _verify_signature(self, token: str) -> None:
        """Check the HMAC over ``header.payload`` before parsing either."""
        segments = token.split(".")
        if len(segments) != 3 or not segments[0] or not segments[1]:
            raise MalformedTokenError("Token must have three segments")

        header_b64, payload_b64, signature_b64 = segments
        try:
            signature = base64url_decode(signature_b64)
        except ValueError as e:
            raise InvalidSignatureError("Signature is not valid base64") from e
        # Trailing pad bits are ignored by the decoder; only canonical text is accepted
        if base64url_encode(signature).decode("ascii") != signature_b64:
            raise InvalidSignatureError("Signature encoding is not canonical")

        signing_input = f"{header_b64}.{payload_b64}".encode("ascii", errors="replace")
        if not self._hmac.verify(signing_input, self._key, signature):
            raise InvalidSignatureError()
