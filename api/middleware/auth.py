"""
Session Guard.

Validates the bearer token on protected routes and exposes the verified
claims to the route handler. Any failure short-circuits the request with a
401 before the handler runs.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request

from modules.auth.exceptions import MissingTokenError, MalformedHeaderError
from modules.auth.interfaces import ITokenService
from modules.auth.models import SessionClaims
from shared.exceptions import AuthenticationError

from ..dependencies import get_token_service

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header value.

    The scheme is matched case-insensitively; the token itself is returned
    untouched.

    Raises:
        MissingTokenError: Header absent or empty
        MalformedHeaderError: Header is not ``Bearer <token>``
    """
    if not authorization:
        raise MissingTokenError()

    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        raise MalformedHeaderError()

    token = authorization[len(BEARER_PREFIX):]
    if not token:
        raise MalformedHeaderError()
    return token


async def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: ITokenService = Depends(get_token_service),
) -> SessionClaims:
    """
    Dependency that requires a valid session token.

    The claims are also stored on ``request.state.claims`` for the lifetime
    of the request.

    Usage:
        @router.post("/protected")
        async def protected_route(claims: SessionClaims = Depends(get_current_claims)):
            return {"user_id": claims.user_id}
    """
    try:
        token = extract_bearer_token(authorization)
        claims = tokens.validate(token)
    except AuthenticationError as e:
        logger.warning(
            f"Request rejected: {e.code} on {request.method} {request.url.path}",
            extra={"auth_outcome": "rejected", "cause": e.code},
        )
        raise

    request.state.claims = claims
    logger.info(
        f"Request authenticated for user {claims.user_id}",
        extra={"auth_outcome": "authenticated", "subject": claims.user_id},
    )
    return claims


# Type alias for cleaner route definitions
RequireAuth = Depends(get_current_claims)
