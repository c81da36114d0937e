"""
Authentication module data models.

SessionClaims is what a validated bearer token carries. It is handed to
route handlers by the Session Guard and is authoritative for the lifetime of
the request; nothing re-reads the user record per request.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator


class SessionClaims(BaseModel):
    """
    Decoded, verified session token claims.

    Field names follow the registered JWT claim names so the model can be
    built directly from a decoded payload.
    """

    sub: str = Field(..., min_length=1, description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    iss: str = Field(..., description="Issuer")
    iat: int = Field(..., description="Issued at (unix seconds)")
    nbf: int = Field(..., description="Not before (unix seconds)")
    exp: int = Field(..., description="Expires at (unix seconds)")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def _check_window(self) -> "SessionClaims":
        if self.exp <= self.iat:
            raise ValueError("exp must be after iat")
        return self

    @property
    def user_id(self) -> str:
        return self.sub

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def not_before(self) -> datetime:
        return datetime.fromtimestamp(self.nbf, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)
