"""
User module data models.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from modules.auth.hashing import MAX_PASSWORD_BYTES


class User(BaseModel):
    """
    A registered identity as stored in the users table.

    ``password_hash`` is excluded from serialization; use UserView for
    anything that leaves the process.
    """

    id: str = Field(..., description="User ID (UUID)")
    username: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="Email address (unique)")
    password_hash: str = Field(..., exclude=True, repr=False)
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last update time")


class UserView(BaseModel):
    """Safe outward representation of a user."""

    id: str
    username: str
    email: EmailStr
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegistrationRequest(BaseModel):
    """Request body for POST /users/register."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class RegistrationResponse(BaseModel):
    """Response body for a successful registration."""

    message: str = "User registered successfully"
    user_id: str


class LoginRequest(BaseModel):
    """Request body for POST /users/login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response body for a successful login."""

    token: str
    user: UserView
