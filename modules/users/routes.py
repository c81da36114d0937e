"""
User account endpoints.

Registration and login. Neither requires authentication.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service

from .interfaces import IUserService
from .models import (
    RegistrationRequest,
    RegistrationResponse,
    LoginRequest,
    LoginResponse,
)

router = APIRouter()


@router.post("/register", response_model=RegistrationResponse, status_code=201)
async def register_user(
    request: RegistrationRequest,
    service: IUserService = Depends(get_user_service),
) -> RegistrationResponse:
    """
    Register a new account.

    Returns 409 if the email is already registered.
    """
    return await service.register(request)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    request: LoginRequest,
    service: IUserService = Depends(get_user_service),
) -> LoginResponse:
    """
    Exchange email and password for a session token.

    Unknown email and wrong password return the same 401 body.
    """
    return await service.login(request)
