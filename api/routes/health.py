"""
Health check endpoints.

Provides endpoints for monitoring application health.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class PingResponse(BaseModel):
    """Liveness probe response model."""

    message: str = "pong"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


ping_router = APIRouter()


@ping_router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    """Liveness probe."""
    return PingResponse()
