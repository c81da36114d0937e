"""
Audio upload endpoints.

All routes here require a valid bearer token.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, Request

from api.middleware.auth import get_current_claims
from api.dependencies import get_upload_service
from modules.auth.models import SessionClaims
from shared.config import Settings, get_settings

from .interfaces import IUploadService
from .models import UploadResponse
from .payload import read_upload_part, AUDIO_FILE_FIELD
from .exceptions import UploadCancelledError

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.5  # seconds


async def cancel_on_disconnect(
    request: Request,
    work: Awaitable[T],
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> T:
    """
    Await ``work`` while watching the client connection.

    If the client disconnects first, ``work`` is cancelled and
    UploadCancelledError is raised.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("Client disconnected, cancelling upload")
                task.cancel()
                try:
                    return await task
                except asyncio.CancelledError:
                    raise UploadCancelledError() from None
    finally:
        if not task.done():
            task.cancel()


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def upload_audio_file(
    request: Request,
    claims: SessionClaims = Depends(get_current_claims),
    service: IUploadService = Depends(get_upload_service),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    """
    Upload an audio file.

    Expects multipart/form-data with the file under the ``audiofile``
    field. Bodies over the configured limit (10 MB by default) are rejected
    with 400 before they are fully read.
    """
    logger.info(f"Upload request received from user {claims.user_id}")
    part, form = await read_upload_part(
        request, settings.max_upload_bytes, field_name=AUDIO_FILE_FIELD
    )
    try:
        return await cancel_on_disconnect(request, service.upload(claims.user_id, part))
    finally:
        await form.close()
