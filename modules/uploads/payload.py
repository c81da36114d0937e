"""
Bounded multipart extraction.

The request body is capped while it streams in: a declared Content-Length
over the limit is rejected before anything is read, and an undeclared or
understated body is cut off as soon as the running total crosses the limit.
Starlette's multipart parser spools file parts to a temporary file, so at
most one limit's worth of data is ever held.
"""

import logging
from typing import Optional

from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from starlette.types import Message, Receive

from .exceptions import PayloadTooLargeError, MissingFileError
from .models import UploadPart

logger = logging.getLogger(__name__)

AUDIO_FILE_FIELD = "audiofile"


def bounded_receive(receive: Receive, max_bytes: int) -> Receive:
    """Wrap an ASGI receive callable so the body cannot exceed ``max_bytes``."""
    received = 0

    async def receive_with_limit() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > max_bytes:
                raise PayloadTooLargeError(max_bytes)
        return message

    return receive_with_limit


def _declared_length(request: Request) -> Optional[int]:
    value = request.headers.get("content-length")
    if value is None or not value.isdigit():
        return None
    return int(value)


async def read_upload_part(
    request: Request,
    max_bytes: int,
    field_name: str = AUDIO_FILE_FIELD,
) -> tuple[UploadPart, FormData]:
    """
    Extract the file part from a multipart request body.

    Returns the part together with the parsed form; the caller must close the
    form once it is done with the file.

    Raises:
        PayloadTooLargeError: Body is larger than ``max_bytes``
        MissingFileError: Body is not multipart, is malformed, or has no
            file under ``field_name``
    """
    declared = _declared_length(request)
    if declared is not None and declared > max_bytes:
        logger.warning(f"Upload rejected: declared size {declared} exceeds {max_bytes}")
        raise PayloadTooLargeError(max_bytes)

    limited = Request(request.scope, receive=bounded_receive(request.receive, max_bytes))
    try:
        form = await limited.form()
    except PayloadTooLargeError:
        logger.warning(f"Upload rejected: body exceeded {max_bytes} bytes while streaming")
        raise
    except (MultiPartException, StarletteHTTPException) as e:
        logger.warning(f"Upload rejected: malformed multipart body: {e}")
        raise MissingFileError(field_name, reason="malformed") from e

    value = form.get(field_name)
    if not isinstance(value, UploadFile):
        await form.close()
        logger.warning(f"Upload rejected: no file in field '{field_name}'")
        raise MissingFileError(field_name)

    size = value.size
    if size is None:
        value.file.seek(0, 2)
        size = value.file.tell()
    value.file.seek(0)

    part = UploadPart(
        file=value.file,
        filename=value.filename,
        content_type=value.content_type,
        size=size,
    )
    return part, form
