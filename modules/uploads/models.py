"""
Uploads module data models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional

from pydantic import BaseModel, Field


@dataclass
class UploadPart:
    """
    The file part of an inbound multipart request.

    ``file`` is positioned at the start of the content and stays owned by
    whoever extracted the part; the upload service only reads from it.
    """

    file: BinaryIO
    filename: Optional[str]
    content_type: Optional[str]
    size: int


class UploadRecord(BaseModel):
    """Metadata row for one stored object. Immutable once created."""

    id: str = Field(..., description="Upload record ID (UUID)")
    user_id: str = Field(..., description="Owning user ID")
    s3_key: str = Field(..., description="Storage key within the bucket")
    original_filename: str = Field(..., description="Sanitized client filename")
    content_type: str = Field(..., description="Client-declared MIME type")
    size_bytes: int = Field(..., ge=0, description="Object size in bytes")
    uploaded_at: datetime = Field(..., description="Upload completion time")

    model_config = {"frozen": True}


class UploadResponse(BaseModel):
    """Response body for a successful upload."""

    id: str
    s3_key: str
    message: str = "Audio file uploaded successfully"
    file_url: Optional[str] = None
