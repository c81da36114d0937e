"""
Upload metadata repository.

Encapsulates Supabase queries and data mapping for the audio_files table.
"""

import logging
from typing import Optional, Any

from shared.repository import BaseRepository
from .models import UploadRecord

logger = logging.getLogger(__name__)

AUDIO_FILES_TABLE = "audio_files"


class UploadRepository(BaseRepository[UploadRecord]):
    """
    Supabase-backed upload metadata repository.

    Note: This repository does NOT perform authorization checks.
    The service layer decides which owner a record belongs to.
    """

    async def save_upload(self, record: UploadRecord) -> UploadRecord:
        data = {
            "id": record.id,
            "user_id": record.user_id,
            "s3_key": record.s3_key,
            "original_filename": record.original_filename,
            "content_type": record.content_type,
            "size_bytes": record.size_bytes,
            "uploaded_at": record.uploaded_at.isoformat(),
        }
        await self._execute(
            "save_upload",
            lambda: self._db.table(AUDIO_FILES_TABLE).insert(data).execute(),
        )
        logger.info(f"Upload metadata saved: id={record.id} key={record.s3_key}")
        return record

    async def get_upload_by_id(self, upload_id: str) -> Optional[UploadRecord]:
        result = await self._execute(
            "get_upload_by_id",
            lambda: self._db.table(AUDIO_FILES_TABLE).select("*").eq("id", upload_id).execute(),
        )
        if not result.data:
            logger.debug(f"Upload metadata not found: id={upload_id}")
            return None
        return self._map_to_record(result.data[0])

    def _map_to_record(self, data: dict[str, Any]) -> UploadRecord:
        """Map database row to UploadRecord model."""
        return UploadRecord(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            s3_key=data["s3_key"],
            original_filename=data["original_filename"],
            content_type=data.get("content_type") or "",
            size_bytes=data.get("size_bytes") or 0,
            uploaded_at=data["uploaded_at"],
        )


class InMemoryUploadRepository:
    """
    Upload repository with in-memory storage.

    For testing and development. Use UploadRepository for production.
    """

    def __init__(self) -> None:
        self.records: dict[str, UploadRecord] = {}

    async def save_upload(self, record: UploadRecord) -> UploadRecord:
        self.records[record.id] = record
        return record

    async def get_upload_by_id(self, upload_id: str) -> Optional[UploadRecord]:
        return self.records.get(upload_id)
