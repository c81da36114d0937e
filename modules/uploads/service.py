"""
Upload service implementation.

Runs the upload pipeline for an already-authenticated owner:

1. Sanitize the filename and resolve the content type
2. Derive the storage key
3. Write the object (bounded by a deadline)
4. Insert the metadata row

The object write always comes first. If the metadata insert then fails the
object is left in the bucket (an orphan) and the failure is reported as
MetadataPersistError with the key, logged at CRITICAL for reconciliation.
An optional compensating delete can be enabled, but it never changes what
the caller sees.
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.exceptions import StorageError, PersistenceError

from .interfaces import IUploadService, IObjectStore, IUploadRepository
from .models import UploadPart, UploadRecord, UploadResponse
from .keys import sanitize_filename, resolve_content_type, derive_storage_key
from .exceptions import StorageWriteError, MetadataPersistError

logger = logging.getLogger(__name__)


class UploadService(IUploadService):
    """
    Upload orchestrator.

    Holds no per-request state; the store, repository and limits are
    injected once and shared by all requests.
    """

    def __init__(
        self,
        store: IObjectStore,
        repository: IUploadRepository,
        storage_timeout: Optional[float] = None,
        delete_orphans: bool = False,
        clock_ns: Callable[[], int] = time.time_ns,
    ):
        self._store = store
        self._repository = repository
        self._storage_timeout = storage_timeout
        self._delete_orphans = delete_orphans
        self._clock_ns = clock_ns

    async def upload(self, owner_id: str, part: UploadPart) -> UploadResponse:
        filename = sanitize_filename(part.filename)
        content_type = resolve_content_type(part.content_type)
        key = derive_storage_key(owner_id, filename, clock_ns=self._clock_ns)

        logger.info(f"Uploading object: key={key} content_type={content_type} size={part.size}")

        try:
            file_url = await asyncio.wait_for(
                self._store.put_object(key, part.file, content_type, size=part.size),
                timeout=self._storage_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Object store write timed out after {self._storage_timeout}s: key={key}")
            raise StorageWriteError(key, reason="timeout") from e
        except StorageError as e:
            logger.error(f"Object store write failed: key={key}: {e.message}")
            raise StorageWriteError(key, reason=e.code) from e

        record = UploadRecord(
            id=str(uuid.uuid4()),
            user_id=owner_id,
            s3_key=key,
            original_filename=filename,
            content_type=content_type,
            size_bytes=part.size,
            uploaded_at=datetime.now(timezone.utc),
        )

        try:
            await self._repository.save_upload(record)
        except PersistenceError as e:
            logger.critical(
                f"Orphaned object: stored {key} but metadata insert failed: {e.message}",
                extra={"storage_key": key, "owner_id": owner_id, "orphaned_object": True},
            )
            removed = await self._remove_orphan(key) if self._delete_orphans else False
            raise MetadataPersistError(key, orphan_removed=removed) from e

        logger.info(f"Upload complete: id={record.id} owner={owner_id} key={key}")
        return UploadResponse(id=record.id, s3_key=key, file_url=file_url)

    async def _remove_orphan(self, key: str) -> bool:
        """Best-effort delete of an object whose metadata was not saved."""
        try:
            await self._store.delete_object(key)
        except StorageError as e:
            logger.critical(f"Compensating delete failed, orphan remains: key={key}: {e.message}")
            return False
        logger.warning(f"Compensating delete removed orphaned object: key={key}")
        return True
