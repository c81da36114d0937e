"""
Uploads module interfaces.

IObjectStore and IUploadRepository are the two collaborators the upload
pipeline writes to, in that order. IUploadService is the pipeline itself.
"""

from typing import BinaryIO, Protocol, Optional, runtime_checkable

from .models import UploadPart, UploadRecord, UploadResponse


@runtime_checkable
class IObjectStore(Protocol):
    """Durable put-object sink addressed by bucket and key."""

    async def put_object(
        self,
        key: str,
        body: BinaryIO,
        content_type: str,
        size: Optional[int] = None,
    ) -> Optional[str]:
        """
        Stream ``body`` into the bucket under ``key``.

        Cancelling the awaiting task must stop the transfer promptly.

        Returns:
            Access URL for the object, or None if none can be built

        Raises:
            StorageError: If the store rejects or fails the write
        """
        ...

    async def delete_object(self, key: str) -> None:
        """
        Delete an object.

        Raises:
            StorageError: If the delete fails
        """
        ...


@runtime_checkable
class IUploadRepository(Protocol):
    """Metadata store for upload records."""

    async def save_upload(self, record: UploadRecord) -> UploadRecord:
        """
        Insert an upload record.

        Raises:
            PersistenceError: If the insert fails
        """
        ...

    async def get_upload_by_id(self, upload_id: str) -> Optional[UploadRecord]:
        """Get an upload record by ID, or None."""
        ...


@runtime_checkable
class IUploadService(Protocol):
    """Interface for the upload pipeline."""

    async def upload(self, owner_id: str, part: UploadPart) -> UploadResponse:
        """
        Store a file for an authenticated owner and record its metadata.

        The object store write always happens before the metadata insert.

        Raises:
            StorageWriteError: Object store write failed; nothing persisted
            MetadataPersistError: Object stored, metadata insert failed
        """
        ...
