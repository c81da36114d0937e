"""
Uploads module exceptions.

Storage and metadata failures are kept distinct: a MetadataPersistError
means the object is already in the bucket with no row pointing at it, and
operators need the storage key to reconcile.
"""

from typing import Optional

from shared.exceptions import (
    ClipvaultError,
    ValidationError,
    StorageError,
    PersistenceError,
)


class UploadError(ClipvaultError):
    """Base class for upload pipeline errors."""

    pass


class PayloadTooLargeError(ValidationError, UploadError):
    """Raised when the request body exceeds the upload limit."""

    def __init__(self, limit_bytes: int):
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File size limit exceeded. Max size: {limit_bytes // (1024 * 1024)} MB",
            code="PAYLOAD_TOO_LARGE",
            details={"limit_bytes": limit_bytes},
        )


class MissingFileError(ValidationError, UploadError):
    """Raised when the multipart body has no usable file part."""

    def __init__(self, field_name: str, reason: str = "missing"):
        super().__init__(
            f"Invalid file upload request: field '{field_name}' {reason}",
            code="MISSING_FILE",
            details={"field": field_name},
        )


class StorageWriteError(StorageError, UploadError):
    """Raised when the object store did not accept the upload."""

    client_code = "STORAGE_WRITE_FAILED"
    client_message = "Failed to upload file to storage"

    def __init__(self, storage_key: str, reason: Optional[str] = None):
        super().__init__(
            f"Object store write failed for key {storage_key}",
            code="STORAGE_WRITE_FAILED",
            details={"storage_key": storage_key, "reason": reason},
        )


class MetadataPersistError(PersistenceError, UploadError):
    """
    Raised when the object was stored but its metadata row was not.

    ``orphan_removed`` is True only if a compensating delete was attempted
    and succeeded.
    """

    client_code = "METADATA_PERSIST_FAILED"
    client_message = "Failed to save audio file metadata"

    def __init__(self, storage_key: str, orphan_removed: bool = False):
        self.storage_key = storage_key
        self.orphan_removed = orphan_removed
        super().__init__(
            f"Metadata insert failed after storing {storage_key}",
            code="METADATA_PERSIST_FAILED",
            details={"storage_key": storage_key, "orphan_removed": orphan_removed},
        )


class UploadCancelledError(UploadError):
    """Raised when the client went away before the upload finished."""

    client_code = "UPLOAD_CANCELLED"
    client_message = "Upload cancelled"

    def __init__(self):
        super().__init__(
            "Upload cancelled by client disconnect",
            code="UPLOAD_CANCELLED",
        )
