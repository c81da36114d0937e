"""
Uploads module.

Accepts a bounded binary upload, writes it to the object store and records
its metadata.

Public API:
- IUploadService: Upload pipeline interface
- IObjectStore, IUploadRepository: Collaborator interfaces
- UploadPart, UploadRecord, UploadResponse: Models
- Upload exceptions: PayloadTooLargeError, MissingFileError, etc.
"""

from .interfaces import IUploadService, IObjectStore, IUploadRepository
from .models import UploadPart, UploadRecord, UploadResponse
from .exceptions import (
    UploadError,
    PayloadTooLargeError,
    MissingFileError,
    StorageWriteError,
    MetadataPersistError,
    UploadCancelledError,
)

__all__ = [
    # Interfaces
    "IUploadService",
    "IObjectStore",
    "IUploadRepository",
    # Models
    "UploadPart",
    "UploadRecord",
    "UploadResponse",
    # Exceptions
    "UploadError",
    "PayloadTooLargeError",
    "MissingFileError",
    "StorageWriteError",
    "MetadataPersistError",
    "UploadCancelledError",
]
