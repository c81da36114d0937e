"""
Object store clients.

S3ObjectStore talks to S3 or any S3-compatible service (MinIO) through
boto3. boto3 is blocking, so each call runs in a worker thread; the body is
wrapped in a reader that checks a cancellation flag on every read, which is
how a cancelled request stops a transfer already running in that thread.
"""

import asyncio
import logging
import threading
from typing import Any, BinaryIO, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from shared.exceptions import StorageError

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


class TransferCancelled(Exception):
    """Raised inside the worker thread when the transfer was cancelled."""


class CancellableReader:
    """
    File wrapper whose reads fail once ``cancelled`` is set.

    Exposes ``seek``/``tell`` so botocore can compute checksums and rewind
    for retries.
    """

    def __init__(self, raw: BinaryIO, cancelled: threading.Event):
        self._raw = raw
        self._cancelled = cancelled

    def read(self, size: int = -1) -> bytes:
        if self._cancelled.is_set():
            raise TransferCancelled()
        return self._raw.read(size)

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._raw.seek(offset, whence)

    def tell(self) -> int:
        return self._raw.tell()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._raw, name)


class S3ObjectStore:
    """
    S3/MinIO-backed object store.

    Objects are written with a single PutObject call; the access URL is
    ``{endpoint}/{bucket}/{key}`` when an endpoint is configured.
    """

    def __init__(self, client: Any, bucket: str, endpoint: str = ""):
        self._client = client
        self._bucket = bucket
        self._endpoint = endpoint

    @classmethod
    def from_settings(cls, settings: Any) -> "S3ObjectStore":
        """Build a client from Settings (S3_* variables)."""
        client = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint or None,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key_id or None,
            aws_secret_access_key=settings.s3_secret_access_key or None,
            config=BotoConfig(
                s3={"addressing_style": "path" if settings.s3_use_path_style else "auto"},
            ),
        )
        logger.info(
            f"S3 object store initialized: endpoint={settings.s3_endpoint or 'aws'} "
            f"bucket={settings.s3_bucket_name} region={settings.s3_region} "
            f"path_style={settings.s3_use_path_style}"
        )
        return cls(client, settings.s3_bucket_name, settings.s3_endpoint)

    @property
    def bucket(self) -> str:
        return self._bucket

    def object_url(self, key: str) -> Optional[str]:
        if not self._endpoint:
            return None
        return f"{self._endpoint.rstrip('/')}/{self._bucket}/{key}"

    async def put_object(
        self,
        key: str,
        body: BinaryIO,
        content_type: str,
        size: Optional[int] = None,
    ) -> Optional[str]:
        cancelled = threading.Event()
        params: dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": CancellableReader(body, cancelled),
            "ContentType": content_type,
        }
        if size is not None:
            params["ContentLength"] = size

        try:
            await asyncio.to_thread(self._client.put_object, **params)
        except asyncio.CancelledError:
            cancelled.set()
            logger.warning(f"Object store write cancelled: bucket={self._bucket} key={key}")
            raise
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload object: bucket={self._bucket} key={key}: {e}")
            raise StorageError(
                f"Failed to upload to bucket {self._bucket} with key {key}",
                code="OBJECT_PUT_FAILED",
                details={"bucket": self._bucket, "key": key},
            ) from e

        url = self.object_url(key)
        logger.info(f"Object uploaded: key={key}")
        return url

    async def delete_object(self, key: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.delete_object, Bucket=self._bucket, Key=key
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete object: bucket={self._bucket} key={key}: {e}")
            raise StorageError(
                f"Failed to delete key {key} from bucket {self._bucket}",
                code="OBJECT_DELETE_FAILED",
                details={"bucket": self._bucket, "key": key},
            ) from e
        logger.info(f"Object deleted: key={key}")


class InMemoryObjectStore:
    """
    Object store with in-memory storage.

    For testing and development. Reads the body in chunks and yields to the
    event loop between them, so cancellation behaves like a real transfer.
    """

    def __init__(self, bucket: str = "memory") -> None:
        self.bucket = bucket
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.put_calls = 0

    async def put_object(
        self,
        key: str,
        body: BinaryIO,
        content_type: str,
        size: Optional[int] = None,
    ) -> Optional[str]:
        self.put_calls += 1
        chunks = []
        while True:
            chunk = body.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            await asyncio.sleep(0)
        self.objects[key] = b"".join(chunks)
        self.content_types[key] = content_type
        return None

    async def delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.content_types.pop(key, None)
