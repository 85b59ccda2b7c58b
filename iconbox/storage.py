"""
Object storage for icon blobs: an S3-compatible client and an in-memory
double for tests and local runs.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from iconbox.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/png"
STREAM_CHUNK_SIZE = 64 * 1024


@dataclass
class StoredObject:
    """A blob read back from the store, with the metadata recorded at write time."""

    key: str
    body: Iterable[bytes]
    content_type: str = DEFAULT_CONTENT_TYPE
    etag: Optional[str] = None
    size: Optional[int] = None


class ObjectStore(Protocol):
    """Defines the operations the API needs from object storage."""

    def put_object(
        self, key: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE
    ) -> str:
        """Store ``data`` under ``key`` and return its quoted etag."""
        ...

    def get_object(self, key: str) -> Optional[StoredObject]:
        ...


def _quoted_md5(data: bytes) -> str:
    return f'"{hashlib.md5(data).hexdigest()}"'


@dataclass
class InMemoryObjectStore:
    """Test double for storage interactions."""

    stored_objects: dict[str, tuple[bytes, str, str]] = field(default_factory=dict)

    def put_object(
        self, key: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE
    ) -> str:
        etag = _quoted_md5(data)
        self.stored_objects[key] = (bytes(data), content_type, etag)
        return etag

    def get_object(self, key: str) -> Optional[StoredObject]:
        stored = self.stored_objects.get(key)
        if stored is None:
            return None
        data, content_type, etag = stored
        return StoredObject(
            key=key,
            body=iter([data]),
            content_type=content_type,
            etag=etag,
            size=len(data),
        )

    def reset(self) -> None:
        """Drop every stored object (useful in tests)."""
        self.stored_objects.clear()


@dataclass
class S3ObjectStore:
    """
    S3-compatible storage client (AWS S3, Cloudflare R2, Tencent COS, MinIO).
    """

    bucket: str
    region: str = ""
    endpoint: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    key_prefix: str = ""

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        # Empty strings fall through to boto3's own credential/region lookup.
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    def _object_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def put_object(
        self, key: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE
    ) -> str:
        try:
            response = self._client.put_object(
                Bucket=self.bucket,
                Key=self._object_key(key),
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Failed to write %s to bucket %s", key, self.bucket)
            raise StoreUnavailableError(f"object store write failed: {key}") from exc
        return response.get("ETag") or _quoted_md5(data)

    def get_object(self, key: str) -> Optional[StoredObject]:
        if not key:
            return None
        try:
            response = self._client.get_object(
                Bucket=self.bucket, Key=self._object_key(key)
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404", "NotFound"):
                return None
            logger.exception("Failed to read %s from bucket %s", key, self.bucket)
            raise StoreUnavailableError(f"object store read failed: {key}") from exc
        except BotoCoreError as exc:
            logger.exception("Failed to read %s from bucket %s", key, self.bucket)
            raise StoreUnavailableError(f"object store read failed: {key}") from exc

        return StoredObject(
            key=key,
            body=response["Body"].iter_chunks(chunk_size=STREAM_CHUNK_SIZE),
            content_type=response.get("ContentType") or DEFAULT_CONTENT_TYPE,
            etag=response.get("ETag"),
            size=response.get("ContentLength"),
        )
