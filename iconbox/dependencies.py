"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from iconbox.config import get_settings
from iconbox.directory import (
    DirectoryStore,
    InMemoryDirectoryStore,
    RedisDirectoryStore,
    SqlDirectoryStore,
)
from iconbox.storage import InMemoryObjectStore, ObjectStore, S3ObjectStore

logger = logging.getLogger(__name__)

_object_store: ObjectStore | None = None
_directory_store: DirectoryStore | None = None
_init_lock = threading.Lock()


def get_object_store() -> Optional[ObjectStore]:
    """
    Return the process-wide object store, or None when no backend is configured.
    """
    global _object_store
    if _object_store:
        return _object_store

    with _init_lock:
        # Another request may have built it while we waited.
        if _object_store:
            return _object_store

        settings = get_settings()
        if settings.use_in_memory_backends:
            _object_store = InMemoryObjectStore()
        elif settings.s3_bucket:
            _object_store = S3ObjectStore(
                bucket=settings.s3_bucket,
                region=settings.s3_region or "",
                endpoint=settings.s3_endpoint or "",
                access_key_id=settings.aws_access_key_id or "",
                secret_access_key=settings.aws_secret_access_key or "",
                key_prefix=settings.s3_key_prefix,
            )
        else:
            return None
        logger.info("Object store: %s", _object_store.__class__.__name__)
        return _object_store


def get_directory_store() -> Optional[DirectoryStore]:
    """
    Return the process-wide directory store, or None when no backend is configured.
    """
    global _directory_store
    if _directory_store:
        return _directory_store

    with _init_lock:
        if _directory_store:
            return _directory_store

        settings = get_settings()
        if settings.use_in_memory_backends:
            _directory_store = InMemoryDirectoryStore()
        elif settings.redis_url:
            _directory_store = RedisDirectoryStore(
                url=settings.redis_url,
                hash_key=settings.redis_hash_key,
            )
        elif settings.database_url:
            _directory_store = SqlDirectoryStore(settings.database_url)
        else:
            return None
        logger.info("Directory store: %s", _directory_store.__class__.__name__)
        return _directory_store
