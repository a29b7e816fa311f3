"""Local-disk object storage: buckets are directories under STORAGE_DIR."""
from __future__ import annotations

import logging
import os
import secrets
import time
from pathlib import Path

from app.core.config import settings
from app.core.errors import ValidationFailedError, NotFoundError

logger = logging.getLogger("storage")

MESSAGE_ATTACHMENTS_BUCKET = "message-attachments"
JOB_DOCUMENTS_BUCKET = "job-documents"
AVATARS_BUCKET = "avatars"
BUCKETS = (MESSAGE_ATTACHMENTS_BUCKET, JOB_DOCUMENTS_BUCKET, AVATARS_BUCKET)


def _bucket_root(bucket: str) -> Path:
    if bucket not in BUCKETS:
        raise NotFoundError("Bucket not found")
    return Path(settings.STORAGE_DIR).resolve() / bucket


def build_object_path(owner_id, filename: str) -> str:
    """`{owner_id}/{timestamp_ms}-{random}.{ext}`"""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower() or "bin"
    return f"{owner_id}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


def public_url(bucket: str, object_path: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/storage/{bucket}/{object_path}"


def save_upload(bucket: str, owner_id, filename: str, data: bytes) -> tuple[str, str]:
    """Write bytes to the bucket and return (object_path, public_url)."""
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ValidationFailedError(
            f"File '{filename}' exceeds the {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit"
        )
    object_path = build_object_path(owner_id, filename)
    target = _bucket_root(bucket) / object_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.info("Stored %d bytes at %s/%s", len(data), bucket, object_path)
    return object_path, public_url(bucket, object_path)


def resolve(bucket: str, object_path: str) -> Path:
    """Absolute path of a stored object; rejects anything escaping the bucket."""
    root = _bucket_root(bucket)
    target = (root / object_path).resolve()
    if root not in target.parents:
        raise NotFoundError("File not found")
    if not target.is_file():
        raise NotFoundError("File not found")
    return target
