"""Object storage for progress photos and avatars (S3 via boto3).

Rows keep the object key; URLs are presigned at read time. boto3 is blocking,
so every call goes through the threadpool.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from fitplan.core.config import Settings

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/heic": "heic",
}


class UploadValidationError(ValueError):
    """Upload rejected before it reaches storage (type or size)."""


class StorageError(Exception):
    """The object store call failed."""


def validate_image_upload(content_type: Optional[str], size: int, max_bytes: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise UploadValidationError("Please upload an image file")
    if size <= 0:
        raise UploadValidationError("Uploaded file is empty")
    if size > max_bytes:
        raise UploadValidationError(f"Image must be smaller than {max_bytes // (1024 * 1024)}MB")


def file_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
        if ext.isalnum():
            return ext
    return CONTENT_TYPE_EXTENSIONS.get(content_type or "", "bin")


def photo_key(user_id: uuid.UUID, week_number: int, ext: str) -> str:
    return f"{user_id}/{week_number}/{uuid.uuid4().hex}.{ext}"


def avatar_key(user_id: uuid.UUID, ext: str) -> str:
    return f"{user_id}/{uuid.uuid4().hex}.{ext}"


class PhotoStorage:
    """Thin async wrapper over one bucket; prefixes separate photos from avatars."""

    def __init__(self, settings: Settings, client=None):
        self.bucket = settings.s3_bucket_name
        self.photo_prefix = settings.photo_bucket_prefix
        self.avatar_prefix = settings.avatar_bucket_prefix
        self.url_ttl = settings.signed_url_ttl_seconds
        if client is None:
            kwargs = {"region_name": settings.aws_region}
            if settings.aws_access_key_id and settings.aws_secret_access_key:
                kwargs["aws_access_key_id"] = settings.aws_access_key_id
                kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
            client = boto3.client("s3", **kwargs)
        self.client = client

    def photo_object(self, key: str) -> str:
        return f"{self.photo_prefix}/{key}"

    def avatar_object(self, key: str) -> str:
        return f"{self.avatar_prefix}/{key}"

    async def upload(self, object_key: str, data: bytes, content_type: str) -> str:
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.exception("S3 upload failed for %s", object_key)
            raise StorageError("Upload failed") from e
        return object_key

    async def remove(self, object_keys: Sequence[str]) -> None:
        """Delete objects; missing keys are not an error."""
        if not object_keys:
            return
        try:
            await run_in_threadpool(
                self.client.delete_objects,
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": k} for k in object_keys], "Quiet": True},
            )
        except (ClientError, BotoCoreError) as e:
            logger.exception("S3 delete failed for %s", list(object_keys))
            raise StorageError("Delete failed") from e

    async def signed_url(self, object_key: Optional[str]) -> Optional[str]:
        if not object_key:
            return None
        try:
            return await run_in_threadpool(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": object_key},
                ExpiresIn=self.url_ttl,
            )
        except (ClientError, BotoCoreError):
            logger.exception("Could not sign URL for %s", object_key)
            return None
