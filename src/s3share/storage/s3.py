import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3share.error_handling.errors import ObjectNotFoundError, StorageError

from .base import DEFAULT_CONTENT_TYPE, ObjectMetadata, ObjectReader

logger = logging.getLogger("s3share.storage.s3")

# Error codes S3 (and S3-compatible services) use for a missing key.
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Store:
    """
    Wraps any S3-compatible service.
    Requires environment variables or explicit kwargs
    for credentials & region (AWS works out of the box; MinIO needs endpoint_url).
    """

    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        prefix: str = "",
        client=None,
    ):
        if not bucket:
            raise ValueError("S3 bucket name is required")
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        if client is None:
            extra_cfg = {"region_name": region} if region else {}
            client = boto3.client("s3", endpoint_url=endpoint_url or None, **extra_cfg)
        self.s3 = client

    # ---------- helpers ---------- #
    def _key(self, object_key: str) -> str:
        return f"{self.prefix}/{object_key}" if self.prefix else object_key

    def _translate(self, exc: Exception, object_key: str, action: str) -> StorageError:
        if isinstance(exc, ClientError):
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                return ObjectNotFoundError(f"object {object_key} not found in {self.bucket}")
        logger.error(f"S3 {action} failed for {self.bucket}/{self._key(object_key)}: {exc}")
        return StorageError(f"failed to {action} object {object_key}: {exc}")

    # ---------- API ---------- #
    def head_object(self, object_key: str) -> ObjectMetadata:
        try:
            resp = self.s3.head_object(Bucket=self.bucket, Key=self._key(object_key))
        except (ClientError, BotoCoreError) as e:
            raise self._translate(e, object_key, "head") from e
        return ObjectMetadata(
            content_type=resp.get("ContentType") or DEFAULT_CONTENT_TYPE,
            size=int(resp.get("ContentLength") or 0),
            last_modified=resp.get("LastModified"),
        )

    def get_object(self, object_key: str) -> ObjectReader:
        try:
            resp = self.s3.get_object(Bucket=self.bucket, Key=self._key(object_key))
        except (ClientError, BotoCoreError) as e:
            raise self._translate(e, object_key, "get") from e
        return ObjectReader(
            body=resp["Body"],
            content_type=resp.get("ContentType") or DEFAULT_CONTENT_TYPE,
            size=int(resp.get("ContentLength") or 0),
        )
