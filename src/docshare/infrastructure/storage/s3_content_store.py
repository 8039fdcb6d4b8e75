"""S3-compatible content store (AWS S3, MinIO, R2) via aioboto3."""

import logging
import mimetypes
from pathlib import PurePath
from uuid import uuid4

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from docshare.domain.entities import ContentRef
from docshare.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3ContentStore:
    """Stores uploads under ``{prefix}/{random}{ext}`` and returns a public URL."""

    def __init__(
        self,
        bucket: str,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        prefix: str = "documents",
        public_base_url: str | None = None,
    ) -> None:
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url or None
        self._access_key = access_key or None
        self._secret_key = secret_key or None
        self._prefix = prefix.strip("/")
        self._public_base_url = (public_base_url or "").rstrip("/") or None
        self._session = aioboto3.Session()

    def _client(self):
        return self._session.client(
            "s3",
            region_name=self._region,
            endpoint_url=self._endpoint_url,
            aws_access_key_id=self._access_key,
            aws_secret_access_key=self._secret_key,
        )

    def _key_for(self, filename: str) -> str:
        ext = PurePath(filename).suffix.lower()
        name = f"{uuid4().hex}{ext}"
        return f"{self._prefix}/{name}" if self._prefix else name

    def _url_for(self, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"
        region = self._region or "us-east-1"
        return f"https://{self._bucket}.s3.{region}.amazonaws.com/{key}"

    async def upload(self, data: bytes, filename: str, content_type: str | None) -> ContentRef:
        key = self._key_for(filename)
        content_type = (
            content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        )
        try:
            async with self._client() as s3:
                await s3.put_object(
                    Bucket=self._bucket, Key=key, Body=data, ContentType=content_type
                )
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for key %s: %s", key, e)
            raise StorageError() from e
        logger.info("Stored %d bytes at s3://%s/%s", len(data), self._bucket, key)
        return ContentRef(url=self._url_for(key), storage_key=key)

    async def delete(self, storage_key: str) -> None:
        try:
            async with self._client() as s3:
                await s3.delete_object(Bucket=self._bucket, Key=storage_key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError("Failed to delete file from cloud storage") from e
