# juliaydavid/storage/backends.py
"""
Blob backends.

Both are synchronous; BlobStore runs them in the threadpool. ``delete``
is idempotent: removing a key that does not exist counts as success.
"""
import logging
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from juliaydavid.core.errors import BlobError

logger = logging.getLogger(__name__)


class BlobBackend:
    """upload(bytes, key, mime) → public URL; delete(key) → bool."""

    def __init__(self, name: str):
        self.name = name

    def upload(self, data: bytes, key: str, mime: str) -> str:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class LocalBackend(BlobBackend):
    """Files under a directory on disk, served by the app at ``base_url``."""

    def __init__(self, name: str, root: Path, base_url: str):
        super().__init__(name)
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        root = self.root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            raise BlobError(detail=f"clave fuera del directorio: {key}")
        return path

    def upload(self, data: bytes, key: str, mime: str) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            logger.exception("Local upload failed for %s", key)
            raise BlobError(detail=str(exc)) from exc
        return f"{self.base_url}/{key}"

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink(missing_ok=True)
        except (OSError, BlobError):
            logger.exception("Local delete failed for %s", key)
            return False
        return True


class S3Backend(BlobBackend):
    """Any S3-compatible bucket: Cloudflare R2, AWS S3, MinIO."""

    def __init__(self, name: str, client, bucket: str, public_base: Optional[str] = None, endpoint_url: Optional[str] = None):
        super().__init__(name)
        self._client = client
        self.bucket = bucket
        self.public_base = public_base
        self.endpoint_url = endpoint_url

    @classmethod
    def from_settings(cls, name: str, settings, bucket: str, public_base: Optional[str] = None) -> "S3Backend":
        timeout = settings.BLOB_TIMEOUT_SECONDS
        client = boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            config=BotoConfig(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 2},
            ),
        )
        return cls(name, client, bucket, public_base=public_base, endpoint_url=settings.S3_ENDPOINT_URL)

    def object_url(self, key: str) -> str:
        if self.public_base:
            return f"{self.public_base.rstrip('/')}/{key.lstrip('/')}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key.lstrip('/')}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key.lstrip('/')}"

    def upload(self, data: bytes, key: str, mime: str) -> str:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=mime,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 upload failed for %s", key)
            raise BlobError(detail=str(exc)) from exc
        return self.object_url(key)

    def delete(self, key: str) -> bool:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError):
            logger.exception("S3 delete failed for %s", key)
            return False
        return True
