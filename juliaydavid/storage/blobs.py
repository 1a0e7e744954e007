# juliaydavid/storage/blobs.py
"""
Blob store adapter: routes uploads to a backend profile by content type.

Profiles:
- "images": photos and anything that is not audio/video
- "media":  audio and video (kept apart because image CDNs tend to
            mishandle them)

When the browser sends no MIME type or a generic one, the filename
extension decides.
"""
import asyncio
import functools
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from juliaydavid.core.config import Settings
from juliaydavid.core.errors import BlobError, CleanupError, ConfigError
from juliaydavid.storage.backends import BlobBackend, LocalBackend, S3Backend

logger = logging.getLogger(__name__)

IMAGES = "images"
MEDIA = "media"

GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

# mimetypes does not know some of these on every platform
MEDIA_TYPES_BY_EXTENSION = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".oga": "audio/ogg",
    ".opus": "audio/opus",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".mp4": "video/mp4",
    ".m4v": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    ".mkv": "video/x-matroska",
}


@dataclass(frozen=True)
class BlobRef:
    backend: str
    provider_id: str
    url: str


def resolve_mime(mime: Optional[str], filename: Optional[str]) -> str:
    mime = (mime or "").split(";")[0].strip().lower()
    if mime not in GENERIC_MIME_TYPES:
        return mime

    ext = Path(filename or "").suffix.lower()
    if ext in MEDIA_TYPES_BY_EXTENSION:
        return MEDIA_TYPES_BY_EXTENSION[ext]
    guessed, _ = mimetypes.guess_type(filename or "")
    return guessed or "application/octet-stream"


def is_media(mime: str) -> bool:
    return mime.startswith(("audio/", "video/"))


def make_key(folder: str, filename: Optional[str]) -> str:
    ext = Path(filename or "").suffix.lower()
    return f"{folder}/{datetime.now(timezone.utc):%Y/%m/%d}/{uuid.uuid4().hex}{ext}"


class BlobStore:
    def __init__(self, backends: Dict[str, BlobBackend], timeout: float = 30.0):
        self._backends = dict(backends)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlobStore":
        kind = settings.BLOB_BACKEND.lower()
        backends: Dict[str, BlobBackend] = {}

        if kind == "local":
            root = Path(settings.LOCAL_BLOB_DIR)
            backends[IMAGES] = LocalBackend(IMAGES, root, settings.LOCAL_BLOB_URL)
            backends[MEDIA] = LocalBackend(MEDIA, root, settings.LOCAL_BLOB_URL)
        elif kind == "s3":
            if settings.S3_BUCKET and settings.S3_ACCESS_KEY_ID and settings.S3_SECRET_ACCESS_KEY:
                backends[IMAGES] = S3Backend.from_settings(
                    IMAGES, settings, settings.S3_BUCKET, settings.S3_PUBLIC_BASE_URL
                )
                if settings.S3_MEDIA_BUCKET:
                    media_bucket = settings.S3_MEDIA_BUCKET
                    media_base = settings.S3_MEDIA_PUBLIC_BASE_URL
                else:
                    media_bucket = settings.S3_BUCKET
                    media_base = settings.S3_PUBLIC_BASE_URL
                backends[MEDIA] = S3Backend.from_settings(MEDIA, settings, media_bucket, media_base)
            else:
                logger.error("BLOB_BACKEND=s3 but the S3 bucket or credentials are missing")
        else:
            logger.error("Unknown BLOB_BACKEND %r; uploads are disabled", settings.BLOB_BACKEND)

        return cls(backends, timeout=settings.BLOB_TIMEOUT_SECONDS)

    @staticmethod
    def _in_thread(func, *args):
        # On timeout the future is abandoned; the thread runs to completion
        loop = asyncio.get_running_loop()
        return loop.run_in_executor(None, functools.partial(func, *args))

    def choose_backend(self, mime: Optional[str], filename: Optional[str]) -> BlobBackend:
        if IMAGES not in self._backends:
            raise ConfigError(detail="almacenamiento de archivos no configurado")
        profile = MEDIA if is_media(resolve_mime(mime, filename)) else IMAGES
        return self._backends.get(profile) or self._backends[IMAGES]

    async def upload(self, data: bytes, filename: Optional[str], mime: Optional[str], folder: str) -> BlobRef:
        mime = resolve_mime(mime, filename)
        backend = self.choose_backend(mime, filename)
        key = make_key(folder, filename)
        try:
            url = await asyncio.wait_for(
                self._in_thread(backend.upload, data, key, mime),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            # The worker thread may still finish; that blob is then orphaned
            logger.error("Upload of %s to %s timed out after %ss", key, backend.name, self.timeout)
            raise BlobError(detail="tiempo de subida agotado")
        logger.info("Uploaded %s to %s (%d bytes, %s)", key, backend.name, len(data), mime)
        return BlobRef(backend=backend.name, provider_id=key, url=url)

    async def delete(self, ref: BlobRef) -> bool:
        backend = self._backends.get(ref.backend)
        if backend is None:
            logger.error("No blob backend named %r for %s", ref.backend, ref.provider_id)
            return False
        try:
            deleted = await asyncio.wait_for(
                self._in_thread(backend.delete, ref.provider_id),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Delete of %s from %s timed out", ref.provider_id, ref.backend)
            return False
        if deleted:
            logger.info("Deleted blob %s from %s", ref.provider_id, ref.backend)
        return deleted

    async def purge(self, refs: Iterable[BlobRef]) -> List[CleanupError]:
        """
        Best-effort removal after the owning rows are gone.

        Failures are logged as CleanupError and returned; they never undo
        the database change that came first.
        """
        failures = []
        for ref in refs:
            if not await self.delete(ref):
                error = CleanupError(ref.backend, ref.provider_id)
                logger.error("Blob cleanup pending: %s", error)
                failures.append(error)
        return failures
