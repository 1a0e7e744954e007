# juliaydavid/services/base.py
"""
Shared plumbing for the resource controllers.

Rows that own a blob follow one ordering everywhere:
- create: upload the blob, insert the row, and delete the blob again if
  the insert fails
- delete: make sure the row exists, delete it and commit, then delete the
  blob; a failed blob delete is logged, the request still succeeds
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.core.errors import InvalidUpload, NotFound, ValidationError
from juliaydavid.db.store import Store
from juliaydavid.security.policy import AccessPolicy
from juliaydavid.storage.blobs import BlobRef, BlobStore

logger = logging.getLogger(__name__)


@dataclass
class IncomingFile:
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


def require_text(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return value


def check_upload(upload: Optional[IncomingFile], max_bytes: int, message: str) -> IncomingFile:
    if upload is None or not upload.data:
        raise InvalidUpload(message)
    if len(upload.data) > max_bytes:
        raise InvalidUpload(f"El archivo supera el límite de {max_bytes // (1024 * 1024)} MB")
    return upload


def blob_ref(row) -> BlobRef:
    return BlobRef(backend=row.blob_backend, provider_id=row.blob_id, url=row.url)


class ResourceController:
    def __init__(self, store: Store, policy: AccessPolicy, blobs: Optional[BlobStore] = None):
        self.store = store
        self.policy = policy
        self.blobs = blobs

    async def _get_or_404(self, db: AsyncSession, model, row_id: int, message: str, options: Sequence = ()):
        statement = select(model).where(model.id == row_id)
        if options:
            statement = statement.options(*options)
        result = await self.store.execute(db, statement)
        row = result.scalars().first()
        if row is None:
            raise NotFound(message)
        return row

    async def _insert(self, db: AsyncSession, row, blob: Optional[BlobRef] = None):
        try:
            async with self.store.transaction(db):
                db.add(row)
                await db.flush()
                await db.refresh(row)
        except Exception:
            if blob is not None:
                logger.warning("Insert failed, removing uploaded blob %s", blob.provider_id)
                await self.blobs.purge([blob])
            raise
        return row

    async def _save(self, db: AsyncSession, row):
        async with self.store.transaction(db):
            db.add(row)
            await db.flush()
            await db.refresh(row)
        return row

    async def _delete(self, db: AsyncSession, row, blobs: Iterable[BlobRef] = ()):
        refs = list(blobs)
        async with self.store.transaction(db):
            await db.delete(row)
        if refs:
            await self.blobs.purge(refs)
