# juliaydavid/services/nest.py
"""
The "nidito": boxes of files.

Box deletion collects every child blob first, lets the cascade remove the
file rows, and then purges the collected blobs so none are left behind.
"""
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from juliaydavid.models.nest import NestBox, NestFile
from juliaydavid.schemas.nest import NestBoxCreate, NestBoxUpdate
from juliaydavid.security.jwt import Identity
from juliaydavid.security.policy import Action
from juliaydavid.services.base import IncomingFile, ResourceController, blob_ref, check_upload, require_text
from juliaydavid.storage.blobs import resolve_mime

PREVIEW_FILES = 4
NEST_FOLDER = "nidito"
BOX_NOT_FOUND = "Cajita no encontrada"


class NestController(ResourceController):
    def __init__(self, store, policy, blobs, max_bytes: int):
        super().__init__(store, policy, blobs)
        self.max_bytes = max_bytes

    async def list_boxes(self, db: AsyncSession):
        result = await self.store.execute(
            db, select(NestBox).order_by(NestBox.created_at.desc(), NestBox.id.desc())
        )
        boxes = result.scalars().all()
        previews = await self._previews(db)
        for box in boxes:
            box.preview_files = previews.get(box.id, [])
        return boxes

    async def _previews(self, db: AsyncSession) -> Dict[int, List[NestFile]]:
        """The newest PREVIEW_FILES files of every box, ranked in SQL."""
        ranked = select(
            NestFile,
            func.row_number()
            .over(
                partition_by=NestFile.box_id,
                order_by=(NestFile.created_at.desc(), NestFile.id.desc()),
            )
            .label("preview_rank"),
        ).subquery()
        preview = aliased(NestFile, ranked)
        result = await self.store.execute(
            db,
            select(preview)
            .where(ranked.c.preview_rank <= PREVIEW_FILES)
            .order_by(ranked.c.box_id, ranked.c.preview_rank),
        )
        previews: Dict[int, List[NestFile]] = {}
        for nest_file in result.scalars():
            previews.setdefault(nest_file.box_id, []).append(nest_file)
        return previews

    async def list_files(self, db: AsyncSession, box_id: int):
        # An unknown (or deleted) box simply has no files
        result = await self.store.execute(
            db,
            select(NestFile)
            .where(NestFile.box_id == box_id)
            .order_by(NestFile.created_at.desc(), NestFile.id.desc()),
        )
        return result.scalars().all()

    async def create_box(self, db: AsyncSession, payload: NestBoxCreate, identity: Identity) -> NestBox:
        self.policy.require(identity, Action.CREATE, "Acceso no autorizado")
        name = require_text(payload.name, "El nombre de la cajita es obligatorio").strip()
        box = NestBox(
            name=name,
            description=(payload.description or "").strip() or None,
            user_id=identity.user_id,
        )
        box = await self._insert(db, box)
        box.preview_files = []
        return box

    async def update_box(self, db: AsyncSession, box_id: int, payload: NestBoxUpdate, identity: Identity) -> NestBox:
        self.policy.require(identity, Action.UPDATE, "Acceso no autorizado")
        update_data = payload.model_dump(exclude_unset=True)
        if "name" in update_data:
            update_data["name"] = require_text(update_data["name"], "El nombre de la cajita es obligatorio").strip()
        if "description" in update_data:
            update_data["description"] = (update_data["description"] or "").strip() or None

        box = await self._get_or_404(db, NestBox, box_id, BOX_NOT_FOUND)
        for key, value in update_data.items():
            setattr(box, key, value)
        box = await self._save(db, box)
        files = await self.list_files(db, box_id)
        box.preview_files = files[:PREVIEW_FILES]
        return box

    async def upload_file(
        self,
        db: AsyncSession,
        box_id: int,
        upload: Optional[IncomingFile],
        identity: Identity,
    ) -> NestFile:
        self.policy.require(identity, Action.CREATE, "Acceso no autorizado")
        upload = check_upload(upload, self.max_bytes, "No se ha subido ningún archivo")
        # The box must exist before anything is uploaded
        await self._get_or_404(db, NestBox, box_id, BOX_NOT_FOUND)

        mime = resolve_mime(upload.content_type, upload.filename)
        ref = await self.blobs.upload(upload.data, upload.filename, mime, folder=NEST_FOLDER)
        nest_file = NestFile(
            box_id=box_id,
            name=upload.filename or "archivo",
            url=ref.url,
            blob_id=ref.provider_id,
            blob_backend=ref.backend,
            mime_type=mime,
            user_id=identity.user_id,
        )
        return await self._insert(db, nest_file, blob=ref)

    async def delete_file(self, db: AsyncSession, file_id: int, identity: Identity) -> None:
        self.policy.require(identity, Action.DELETE, "Acceso no autorizado")
        nest_file = await self._get_or_404(db, NestFile, file_id, "Archivo no encontrado")
        await self._delete(db, nest_file, blobs=[blob_ref(nest_file)])

    async def delete_box(self, db: AsyncSession, box_id: int, identity: Identity) -> int:
        """Delete a box and everything in it. Returns how many files went with it."""
        self.policy.require(identity, Action.DELETE, "Acceso no autorizado")
        box = await self._get_or_404(db, NestBox, box_id, BOX_NOT_FOUND, options=[selectinload(NestBox.files)])
        refs = [blob_ref(nest_file) for nest_file in box.files]
        await self._delete(db, box, blobs=refs)
        return len(refs)
