# juliaydavid/services/images.py
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.core.errors import InvalidUpload, ValidationError
from juliaydavid.models.image import Image
from juliaydavid.schemas.image import ImageUpdate
from juliaydavid.security.jwt import Identity
from juliaydavid.security.policy import Action
from juliaydavid.services.base import IncomingFile, ResourceController, blob_ref, check_upload
from juliaydavid.storage.blobs import resolve_mime

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
DEFAULT_DESCRIPTION = "Sin descripción"
GALLERY_FOLDER = "galeria"


class ImageController(ResourceController):
    """Photo gallery. Newest first."""

    def __init__(self, store, policy, blobs, max_bytes: int):
        super().__init__(store, policy, blobs)
        self.max_bytes = max_bytes

    async def list(self, db: AsyncSession):
        result = await self.store.execute(
            db, select(Image).order_by(Image.created_at.desc(), Image.id.desc())
        )
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        upload: Optional[IncomingFile],
        description: Optional[str],
        identity: Identity,
    ) -> Image:
        self.policy.require(identity, Action.CREATE, "No tienes permisos para subir imágenes")
        upload = check_upload(
            upload, self.max_bytes, "No se ha subido ningún archivo o el formato no es válido."
        )
        mime = resolve_mime(upload.content_type, upload.filename)
        if mime not in ALLOWED_IMAGE_TYPES:
            raise InvalidUpload("Tipo de archivo no permitido. Solo imágenes.")

        ref = await self.blobs.upload(upload.data, upload.filename, mime, folder=GALLERY_FOLDER)
        image = Image(
            url=ref.url,
            blob_id=ref.provider_id,
            blob_backend=ref.backend,
            description=(description or "").strip() or DEFAULT_DESCRIPTION,
            uploaded_by=identity.username,
            user_id=identity.user_id,
        )
        return await self._insert(db, image, blob=ref)

    async def update(self, db: AsyncSession, image_id: int, payload: ImageUpdate, identity: Identity) -> Image:
        self.policy.require(identity, Action.UPDATE, "No tienes permisos para editar imágenes")
        if payload.description is None:
            raise ValidationError("Falta la descripción")
        image = await self._get_or_404(db, Image, image_id, "Imagen no encontrada")
        image.description = payload.description.strip() or DEFAULT_DESCRIPTION
        return await self._save(db, image)

    async def delete(self, db: AsyncSession, image_id: int, identity: Identity) -> None:
        self.policy.require(identity, Action.DELETE, "No tienes permisos para eliminar imágenes")
        image = await self._get_or_404(db, Image, image_id, "Imagen no encontrada")
        await self._delete(db, image, blobs=[blob_ref(image)])
