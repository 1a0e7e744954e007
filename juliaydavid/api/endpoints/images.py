# juliaydavid/api/endpoints/images.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.schemas.common import StatusMessage
from juliaydavid.schemas.image import ImageResponse, ImageUpdate
from juliaydavid.security.jwt import Identity

router = APIRouter()


@router.get("", response_model=List[ImageResponse])
async def read_images(
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    return await ctx.images.list(db)


@router.post("", response_model=ImageResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
        image: Optional[UploadFile] = File(None),
        description: Optional[str] = Form(None),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    incoming = await deps.read_upload(image, ctx.images.max_bytes)
    return await ctx.images.create(db, incoming, description, identity)


@router.put("/{image_id}", response_model=ImageResponse)
async def update_image(
        image_id: int,
        image_in: ImageUpdate,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.images.update(db, image_id, image_in, identity)


@router.delete("", response_model=StatusMessage)
async def delete_image_by_query(
        id: Optional[int] = Query(None),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.images.delete(db, deps.require_id(id, "Falta el id de la imagen"), identity)
    return {"message": "Imagen eliminada correctamente"}


@router.delete("/{image_id}", response_model=StatusMessage)
async def delete_image(
        image_id: int,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.images.delete(db, image_id, identity)
    return {"message": "Imagen eliminada correctamente"}
