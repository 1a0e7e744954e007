# juliaydavid/api/endpoints/nest.py
"""
The nidito lives on a single path; ``boxId`` and ``fileId`` in the query
string pick what each method acts on.
"""
import json
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.core.errors import ValidationError
from juliaydavid.schemas.common import StatusMessage
from juliaydavid.schemas.nest import NestBoxCreate, NestBoxResponse, NestBoxUpdate, NestFileResponse
from juliaydavid.security.jwt import Identity

router = APIRouter()


def _dump(schema, rows):
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


async def _json_body(request: Request, schema):
    try:
        payload = await request.json()
        return schema.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError):
        raise ValidationError("Datos inválidos")


@router.get("")
async def read_nest(
        box_id: Optional[int] = Query(None, alias="boxId"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    """Boxes with up to four preview files, or the files of one box."""
    if box_id is None:
        return _dump(NestBoxResponse, await ctx.nest.list_boxes(db))
    return _dump(NestFileResponse, await ctx.nest.list_files(db, box_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_in_nest(
        request: Request,
        box_id: Optional[int] = Query(None, alias="boxId"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    # Without boxId: JSON body creating a box. With it: multipart upload.
    if box_id is None:
        box_in = await _json_body(request, NestBoxCreate)
        box = await ctx.nest.create_box(db, box_in, identity)
        return NestBoxResponse.model_validate(box).model_dump(mode="json")

    form = await request.form()
    try:
        upload = form.get("file")
        incoming = await deps.read_upload(upload if isinstance(upload, UploadFile) else None, ctx.nest.max_bytes)
    finally:
        await form.close()
    nest_file = await ctx.nest.upload_file(db, box_id, incoming, identity)
    return NestFileResponse.model_validate(nest_file).model_dump(mode="json")


@router.put("", response_model=NestBoxResponse)
async def update_box(
        request: Request,
        box_id: Optional[int] = Query(None, alias="boxId"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    box_id = deps.require_id(box_id, "Falta el id de la cajita")
    box_in = await _json_body(request, NestBoxUpdate)
    return await ctx.nest.update_box(db, box_id, box_in, identity)


@router.delete("", response_model=StatusMessage)
async def delete_from_nest(
        box_id: Optional[int] = Query(None, alias="boxId"),
        file_id: Optional[int] = Query(None, alias="fileId"),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    if file_id is not None:
        await ctx.nest.delete_file(db, file_id, identity)
        return {"message": "Archivo eliminado"}
    if box_id is not None:
        await ctx.nest.delete_box(db, box_id, identity)
        return {"message": "Cajita eliminada"}
    raise ValidationError("Falta boxId o fileId")
