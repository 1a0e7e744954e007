# juliaydavid/api/endpoints/messages.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.schemas.common import StatusMessage
from juliaydavid.schemas.message import MessageCreate, MessageResponse
from juliaydavid.security.jwt import Identity

router = APIRouter()


@router.get("", response_model=List[MessageResponse])
async def read_messages(
        limit: int = Query(100, ge=1, le=500),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    return await ctx.messages.list(db, limit=limit)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
        message_in: MessageCreate,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.messages.create(db, message_in, identity)


@router.delete("", response_model=StatusMessage)
async def delete_message_by_query(
        id: Optional[int] = Query(None),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.messages.delete(db, deps.require_id(id, "Falta el id del mensaje"), identity)
    return {"message": "Mensaje eliminado"}


@router.delete("/{message_id}", response_model=StatusMessage)
async def delete_message(
        message_id: int,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.messages.delete(db, message_id, identity)
    return {"message": "Mensaje eliminado"}
