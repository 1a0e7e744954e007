# juliaydavid/api/endpoints/content.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.schemas.content import ContentResponse, ContentUpdate
from juliaydavid.security.jwt import Identity

router = APIRouter()


@router.get("", response_model=List[ContentResponse])
async def read_content(
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    return await ctx.content.list(db)


@router.put("", response_model=ContentResponse)
async def update_content(
        content_in: ContentUpdate,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.content.upsert(db, content_in, identity)
