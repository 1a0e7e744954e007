# juliaydavid/api/endpoints/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.schemas.auth import LoginRequest, LoginResponse

router = APIRouter()


@router.post("", response_model=LoginResponse)
async def login(
        credentials: LoginRequest,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    return await ctx.auth.login(db, credentials)
