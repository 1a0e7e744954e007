# juliaydavid/api/deps.py
from typing import AsyncIterator, Optional

from fastapi import Depends, Request, UploadFile
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.core.config import get_settings
from juliaydavid.core.context import AppContext
from juliaydavid.core.errors import AuthError, ValidationError
from juliaydavid.security.jwt import Identity
from juliaydavid.services.base import IncomingFile

# auto_error=False: a missing header becomes our own 401 {"error": ...}
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{get_settings().API_PREFIX}/login",
    auto_error=False,
)


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


async def get_db(ctx: AppContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    async with ctx.store.session() as session:
        yield session


async def get_current_identity(
        ctx: AppContext = Depends(get_context),
        token: Optional[str] = Depends(reusable_oauth2),
) -> Identity:
    if not token:
        raise AuthError("No autenticado")
    return ctx.tokens.verify(token)


def require_id(row_id: Optional[int], message: str = "Falta el id") -> int:
    """For the ``?id=`` variants of update and delete."""
    if row_id is None:
        raise ValidationError(message)
    return row_id


async def read_upload(upload: Optional[UploadFile], max_bytes: int) -> Optional[IncomingFile]:
    # One byte past the limit is enough to reject an oversize file
    if upload is None:
        return None
    data = await upload.read(max_bytes + 1)
    return IncomingFile(filename=upload.filename, content_type=upload.content_type, data=data)
