# juliaydavid/services/auth.py
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.core.errors import AuthError, ValidationError
from juliaydavid.db.store import Store
from juliaydavid.models.user import User
from juliaydavid.schemas.auth import LoginRequest, LoginResponse
from juliaydavid.security.hashing import PasswordHasher
from juliaydavid.security.jwt import TokenService

logger = logging.getLogger(__name__)


class AuthController:
    """
    Username/password login against the users table.

    There is no fallback credential path: if the users table cannot be
    read, login fails with a StoreError (500).
    """

    def __init__(self, store: Store, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def login(self, db: AsyncSession, payload: LoginRequest) -> LoginResponse:
        if not payload.username or not payload.password:
            raise ValidationError("Usuario y contraseña requeridos")

        result = await self.store.execute(db, select(User).where(User.username == payload.username))
        user = result.scalars().first()

        if user is None or not self.hasher.verify(payload.password, user.password_hash):
            logger.info("Rejected login for %r", payload.username)
            raise AuthError("Credenciales incorrectas")

        token = self.tokens.create_access_token(user.id, user.username)
        logger.info("User %s logged in", user.username)
        return LoginResponse(token=token, username=user.username)
