# juliaydavid/services/messages.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.models.message import Message
from juliaydavid.schemas.message import MessageCreate
from juliaydavid.security.jwt import Identity
from juliaydavid.security.policy import Action
from juliaydavid.services.base import ResourceController, require_text


class MessageController(ResourceController):
    """Guestbook. Only the couple can post; everyone can read."""

    async def list(self, db: AsyncSession, limit: int = 100):
        result = await self.store.execute(
            db,
            select(Message)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit),
        )
        return result.scalars().all()

    async def create(self, db: AsyncSession, payload: MessageCreate, identity: Identity) -> Message:
        self.policy.require(identity, Action.CREATE, "No tienes permisos para escribir mensajes")
        text = require_text(payload.text, "El texto del mensaje no puede estar vacío").strip()

        async with self.store.transaction(db):
            message = Message(user_id=identity.user_id, text=text)
            db.add(message)
            await db.flush()
            # Re-read with the author joined so the response carries the username
            result = await self.store.execute(
                db,
                select(Message)
                .where(Message.id == message.id)
                .execution_options(populate_existing=True),
            )
            message = result.scalar_one()
        return message

    async def delete(self, db: AsyncSession, message_id: int, identity: Identity) -> None:
        self.policy.require(identity, Action.DELETE, "No tienes permisos para eliminar mensajes")
        message = await self._get_or_404(db, Message, message_id, "Mensaje no encontrado")
        await self._delete(db, message)
