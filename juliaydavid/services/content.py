# juliaydavid/services/content.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from juliaydavid.models.content import ContentSection
from juliaydavid.schemas.content import ContentUpdate
from juliaydavid.security.jwt import Identity
from juliaydavid.security.policy import Action
from juliaydavid.services.base import ResourceController, require_text


class ContentController(ResourceController):
    async def list(self, db: AsyncSession):
        result = await self.store.execute(db, select(ContentSection).order_by(ContentSection.section))
        return result.scalars().all()

    async def upsert(self, db: AsyncSession, payload: ContentUpdate, identity: Identity) -> ContentSection:
        """Insert the section or replace its text; last writer wins."""
        self.policy.require(identity, Action.UPDATE, "No tienes permisos para editar el contenido")
        section = require_text(payload.section, "Sección y texto son requeridos").strip()
        text = require_text(payload.text, "Sección y texto son requeridos")

        statement = self.store.upsert(
            ContentSection,
            values={"section": section, "text": text, "updated_by": identity.user_id},
            key_columns=["section"],
            update_values={"text": text, "updated_by": identity.user_id, "updated_at": func.now()},
        )
        async with self.store.transaction(db):
            await self.store.execute(db, statement)
            result = await self.store.execute(
                db,
                select(ContentSection)
                .where(ContentSection.section == section)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one()
        return row
