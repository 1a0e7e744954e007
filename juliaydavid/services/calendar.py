# juliaydavid/services/calendar.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.core.errors import ValidationError
from juliaydavid.models.calendar import CalendarEvent, EventType
from juliaydavid.schemas.calendar import CalendarEventCreate, CalendarEventUpdate
from juliaydavid.security.jwt import Identity
from juliaydavid.security.policy import Action
from juliaydavid.services.base import ResourceController, require_text

MISSING_FIELDS = "Faltan campos obligatorios (título, fecha, tipo)"


def parse_event_type(value: str) -> str:
    try:
        return EventType.parse(value).value
    except ValueError:
        raise ValidationError("Tipo de evento no válido (event, appointment)")


class CalendarController(ResourceController):
    async def list(self, db: AsyncSession):
        # Date order; all-day events (no time) open their day
        result = await self.store.execute(
            db,
            select(CalendarEvent).order_by(
                CalendarEvent.event_date.asc(),
                CalendarEvent.event_time.asc().nulls_first(),
                CalendarEvent.id.asc(),
            ),
        )
        return result.scalars().all()

    async def create(self, db: AsyncSession, payload: CalendarEventCreate, identity: Identity) -> CalendarEvent:
        self.policy.require(identity, Action.CREATE, "No tienes permisos para crear eventos")
        title = require_text(payload.title, MISSING_FIELDS).strip()
        event_type = require_text(payload.type, MISSING_FIELDS)
        if payload.event_date is None:
            raise ValidationError(MISSING_FIELDS)

        event = CalendarEvent(
            title=title,
            event_date=payload.event_date,
            event_time=payload.event_time,
            type=parse_event_type(event_type),
            user_id=identity.user_id,
        )
        return await self._insert(db, event)

    async def update(
        self,
        db: AsyncSession,
        event_id: int,
        payload: CalendarEventUpdate,
        identity: Identity,
    ) -> CalendarEvent:
        self.policy.require(identity, Action.UPDATE, "No tienes permisos para editar eventos")
        update_data = payload.model_dump(exclude_unset=True)
        if "title" in update_data:
            update_data["title"] = require_text(update_data["title"], MISSING_FIELDS).strip()
        if "type" in update_data:
            update_data["type"] = parse_event_type(require_text(update_data["type"], MISSING_FIELDS))
        if "event_date" in update_data and update_data["event_date"] is None:
            raise ValidationError(MISSING_FIELDS)

        event = await self._get_or_404(db, CalendarEvent, event_id, "Evento no encontrado")
        for key, value in update_data.items():
            setattr(event, key, value)
        return await self._save(db, event)

    async def delete(self, db: AsyncSession, event_id: int, identity: Identity) -> None:
        self.policy.require(identity, Action.DELETE, "No tienes permisos para eliminar eventos")
        event = await self._get_or_404(db, CalendarEvent, event_id, "Evento no encontrado")
        await self._delete(db, event)
