# juliaydavid/api/endpoints/calendar.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from juliaydavid.api import deps
from juliaydavid.core.context import AppContext
from juliaydavid.schemas.calendar import CalendarEventCreate, CalendarEventResponse, CalendarEventUpdate
from juliaydavid.schemas.common import StatusMessage
from juliaydavid.security.jwt import Identity

router = APIRouter()

MISSING_ID = "Falta el id del evento"


@router.get("", response_model=List[CalendarEventResponse])
async def read_events(
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
):
    return await ctx.calendar.list(db)


@router.post("", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
        event_in: CalendarEventCreate,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.calendar.create(db, event_in, identity)


@router.put("", response_model=CalendarEventResponse)
async def update_event_by_query(
        event_in: CalendarEventUpdate,
        id: Optional[int] = Query(None),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.calendar.update(db, deps.require_id(id, MISSING_ID), event_in, identity)


@router.put("/{event_id}", response_model=CalendarEventResponse)
async def update_event(
        event_id: int,
        event_in: CalendarEventUpdate,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    return await ctx.calendar.update(db, event_id, event_in, identity)


@router.delete("", response_model=StatusMessage)
async def delete_event_by_query(
        id: Optional[int] = Query(None),
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.calendar.delete(db, deps.require_id(id, MISSING_ID), identity)
    return {"message": "Evento eliminado con éxito"}


@router.delete("/{event_id}", response_model=StatusMessage)
async def delete_event(
        event_id: int,
        db: AsyncSession = Depends(deps.get_db),
        ctx: AppContext = Depends(deps.get_context),
        identity: Identity = Depends(deps.get_current_identity),
):
    await ctx.calendar.delete(db, event_id, identity)
    return {"message": "Evento eliminado con éxito"}
