# juliaydavid/schemas/calendar.py
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, field_validator


class CalendarEventBase(BaseModel):
    title: Optional[str] = None
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    # "event"/"appointment", or the Spanish "evento"/"cita"
    type: Optional[str] = None

    @field_validator("event_time", mode="before")
    @classmethod
    def blank_time_is_all_day(cls, v):
        # The calendar form posts "" when no time is picked
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CalendarEventCreate(CalendarEventBase):
    pass


class CalendarEventUpdate(CalendarEventBase):
    pass


class CalendarEventResponse(BaseModel):
    id: int
    title: str
    event_date: date
    event_time: Optional[time]
    type: str
    user_id: Optional[int]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
