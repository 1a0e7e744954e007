# juliaydavid/models/calendar.py
import enum

from sqlalchemy import Column, Date, Integer, String, Time, ForeignKey, DateTime
from sqlalchemy.sql import func

from juliaydavid.db.base import Base


class EventType(str, enum.Enum):
    EVENT = "event"
    APPOINTMENT = "appointment"

    @classmethod
    def parse(cls, value: str) -> "EventType":
        """Accept the canonical names and the Spanish ones the frontend sends."""
        key = value.strip().lower()
        key = {"evento": "event", "cita": "appointment"}.get(key, key)
        return cls(key)


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    # NULL means all-day
    event_time = Column(Time, nullable=True)
    type = Column(String(20), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
