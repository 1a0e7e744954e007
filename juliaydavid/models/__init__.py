# Import every model so Base.metadata knows all tables
from juliaydavid.models.user import User
from juliaydavid.models.content import ContentSection
from juliaydavid.models.image import Image
from juliaydavid.models.message import Message
from juliaydavid.models.calendar import CalendarEvent, EventType
from juliaydavid.models.nest import NestBox, NestFile

__all__ = [
    "User",
    "ContentSection",
    "Image",
    "Message",
    "CalendarEvent",
    "EventType",
    "NestBox",
    "NestFile",
]
