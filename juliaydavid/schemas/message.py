# juliaydavid/schemas/message.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# The author always comes from the session token, never from the body
class MessageCreate(BaseModel):
    text: Optional[str] = None


class MessageResponse(BaseModel):
    id: int
    text: str
    username: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
