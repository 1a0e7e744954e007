# juliaydavid/schemas/content.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ContentUpdate(BaseModel):
    section: Optional[str] = None
    text: Optional[str] = None


class ContentResponse(BaseModel):
    section: str
    text: Optional[str]
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
