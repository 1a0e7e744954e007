# juliaydavid/schemas/image.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ImageUpdate(BaseModel):
    description: Optional[str] = None


class ImageResponse(BaseModel):
    id: int
    url: str
    description: Optional[str]
    uploaded_by: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
