# juliaydavid/schemas/nest.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class NestBoxCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class NestBoxUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class NestFilePreview(BaseModel):
    url: str
    mime_type: Optional[str]
    name: str

    class Config:
        from_attributes = True


class NestFileResponse(BaseModel):
    id: int
    box_id: int
    name: str
    url: str
    mime_type: Optional[str]
    user_id: Optional[int]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class NestBoxResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    user_id: Optional[int]
    created_at: Optional[datetime]
    preview_files: List[NestFilePreview] = []

    class Config:
        from_attributes = True
