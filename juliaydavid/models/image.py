# juliaydavid/models/image.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.sql import func

from juliaydavid.db.base import Base


class Image(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)

    # Blob reference: public URL plus the provider key needed to delete it
    url = Column(String(512), nullable=False)
    blob_id = Column(String(255), nullable=False)
    blob_backend = Column(String(20), nullable=False)

    description = Column(Text, nullable=True)
    uploaded_by = Column(String(50), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
