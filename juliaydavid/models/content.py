# juliaydavid/models/content.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.sql import func

from juliaydavid.db.base import Base


class ContentSection(Base):
    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True)

    # "historia", "planes", ... ; upserts are keyed on this column
    section = Column(String(50), unique=True, nullable=False)
    text = Column(Text, nullable=True)

    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
