# juliaydavid/models/nest.py
"""
The "nidito": named boxes holding uploaded files.

Removing a box removes its file rows (ON DELETE CASCADE plus ORM cascade);
the blobs behind those rows are purged by NestController.delete_box.
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from juliaydavid.db.base import Base


class NestBox(Base):
    __tablename__ = "nest_boxes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    files = relationship(
        "NestFile",
        back_populates="box",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [NestFile.created_at.desc(), NestFile.id.desc()],
    )


class NestFile(Base):
    __tablename__ = "nest_files"

    id = Column(Integer, primary_key=True, index=True)
    box_id = Column(
        Integer,
        ForeignKey("nest_boxes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)

    url = Column(String(512), nullable=False)
    blob_id = Column(String(255), nullable=False)
    blob_backend = Column(String(20), nullable=False)
    mime_type = Column(String(100), nullable=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    box = relationship("NestBox", back_populates="files")
