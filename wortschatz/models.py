"""
SQLAlchemy models.

The app keeps client state in named slots, one JSON document per slot.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
