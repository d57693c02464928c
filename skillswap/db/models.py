"""SQLAlchemy models backing the key-value storage port."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base


class StorageEntry(Base):
    """One serialized collection per row, keyed like the browser storage keys."""

    __tablename__ = "storage_entries"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
