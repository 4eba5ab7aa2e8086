"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

The service persists a handful of small records, each under a fixed,
well-known key. They all share one table:

    ┌─────────────────────────────────────────────────────────────────┐
    │                        storage_slots                            │
    ├─────────────────────────────────────────────────────────────────┤
    │ key (VARCHAR, PK)          e.g. @furniture_visualizer/...       │
    │ value (TEXT, NOT NULL)     JSON document                        │
    │ updated_at (DATETIME)      last write                           │
    └─────────────────────────────────────────────────────────────────┘

Well-known keys are listed in furniture_visualizer.storage.StorageKeys.

==============================================================================
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from furniture_visualizer.db.database import Base


class StorageSlot(Base):
    """One persisted JSON record addressed by its slot key."""

    __tablename__ = "storage_slots"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<StorageSlot(key={self.key!r})>"
