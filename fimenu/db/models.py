"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                         stored_entries                           │
    ├─────────────────────────────────────────────────────────────────┤
    │ key (VARCHAR, PK)            e.g. "fi_products_v1"              │
    │ value (TEXT, NOT NULL)       plain JSON text                    │
    │ updated_at (DATETIME)                                           │
    └─────────────────────────────────────────────────────────────────┘

One row per key; a write replaces the previous value.

=============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text, func

from fimenu.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredEntry(Base):
    """Single key-value entry of the persisted admin state."""

    __tablename__ = "stored_entries"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<StoredEntry(key={self.key!r}, size={len(self.value or '')})>"
