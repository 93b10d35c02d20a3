"""
SQLAlchemy ORM models for persistent storage.

Progress is stored as opaque string values in a single key-value table;
the schema of the values belongs to dexkeeper.models.progress.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class KeyValueDB(Base):
    """
    One stored key-value pair.

    Progress records use keys like "pokemon_25"; preferences use their own
    fixed keys (e.g., "music_volume").
    """

    __tablename__ = "key_value_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<KeyValueDB(key={self.key})>"
