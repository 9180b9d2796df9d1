"""SQLAlchemy ORM model backing the SQL storage gateway.

One row per storage key. The value is the opaque string handed to
``StorageGateway.set``; this table knows nothing about vendors.
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import TimestampMixin


class KeyValueEntry(Base, TimestampMixin):
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"KeyValueEntry(key={self.key!r})"
