"""Preference ORM — durable string-keyed string blobs.

Invariants:
    - key is the primary key; one row per stored blob
    - value is opaque text (the services layer owns the encoding)

Design Decisions:
    - Generic key/value table instead of bookmark rows: the stored format stays
      the two JSON blobs shared with other clients of the preference store
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from geobookmarks.db.base import Base


class Preference(Base):
    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
