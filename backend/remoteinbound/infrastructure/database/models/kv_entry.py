"""SQLAlchemy ORM model backing the local key/value store."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from remoteinbound.infrastructure.database.base import Base


class KeyValueEntryModel(Base):
    """ORM model — maps to the 'kv_entries' table.

    ``size`` holds the UTF-8 byte length of key plus value so quota checks
    can be answered with a single SUM.
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntryModel(key='{self.key}', size={self.size})>"
