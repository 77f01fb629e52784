"""Reading session database model."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.models.database.base import Base, utcnow


class ReadingSession(Base):
    """A page or section marked as read."""

    __tablename__ = "reading_sessions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    # Older sessions were recorded without a book
    book_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)

    section_id: Mapped[str] = mapped_column(String(128), nullable=False)
    section_title: Mapped[str] = mapped_column(String(500), default="")
    book_title: Mapped[str] = mapped_column(String(500), default="")
    word_count: Mapped[int] = mapped_column(Integer, default=0)

    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
