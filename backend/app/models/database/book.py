"""Book metadata database model."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.models.database.base import Base, utcnow


class BookRecord(Base):
    """Library summary for one uploaded book.

    The full book body lives in the blob store at ``storage_path``; this
    record only carries what a library listing needs. There is no unique
    constraint on (user_id, book_id), so lookups by book always handle
    more than one match.
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    book_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    total_words: Mapped[int] = mapped_column(Integer, default=0)

    # Blob addressing
    storage_path: Mapped[str] = mapped_column(String(500), nullable=False)
    download_url: Mapped[str] = mapped_column(Text, nullable=False)

    # Reading progress
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    current_section: Mapped[Optional[int]] = mapped_column(Integer)

    # Timestamps
    date_added: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
