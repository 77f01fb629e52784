"""Vocabulary database model."""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.models.database.base import Base, utcnow
from app.models.database.enums import WordType


class UserWord(Base):
    """One classified word in a user's vocabulary.

    The word itself is the key, compared case-sensitively.
    """

    __tablename__ = "user_words"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    word: Mapped[str] = mapped_column(String(255), primary_key=True)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WordType.TRACKING.value
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )
