"""Vocabulary, saved sentence and reading session schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.database.enums import WordType

from .base import CamelModel


class WordTypeRequest(CamelModel):
    """Body for classifying a single word."""

    type: WordType = WordType.TRACKING


class WordBatchRequest(CamelModel):
    """Body for classifying many words to the same type at once."""

    words: list[str] = Field(min_length=1)
    type: WordType = WordType.TRACKING


class SentenceCreate(CamelModel):
    text: str = Field(min_length=1)


class SentenceOut(CamelModel):
    id: str
    text: str
    created_at: datetime


class ReadingSessionCreate(CamelModel):
    book_id: Optional[str] = None
    book_title: str = ""
    section_id: str
    section_title: str = ""
    word_count: int = 0


class ReadingSessionOut(ReadingSessionCreate):
    id: str
    user_id: str
    timestamp: datetime
