"""Book, section and library metadata schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Section(CamelModel):
    """One chapter-like unit of a book, in reading order."""

    id: str
    title: str
    content: str
    word_count: int


class Book(CamelModel):
    """Full book document, stored as a JSON blob."""

    id: str
    title: str = "Unknown Title"
    author: str = "Unknown Author"
    sections: list[Section] = Field(default_factory=list)
    total_words: int = 0
    file_name: str
    date_added: datetime
    completed: bool = False


class BookMetadataCreate(CamelModel):
    """Fields written alongside a stored blob."""

    title: str
    author: str
    file_name: str
    total_words: int
    storage_path: str
    download_url: str
    date_added: Optional[datetime] = None
    completed: bool = False


class BookMetadata(CamelModel):
    """Library listing record."""

    id: str
    book_id: str
    user_id: str
    title: str
    author: str
    file_name: str
    total_words: int
    storage_path: str
    download_url: str
    date_added: datetime
    completed: bool = False
    current_section: Optional[int] = None


class BookMetadataUpdate(CamelModel):
    """Partial update; only fields that were set are applied."""

    title: Optional[str] = None
    author: Optional[str] = None
    completed: Optional[bool] = None
    current_section: Optional[int] = None


class StoredBlob(CamelModel):
    """Where a blob landed and how to fetch it back."""

    storage_path: str
    download_url: str
