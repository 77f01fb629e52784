"""Dictionary lookup schemas."""

from typing import Optional

from .base import CamelModel


class WordDefinition(CamelModel):
    """Up to three short definitions of a word in one language."""

    word: str
    definitions: list[str]
    language: str
    etymology: Optional[str] = None
    pronunciation: Optional[str] = None
