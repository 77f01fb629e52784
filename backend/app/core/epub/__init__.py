"""EPUB processing package."""

from .parser import (
    EPUBParser,
    INVALID_EPUB_MESSAGE,
    collapse_whitespace,
    count_words,
    generate_book_id,
    ingest_epub,
)

__all__ = [
    "EPUBParser",
    "INVALID_EPUB_MESSAGE",
    "collapse_whitespace",
    "count_words",
    "generate_book_id",
    "ingest_epub",
]
