"""EPUB Parser - Turn an uploaded EPUB into a reader ``Book``."""

import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import Optional

import ebooklib
from ebooklib import epub
from bs4 import BeautifulSoup

from app.core.errors import ParseError
from app.models.database.base import utcnow
from app.models.schemas.book import Book, Section

logger = logging.getLogger(__name__)

INVALID_EPUB_MESSAGE = "Invalid EPUB: Could not parse book structure."

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(text: str) -> int:
    """Count non-empty whitespace-delimited tokens."""
    return len(text.split())


class EPUBParser:
    """Parse EPUB files and extract reader sections in spine order."""

    # Heading tags searched (in document order) for a section title
    TITLE_SELECTOR = "h1, h2, h3"

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)
        try:
            self.book = epub.read_epub(str(self.file_path), options={"ignore_ncx": True})
        except Exception as e:
            # ebooklib surfaces broken packages as anything from BadZipFile
            # to AttributeError on a missing <metadata> or <spine>
            logger.info("EPUB reader rejected %s: %s", self.file_path.name, e)
            raise ParseError(INVALID_EPUB_MESSAGE) from e

        if not self.book.metadata or not self.book.spine:
            raise ParseError(INVALID_EPUB_MESSAGE)

    @classmethod
    def from_bytes(cls, file_bytes: bytes) -> "EPUBParser":
        """Parse an in-memory EPUB.

        ebooklib reads from a path, so the bytes go through a temporary file.
        """
        fd, temp_name = tempfile.mkstemp(suffix=".epub")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(file_bytes)
            return cls(temp_name)
        finally:
            Path(temp_name).unlink(missing_ok=True)

    def get_metadata(self) -> dict:
        """Extract title and author, with reader defaults."""
        metadata = {"title": "Unknown Title", "author": "Unknown Author"}

        title = self.book.get_metadata("DC", "title")
        if title and title[0][0]:
            metadata["title"] = title[0][0]

        creator = self.book.get_metadata("DC", "creator")
        if creator and creator[0][0]:
            metadata["author"] = creator[0][0]

        return metadata

    def flow(self) -> list[Optional[epub.EpubItem]]:
        """Spine items in reading order.

        Entries whose manifest item is missing or is not an XHTML document
        are returned as None so positional fallbacks stay aligned with the
        spine.
        """
        items = []
        for entry in self.book.spine:
            idref = entry[0] if isinstance(entry, tuple) else entry
            item = self.book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                items.append(None)
            else:
                items.append(item)
        return items

    def extract_sections(self) -> list[Section]:
        """Extract all non-empty sections.

        A section that fails to parse is logged and skipped; the rest of
        the book is still returned.
        """
        sections = []

        for index, item in enumerate(self.flow()):
            if item is None:
                continue

            try:
                section = self._extract_section(item, index)
            except Exception as e:
                logger.warning(
                    "Skipping section %d (%s) of %s: %s",
                    index, item.get_name(), self.file_path.name, e,
                )
                continue

            if section is not None and section.word_count > 0:
                sections.append(section)

        return sections

    def _extract_section(self, item: epub.EpubItem, index: int) -> Optional[Section]:
        # Raw markup from the package; get_content() re-renders it through
        # ebooklib's template and drops text sitting directly in <body>
        markup = item.content
        if not markup:
            return None

        soup = BeautifulSoup(markup, "lxml")

        heading = soup.select_one(self.TITLE_SELECTOR)
        title = heading.get_text().strip() if heading else ""

        body = soup.find("body") or soup
        content = collapse_whitespace(body.get_text())

        return Section(
            id=item.get_id() or f"section-{index}",
            title=title or f"Section {index + 1}",
            content=content,
            word_count=count_words(content),
        )


def generate_book_id() -> str:
    """Time-based book identifier (milliseconds since the epoch)."""
    return str(int(time.time() * 1000))


def ingest_epub(file_bytes: bytes, file_name: str) -> Book:
    """Convert raw EPUB bytes into a ``Book``.

    Pure transform: nothing is persisted.

    Args:
        file_bytes: Raw EPUB file content
        file_name: Original upload file name

    Returns:
        Book with non-empty sections in spine order

    Raises:
        ParseError: If the file is not a readable EPUB or lacks
            metadata or a spine
    """
    parser = EPUBParser.from_bytes(file_bytes)
    metadata = parser.get_metadata()
    sections = parser.extract_sections()

    book = Book(
        id=generate_book_id(),
        title=metadata["title"],
        author=metadata["author"],
        sections=sections,
        total_words=sum(section.word_count for section in sections),
        file_name=file_name,
        date_added=utcnow(),
        completed=False,
    )

    logger.info(
        "Ingested %s: %d sections, %d words",
        file_name, len(book.sections), book.total_words,
    )
    return book
