"""Library persistence: book blobs plus their metadata records.

A stored book is two things: the full ``Book`` document serialized to JSON
in the blob store, and a lightweight ``BookRecord`` in the document store
that the library listing reads. The two sides are written and deleted
independently and never rolled back together; both deletes are idempotent,
so a failed delete is fixed by retrying it.
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.core.context import ServiceContext
from app.core.errors import FetchError, NotFoundError, StoreError
from app.models.database.base import utcnow
from app.models.database.book import BookRecord
from app.models.schemas.book import (
    Book,
    BookMetadata,
    BookMetadataCreate,
    BookMetadataUpdate,
    StoredBlob,
)

logger = logging.getLogger(__name__)


class LibraryService:
    """Store, list, update and delete a user's books."""

    def __init__(self, context: ServiceContext):
        self.context = context
        self.blob_store = context.blob_store

    # =========================================================================
    # Blob side
    # =========================================================================

    async def store_book_blob(self, user_id: str, book_id: str, book: Book) -> StoredBlob:
        """Serialize a book and write it under ``books/{user_id}/{book_id}.json``."""
        path = self.blob_store.book_path(user_id, book_id)
        payload = book.model_dump_json(by_alias=True).encode("utf-8")
        await self._write_blob(path, payload)

        logger.info("Stored book blob %s for user %s", book_id, user_id)
        return StoredBlob(storage_path=path, download_url=self.blob_store.download_url(path))

    async def store_epub_file(self, user_id: str, file_name: str, data: bytes) -> StoredBlob:
        """Keep the raw upload under ``epubs/{user_id}/{file_name}``.

        A later upload with the same file name replaces the earlier one.
        """
        path = self.blob_store.epub_path(user_id, file_name)
        await self._write_blob(path, data)
        return StoredBlob(storage_path=path, download_url=self.blob_store.download_url(path))

    async def load_book(self, storage_path: str) -> Book:
        """Read a stored book straight from the blob store."""
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, self.blob_store.read, storage_path)
        except (FileNotFoundError, ValueError) as e:
            raise NotFoundError("Book not found") from e
        except OSError as e:
            logger.error("Failed to read blob %s: %s", storage_path, e)
            raise StoreError(f"Failed to read book: {e}") from e
        return Book.model_validate_json(raw)

    async def fetch_book_blob(self, download_url: str) -> Book:
        """Fetch a stored book through its download URL.

        Raises:
            FetchError: On a non-success status, a transport failure, or a
                body that is not a book document
        """
        try:
            response = await self.context.http_client.get(download_url)
        except httpx.HTTPError as e:
            logger.error("Book fetch failed for %s: %s", download_url, e)
            raise FetchError(f"Failed to fetch book: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch book: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return Book.model_validate_json(response.content)
        except ValidationError as e:
            raise FetchError(f"Fetched blob is not a book: {e}") from e

    async def _write_blob(self, path: str, data: bytes) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.blob_store.write, path, data)
        except OSError as e:
            logger.error("Failed to write blob %s: %s", path, e)
            raise StoreError(f"Failed to store blob: {e}") from e

    # =========================================================================
    # Metadata side
    # =========================================================================

    async def save_metadata(
        self, user_id: str, book_id: str, metadata: BookMetadataCreate
    ) -> BookMetadata:
        """Create a metadata record for a stored blob.

        The record gets a fresh document id; ``date_added`` is stamped now
        unless the caller already has one.
        """
        record = BookRecord(
            user_id=user_id,
            book_id=book_id,
            title=metadata.title,
            author=metadata.author,
            file_name=metadata.file_name,
            total_words=metadata.total_words,
            storage_path=metadata.storage_path,
            download_url=metadata.download_url,
            date_added=metadata.date_added or utcnow(),
            completed=metadata.completed,
        )

        try:
            async with self.context.session_maker() as db:
                db.add(record)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to save metadata for book %s: %s", book_id, e)
            raise StoreError(f"Failed to save book metadata: {e}") from e

        logger.info("Saved metadata %s for book %s", record.id, book_id)
        return BookMetadata.model_validate(record)

    async def list_metadata(self, user_id: str) -> list[BookMetadata]:
        """All of a user's books, newest first."""
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(BookRecord)
                    .where(BookRecord.user_id == user_id)
                    .order_by(BookRecord.date_added.desc())
                )
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Failed to list books for user %s: %s", user_id, e)
            raise StoreError(f"Failed to list books: {e}") from e

        return [BookMetadata.model_validate(r) for r in records]

    async def get_metadata(self, user_id: str, book_id: str) -> BookMetadata:
        """First metadata record for ``(user_id, book_id)``.

        Raises:
            NotFoundError: If the user has no such book
        """
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(BookRecord)
                    .where(BookRecord.user_id == user_id, BookRecord.book_id == book_id)
                    .order_by(BookRecord.created_at)
                    .limit(1)
                )
                record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed to load book %s: %s", book_id, e)
            raise StoreError(f"Failed to load book: {e}") from e

        if record is None:
            raise NotFoundError("Book not found")
        return BookMetadata.model_validate(record)

    async def update_metadata(
        self, user_id: str, book_id: str, changes: BookMetadataUpdate
    ) -> None:
        """Merge a partial update into the book's metadata.

        When no record matches, nothing happens: a listing and an update
        racing against a delete is not an error.
        """
        values = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not values:
            return

        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    update(BookRecord)
                    .where(BookRecord.user_id == user_id, BookRecord.book_id == book_id)
                    .values(**values)
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update book %s: %s", book_id, e)
            raise StoreError(f"Failed to update book: {e}") from e

        if result.rowcount == 0:
            logger.info("No metadata for book %s of user %s; update skipped", book_id, user_id)

    async def delete_book(self, book_id: str, storage_path: Optional[str]) -> None:
        """Delete every metadata record for ``book_id``, then the blob."""
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    delete(BookRecord).where(BookRecord.book_id == book_id)
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to delete metadata for book %s: %s", book_id, e)
            raise StoreError(f"Failed to delete book: {e}") from e

        logger.info("Deleted %d metadata record(s) for book %s", result.rowcount, book_id)

        if storage_path:
            loop = asyncio.get_running_loop()
            try:
                await loop.run_in_executor(None, self.blob_store.delete, storage_path)
            except (OSError, ValueError) as e:
                logger.error("Failed to delete blob %s: %s", storage_path, e)
                raise StoreError(f"Failed to delete book file: {e}") from e
