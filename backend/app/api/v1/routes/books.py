"""Book library API routes."""

import asyncio
import logging
import re
import uuid
from pathlib import Path

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.epub import ingest_epub
from app.core.errors import ParseError, ReaderError
from app.core.library.service import LibraryService
from app.models.schemas.book import (
    Book,
    BookMetadata,
    BookMetadataCreate,
    BookMetadataUpdate,
)
from app.models.schemas.transcript import TranscriptImportRequest
from app.api.dependencies import CurrentUser, Library, Transcripts

logger = logging.getLogger(__name__)

router = APIRouter()


def secure_filename(filename: str) -> str:
    """Sanitize a filename to prevent path traversal attacks.

    - Removes directory components (path separators)
    - Removes potentially dangerous characters
    - Limits length to prevent filesystem issues
    - Falls back to a UUID if filename becomes empty
    """
    # Get only the filename, not any directory components
    filename = Path(filename.replace("\\", "/")).name

    # Remove any characters that aren't alphanumeric, dash, underscore, or dot
    # Allow Unicode letters for international filenames
    filename = re.sub(r'[^\w\-.]', '_', filename)

    # Remove leading/trailing dots and spaces
    filename = filename.strip('. ')

    # Collapse multiple underscores/dots
    filename = re.sub(r'[_.]+', lambda m: m.group(0)[0], filename)

    # Limit length (preserve extension)
    max_length = 200
    if len(filename) > max_length:
        name_part = Path(filename).stem[:max_length - 10]
        ext_part = Path(filename).suffix[:10]
        filename = f"{name_part}{ext_part}"

    # If filename is empty or just an extension, generate a safe name
    if not filename or filename.startswith('.'):
        filename = f"upload_{uuid.uuid4().hex[:8]}.epub"

    return filename


def _read_upload_with_limit(file_obj, max_size: int) -> bytes:
    """Read an uploaded file into memory, enforcing max size during the read.

    This protects against clients that lie about Content-Length.
    """
    chunk_size = 1024 * 1024  # 1MB chunks
    chunks = []
    total_read = 0

    while True:
        chunk = file_obj.read(chunk_size)
        if not chunk:
            break
        total_read += len(chunk)
        if total_read > max_size:
            raise ReaderError(
                f"File exceeds maximum size of {max_size // (1024 * 1024)}MB",
                status_code=413,
            )
        chunks.append(chunk)

    return b"".join(chunks)


def _error_response(error: ReaderError) -> JSONResponse:
    return JSONResponse({"error": error.message}, status_code=error.status_code)


async def _add_to_library(library: LibraryService, user_id: str, book: Book) -> BookMetadata:
    """Store a converted book and record it in the user's library."""
    stored = await library.store_book_blob(user_id, book.id, book)
    return await library.save_metadata(
        user_id,
        book.id,
        BookMetadataCreate(
            title=book.title,
            author=book.author,
            file_name=book.file_name,
            total_words=book.total_words,
            storage_path=stored.storage_path,
            download_url=stored.download_url,
            date_added=book.date_added,
            completed=False,
        ),
    )


@router.post("/books/upload")
async def upload_book(
    user_id: CurrentUser,
    library: Library,
    file: UploadFile = File(...),
):
    """Upload an EPUB, convert it to a book and add it to the library.

    Failures come back as ``{"error": message}`` rather than raising.
    """
    if not file.filename or not file.filename.lower().endswith(".epub"):
        return _error_response(ParseError("Only EPUB files are allowed"))

    max_size = settings.max_upload_size_mb * 1024 * 1024  # Convert to bytes
    if file.size and file.size > max_size:
        return _error_response(ReaderError(
            f"File too large. Maximum size is {settings.max_upload_size_mb}MB",
            status_code=413,
        ))

    loop = asyncio.get_running_loop()

    try:
        data = await loop.run_in_executor(None, _read_upload_with_limit, file.file, max_size)

        # Parsing is CPU-bound; keep it off the event loop
        book = await loop.run_in_executor(None, ingest_epub, data, file.filename)

        await library.store_epub_file(user_id, secure_filename(file.filename), data)
        metadata = await _add_to_library(library, user_id, book)

    except ReaderError as e:
        logger.warning("Upload of %s rejected: %s", file.filename, e.message)
        return _error_response(e)
    except Exception as e:
        logger.exception("Upload of %s failed", file.filename)
        return JSONResponse({"error": f"Processing failed: {e}"}, status_code=500)

    return {"success": True, "book": metadata.model_dump(mode="json", by_alias=True)}


@router.post("/books/transcript")
async def import_transcript(
    request: TranscriptImportRequest,
    user_id: CurrentUser,
    library: Library,
    transcripts: Transcripts,
):
    """Add a video transcript to the library as a book of 2000-word parts.

    Answers like an upload: ``{"success": true, "book": ...}`` or
    ``{"error": message}``.
    """
    try:
        book = await transcripts.import_transcript(
            request.url, request.transcript, request.title
        )
        metadata = await _add_to_library(library, user_id, book)
    except ReaderError as e:
        logger.warning("Transcript import of %s rejected: %s", request.url, e.message)
        return _error_response(e)
    except Exception as e:
        logger.exception("Transcript import of %s failed", request.url)
        return JSONResponse({"error": f"Processing failed: {e}"}, status_code=500)

    return {"success": True, "book": metadata.model_dump(mode="json", by_alias=True)}


@router.get("/books", response_model=list[BookMetadata])
async def list_books(user_id: CurrentUser, library: Library):
    """List the user's library, newest first."""
    return await library.list_metadata(user_id)


@router.get("/books/{book_id}", response_model=Book)
async def get_book(book_id: str, user_id: CurrentUser, library: Library):
    """Get a full book, sections included."""
    metadata = await library.get_metadata(user_id, book_id)
    return await library.load_book(metadata.storage_path)


@router.patch("/books/{book_id}")
async def update_book(
    book_id: str,
    changes: BookMetadataUpdate,
    user_id: CurrentUser,
    library: Library,
):
    """Update reading progress or display fields of a book."""
    await library.update_metadata(user_id, book_id, changes)
    return {"status": "updated"}


@router.delete("/books/{book_id}")
async def delete_book(book_id: str, user_id: CurrentUser, library: Library):
    """Delete a book and its stored document."""
    metadata = await library.get_metadata(user_id, book_id)
    await library.delete_book(book_id, metadata.storage_path)
    return {"status": "deleted"}
