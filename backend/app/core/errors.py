"""Error taxonomy shared by services and routes.

Every error carries the HTTP status it should surface with. Routes never
let these escape as unhandled faults: a single exception handler renders
them as ``{"error": message}``.
"""

from typing import Optional


class ReaderError(Exception):
    """Base class for all expected application failures."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ParseError(ReaderError):
    """Uploaded file is not a usable EPUB."""

    status_code = 400


class AuthError(ReaderError):
    """No authenticated user for an operation that needs one."""

    status_code = 401


class NotFoundError(ReaderError):
    """Referenced book, metadata record or blob does not exist."""

    status_code = 404


class FetchError(ReaderError):
    """Book blob could not be fetched from its download URL."""

    status_code = 502


class UpstreamError(ReaderError):
    """A third-party API answered with a non-success status."""

    status_code = 502


class StoreError(ReaderError):
    """Document store or blob store operation failed."""

    status_code = 500
