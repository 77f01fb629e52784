"""Path-addressed blob storage.

Blobs live under a single root directory:

storage/
├── books/{user_id}/{book_id}.json   # Full book documents
└── epubs/{user_id}/{file_name}      # Raw uploaded EPUB files

Each blob is reachable over HTTP through a signed download URL
(``/api/v1/blobs/{path}?token=...``). URLs do not expire.
"""

import hashlib
import hmac
import logging
import secrets
from pathlib import Path, PurePosixPath
from urllib.parse import quote

logger = logging.getLogger(__name__)


class BlobStore:
    """Manage blob files under one storage root."""

    # Standard top-level directories
    BOOKS_DIR = "books"
    EPUBS_DIR = "epubs"

    # Route serving blobs back to clients
    DOWNLOAD_ROUTE = "/api/v1/blobs"

    def __init__(self, root: Path | str, public_base_url: str, signing_key: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")
        self._signing_key = signing_key.encode("utf-8")

    @classmethod
    def book_path(cls, user_id: str, book_id: str) -> str:
        """Get the blob path of a stored book document.

        Args:
            user_id: Owner of the book
            book_id: Book identifier

        Returns:
            Relative blob path
        """
        return f"{cls.BOOKS_DIR}/{user_id}/{book_id}.json"

    @classmethod
    def epub_path(cls, user_id: str, file_name: str) -> str:
        """Get the blob path of a raw uploaded EPUB.

        Args:
            user_id: Owner of the upload
            file_name: Sanitized file name

        Returns:
            Relative blob path
        """
        return f"{cls.EPUBS_DIR}/{user_id}/{file_name}"

    def resolve(self, path: str) -> Path:
        """Map a blob path to a file under the root.

        Raises:
            ValueError: If the path is absolute or escapes the root
        """
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise ValueError(f"Invalid blob path: {path!r}")
        return self.root.joinpath(*relative.parts)

    def write(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug("Wrote blob %s (%d bytes)", path, len(data))

    def read(self, path: str) -> bytes:
        """Read a blob.

        Raises:
            FileNotFoundError: If nothing is stored at ``path``
        """
        return self.resolve(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def delete(self, path: str) -> None:
        """Delete a blob. Deleting a missing blob is a no-op."""
        self.resolve(path).unlink(missing_ok=True)
        logger.debug("Deleted blob %s", path)

    def sign(self, path: str) -> str:
        """Compute the download token for a blob path."""
        return hmac.new(self._signing_key, path.encode("utf-8"), hashlib.sha256).hexdigest()

    def verify(self, path: str, token: str) -> bool:
        # Constant-time comparison
        return secrets.compare_digest(self.sign(path), token)

    def download_url(self, path: str) -> str:
        """Build the permanent signed URL for a blob."""
        return (
            f"{self.public_base_url}{self.DOWNLOAD_ROUTE}/{quote(path)}"
            f"?token={self.sign(path)}"
        )
