from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable
from urllib.parse import unquote

import httpx
import pytest
from ebooklib import epub

from app.api.dependencies import get_context
from app.config import Settings
from app.core.blob_storage import BlobStore
from app.core.context import ServiceContext
from app.main import create_app
from app.models.database.base import create_engine, create_session_maker, init_db

PUBLIC_HOST = "testserver"


def build_epub(
    path: Path,
    chapters: list[tuple[str, str]],
    *,
    title: str | None = "Test Book",
    author: str | None = "Test Author",
) -> bytes:
    """Write an EPUB whose spine is ``chapters`` (uid, body markup) in order."""
    book = epub.EpubBook()
    book.set_identifier("urn:test:book")
    book.set_language("en")
    if title:
        book.set_title(title)
    if author:
        book.add_author(author)

    items = []
    for uid, content in chapters:
        item = epub.EpubHtml(uid=uid, title=uid, file_name=f"{uid}.xhtml", lang="en")
        item.content = content
        book.add_item(item)
        items.append(item)

    book.toc = tuple(items)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = items

    epub.write_epub(str(path), book)
    return path.read_bytes()


def build_raw_epub(opf: str) -> bytes:
    """Zip a minimal EPUB container around a hand-written package document."""
    container = (
        '<?xml version="1.0"?>'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
        '<rootfiles><rootfile full-path="OEBPS/content.opf" '
        'media-type="application/oebps-package+xml"/></rootfiles></container>'
    )
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        zf.writestr("META-INF/container.xml", container)
        zf.writestr("OEBPS/content.opf", opf)
        zf.writestr(
            "OEBPS/c1.xhtml",
            '<html xmlns="http://www.w3.org/1999/xhtml"><body><p>Some words here</p></body></html>',
        )
    return buffer.getvalue()


@pytest.fixture
def sample_epub(tmp_path: Path) -> bytes:
    """Three spine items; the second has no text at all."""
    return build_epub(
        tmp_path / "sample.epub",
        [
            ("c1", "<h1>Chapter One</h1>\n<p>Le chat est noir.</p>"),
            ("c2", '<div>\n<img src="plate.png" alt=""/>\n</div>'),
            ("c3", "<h2>Chapter Three</h2>\n<p>One two three four five.</p>"),
        ],
    )


class UpstreamStub:
    """httpx transport handler standing in for every outbound host.

    Requests to the public host are answered from the blob store, the way
    the blob download route would answer them.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self.blob_store: BlobStore | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host == PUBLIC_HOST and self.blob_store is not None:
            return self._serve_blob(request)
        handler = self.handlers.get(host)
        if handler is None:
            return httpx.Response(404, text="no stub for host")
        return handler(request)

    def _serve_blob(self, request: httpx.Request) -> httpx.Response:
        prefix = BlobStore.DOWNLOAD_ROUTE + "/"
        path = unquote(request.url.path[len(prefix):])
        token = request.url.params.get("token", "")
        if not self.blob_store.verify(path, token) or not self.blob_store.exists(path):
            return httpx.Response(404)
        return httpx.Response(200, content=self.blob_store.read(path))


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        storage_dir=tmp_path / "storage",
        public_base_url=f"http://{PUBLIC_HOST}",
        blob_signing_key="test-signing-key",
        google_api_key="test-google-key",
        azure_speech_key="test-speech-key",
        azure_speech_region="westeurope",
        api_auth_token=None,
    )


@pytest.fixture
async def context(settings: Settings, upstream: UpstreamStub):
    engine = create_engine(settings.database_url)
    await init_db(engine)
    blob_store = BlobStore(
        settings.storage_dir, settings.public_base_url, settings.blob_signing_key
    )
    upstream.blob_store = blob_store

    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http_client:
        yield ServiceContext(
            settings=settings,
            session_maker=create_session_maker(engine),
            blob_store=blob_store,
            http_client=http_client,
        )

    await engine.dispose()


@pytest.fixture
async def client(context: ServiceContext):
    app = create_app(context.settings)
    app.dependency_overrides[get_context] = lambda: context
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=f"http://{PUBLIC_HOST}") as http:
        yield http


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1"}
