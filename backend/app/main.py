"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, settings as default_settings
from app.core.blob_storage import BlobStore
from app.core.context import ServiceContext
from app.core.errors import ReaderError
from app.models.database.base import create_engine, create_session_maker, init_db
from app.api.v1.routes import (
    assist,
    blobs,
    books,
    definitions,
    reading_sessions,
    sentences,
    users,
    words,
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one set of settings."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup: document store
        engine = create_engine(settings.database_url)
        await init_db(engine)

        # Startup: blob store and outbound HTTP client
        blob_store = BlobStore(
            settings.storage_dir, settings.public_base_url, settings.blob_signing_key
        )
        settings.storage_dir.mkdir(parents=True, exist_ok=True)

        async with httpx.AsyncClient(timeout=settings.upstream_timeout) as http_client:
            app.state.context = ServiceContext(
                settings=settings,
                session_maker=create_session_maker(engine),
                blob_store=blob_store,
                http_client=http_client,
            )
            logger.info("Storage at %s, database %s", settings.storage_dir, engine.url)
            yield

        # Shutdown
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="EPUB reader with vocabulary tracking",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ReaderError)
    async def reader_error_handler(request: Request, exc: ReaderError):
        """Render expected failures as ``{"error": message}``."""
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    # Include routers
    app.include_router(books.router, prefix="/api/v1", tags=["books"])
    app.include_router(blobs.router, prefix="/api/v1", tags=["blobs"])
    app.include_router(words.router, prefix="/api/v1", tags=["words"])
    app.include_router(sentences.router, prefix="/api/v1", tags=["sentences"])
    app.include_router(reading_sessions.router, prefix="/api/v1", tags=["reading"])
    app.include_router(users.router, prefix="/api/v1", tags=["users"])
    app.include_router(definitions.router, prefix="/api/v1", tags=["definitions"])
    app.include_router(assist.router, prefix="/api", tags=["assist"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": f"{settings.app_name} API", "version": "0.1.0"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
