"""Explicit service context.

Holds every client handle a service needs. Services receive it in their
constructor instead of importing process-wide singletons, so tests can
build one around a temporary database, a temporary blob root and a mocked
HTTP transport.
"""

from dataclasses import dataclass

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import Settings
from app.core.blob_storage import BlobStore


@dataclass
class ServiceContext:
    """Client handles shared by all services of one application."""

    settings: Settings
    session_maker: async_sessionmaker[AsyncSession]
    blob_store: BlobStore
    http_client: httpx.AsyncClient
