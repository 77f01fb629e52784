"""Database base, engine factory and table creation."""

from datetime import datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all document-store tables."""


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite drops tzinfo on the way back)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def upsert(dialect_name: str, model, rows: list[dict], keys: list, update: list[str]):
    """Build a single INSERT ... ON CONFLICT DO UPDATE statement.

    Conflicting rows take the incoming values of the ``update`` columns, so
    concurrent writers of the same key resolve to the last one committed.
    """
    insert = postgresql.insert if dialect_name == "postgresql" else sqlite.insert
    stmt = insert(model).values(rows)
    return stmt.on_conflict_do_update(
        index_elements=keys,
        set_={column: stmt.excluded[column] for column in update},
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    import app.models.database  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
