"""Reading history: which pages or sections a user marked as read."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.context import ServiceContext
from app.core.errors import StoreError
from app.models.database.reading_session import ReadingSession
from app.models.schemas.tracking import ReadingSessionCreate, ReadingSessionOut

logger = logging.getLogger(__name__)


class ReadingSessionService:
    """Record, list and remove reading sessions."""

    def __init__(self, context: ServiceContext):
        self.context = context

    async def add_session(self, user_id: str, session: ReadingSessionCreate) -> ReadingSessionOut:
        record = ReadingSession(
            user_id=user_id,
            book_id=session.book_id,
            book_title=session.book_title,
            section_id=session.section_id,
            section_title=session.section_title,
            word_count=session.word_count,
        )
        try:
            async with self.context.session_maker() as db:
                db.add(record)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to record reading session for user %s: %s", user_id, e)
            raise StoreError(f"Failed to record reading session: {e}") from e

        return ReadingSessionOut.model_validate(record)

    async def list_user_sessions(self, user_id: str) -> list[ReadingSessionOut]:
        """All of a user's sessions, newest first."""
        return await self._list(ReadingSession.user_id == user_id)

    async def list_book_sessions(self, user_id: str, book_id: str) -> list[ReadingSessionOut]:
        """A user's sessions for one book, newest first."""
        return await self._list(
            ReadingSession.user_id == user_id,
            ReadingSession.book_id == book_id,
        )

    async def remove_sessions(
        self, user_id: str, section_id: str, book_id: Optional[str] = None
    ) -> int:
        """Delete every session for a section.

        Without ``book_id`` the section id alone is matched, which is how
        sessions recorded before books were tracked are removed.

        Returns:
            Number of sessions deleted
        """
        conditions = [
            ReadingSession.user_id == user_id,
            ReadingSession.section_id == section_id,
        ]
        if book_id:
            conditions.append(ReadingSession.book_id == book_id)

        try:
            async with self.context.session_maker() as db:
                result = await db.execute(delete(ReadingSession).where(*conditions))
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to remove reading sessions for user %s: %s", user_id, e)
            raise StoreError(f"Failed to remove reading sessions: {e}") from e

        return result.rowcount

    async def _list(self, *conditions) -> list[ReadingSessionOut]:
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(ReadingSession)
                    .where(*conditions)
                    .order_by(ReadingSession.timestamp.desc())
                )
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Failed to list reading sessions: %s", e)
            raise StoreError(f"Failed to list reading sessions: {e}") from e

        return [ReadingSessionOut.model_validate(r) for r in records]
