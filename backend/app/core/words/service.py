"""Per-user word classification store.

A word is stored with one of three types (known, tracking, ignored). The
fourth state, unknown, is the absence of a row: marking a word unknown
means deleting it, and the listing never reports unknown words. Writes are
last-write-wins with no history.
"""

import logging
from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.context import ServiceContext
from app.core.errors import StoreError
from app.models.database.base import upsert, utcnow
from app.models.database.enums import WordType
from app.models.database.word import UserWord

logger = logging.getLogger(__name__)


class WordService:
    """Read and classify a user's words."""

    # Rows per INSERT statement, under SQLite's bound-parameter limit
    UPSERT_CHUNK = 500

    def __init__(self, context: ServiceContext):
        self.context = context

    async def list_words(self, user_id: str) -> dict[str, WordType]:
        """Map every classified word to its type."""
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(UserWord.word, UserWord.type).where(UserWord.user_id == user_id)
                )
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Failed to list words for user %s: %s", user_id, e)
            raise StoreError(f"Failed to list words: {e}") from e

        return {word: WordType(word_type) for word, word_type in rows}

    async def set_word(
        self, user_id: str, word: str, word_type: WordType = WordType.TRACKING
    ) -> None:
        """Classify one word, overwriting any earlier classification."""
        await self.set_words(user_id, [word], word_type)

    async def set_words(
        self,
        user_id: str,
        words: Iterable[str],
        word_type: WordType = WordType.TRACKING,
    ) -> None:
        """Classify many words to the same type in one transaction.

        Either every word is written or none is. The write is a single
        upsert, so racing writers of the same word never conflict and the
        last one to commit wins.
        """
        words = list(words)
        if not words:
            return

        word_type = WordType(word_type)
        now = utcnow()
        rows = [
            {"user_id": user_id, "word": word, "type": word_type.value, "updated_at": now}
            for word in dict.fromkeys(words)
        ]
        try:
            async with self.context.session_maker() as db:
                async with db.begin():
                    for start in range(0, len(rows), self.UPSERT_CHUNK):
                        await db.execute(
                            upsert(
                                db.bind.dialect.name,
                                UserWord,
                                rows[start:start + self.UPSERT_CHUNK],
                                keys=[UserWord.user_id, UserWord.word],
                                update=["type", "updated_at"],
                            )
                        )
        except SQLAlchemyError as e:
            logger.error("Failed to save %d word(s) for user %s: %s", len(words), user_id, e)
            raise StoreError(f"Failed to save words: {e}") from e

        logger.info("Set %d word(s) to %s for user %s", len(words), word_type.value, user_id)

    async def update_word(self, user_id: str, word: str, word_type: WordType) -> None:
        """Reclassify a word from the reader UI. Same upsert as ``set_word``."""
        await self.set_word(user_id, word, word_type)

    async def remove_word(self, user_id: str, word: str) -> None:
        """Delete a word's row, returning it to unknown.

        Removing a word that is already unknown is a no-op.
        """
        try:
            async with self.context.session_maker() as db:
                await db.execute(
                    delete(UserWord).where(UserWord.user_id == user_id, UserWord.word == word)
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to remove word for user %s: %s", user_id, e)
            raise StoreError(f"Failed to remove word: {e}") from e
