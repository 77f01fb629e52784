"""Per-user saved sentences."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.context import ServiceContext
from app.core.errors import StoreError
from app.models.database.sentence import UserSentence
from app.models.schemas.tracking import SentenceOut

logger = logging.getLogger(__name__)


class SentenceService:
    """Add, list and remove saved sentences."""

    def __init__(self, context: ServiceContext):
        self.context = context

    async def add_sentence(self, user_id: str, text: str) -> SentenceOut:
        """Save a sentence exactly as captured. Creation time is stamped here."""
        sentence = UserSentence(user_id=user_id, text=text)
        try:
            async with self.context.session_maker() as db:
                db.add(sentence)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to save sentence for user %s: %s", user_id, e)
            raise StoreError(f"Failed to save sentence: {e}") from e

        return SentenceOut.model_validate(sentence)

    async def list_sentences(self, user_id: str) -> list[SentenceOut]:
        """Saved sentences, newest first."""
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(UserSentence)
                    .where(UserSentence.user_id == user_id)
                    .order_by(UserSentence.created_at.desc())
                )
                sentences = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Failed to list sentences for user %s: %s", user_id, e)
            raise StoreError(f"Failed to list sentences: {e}") from e

        return [SentenceOut.model_validate(s) for s in sentences]

    async def remove_sentence(self, user_id: str, sentence_id: str) -> None:
        try:
            async with self.context.session_maker() as db:
                await db.execute(
                    delete(UserSentence).where(
                        UserSentence.user_id == user_id,
                        UserSentence.id == sentence_id,
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to remove sentence %s: %s", sentence_id, e)
            raise StoreError(f"Failed to remove sentence: {e}") from e
