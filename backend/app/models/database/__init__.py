"""Database models package."""

from app.models.database.base import (
    Base,
    create_engine,
    create_session_maker,
    init_db,
    upsert,
    utcnow,
)
from app.models.database.book import BookRecord
from app.models.database.word import UserWord
from app.models.database.sentence import UserSentence
from app.models.database.reading_session import ReadingSession
from app.models.database.user import UserAccount, UserAchievement
# Centralized enums
from app.models.database.enums import AccountType, SubscriptionStatus, WordType

__all__ = [
    # Base
    "Base",
    "create_engine",
    "create_session_maker",
    "init_db",
    "upsert",
    "utcnow",
    # Models
    "BookRecord",
    "UserWord",
    "UserSentence",
    "ReadingSession",
    "UserAccount",
    "UserAchievement",
    # Enums
    "WordType",
    "AccountType",
    "SubscriptionStatus",
]
