"""Shared Pydantic schemas for API requests and responses."""

from .base import CamelModel
from .book import (
    Section,
    Book,
    BookMetadata,
    BookMetadataCreate,
    BookMetadataUpdate,
    StoredBlob,
)
from .tracking import (
    WordTypeRequest,
    WordBatchRequest,
    SentenceCreate,
    SentenceOut,
    ReadingSessionCreate,
    ReadingSessionOut,
)
from .assist import AssistRequest
from .definition import WordDefinition
from .transcript import TranscriptEntry, TranscriptImportRequest, VideoInfo
from .user import (
    UserPreferences,
    UserProfile,
    UserCreate,
    UserOut,
    ProfileUpdate,
    EmailUpdate,
    AccountTypeUpdate,
    AchievementStatus,
)

__all__ = [
    "CamelModel",
    "Section",
    "Book",
    "BookMetadata",
    "BookMetadataCreate",
    "BookMetadataUpdate",
    "StoredBlob",
    "WordTypeRequest",
    "WordBatchRequest",
    "SentenceCreate",
    "SentenceOut",
    "ReadingSessionCreate",
    "ReadingSessionOut",
    "AssistRequest",
    "WordDefinition",
    "TranscriptEntry",
    "TranscriptImportRequest",
    "VideoInfo",
    "UserPreferences",
    "UserProfile",
    "UserCreate",
    "UserOut",
    "ProfileUpdate",
    "EmailUpdate",
    "AccountTypeUpdate",
    "AchievementStatus",
]
