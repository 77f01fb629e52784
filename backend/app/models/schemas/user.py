"""User profile, preference and achievement schemas."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict

from app.models.database.enums import AccountType, SubscriptionStatus

from .base import CamelModel


class UserPreferences(CamelModel):
    """Reader and UI preferences.

    Keys the server does not know about are kept as sent, so newer clients
    can store settings without a schema change.
    """

    model_config = ConfigDict(extra="allow")

    dark_mode: bool = False
    daily_goal: int = 1500
    show_audio_bar_on_start: bool = True

    language: Optional[str] = None
    native_language: Optional[str] = None
    theme: Optional[str] = None
    custom_theme: Optional[dict] = None
    view_mode: Optional[str] = None

    reader_font: Optional[str] = None
    reader_width: Optional[int] = None
    reader_font_size: Optional[int] = None
    reader_container_style: Optional[str] = None
    sentences_per_page: Optional[int] = None
    line_spacing: Optional[float] = None

    tts_speed: Optional[float] = None
    tts_voice: Optional[str] = None

    disable_word_underlines: Optional[bool] = None
    disable_words_read_popup: Optional[bool] = None
    disable_word_highlighting: Optional[bool] = None
    disable_sentence_highlighting: Optional[bool] = None
    disable_word_spans: Optional[bool] = None
    disable_sentence_spans: Optional[bool] = None
    enable_highlight_words: Optional[bool] = None
    highlight_sentence_on_hover: Optional[bool] = None
    invisible_text: Optional[bool] = None
    show_current_word_when_invisible: Optional[bool] = None


class UserProfile(CamelModel):
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: str = "en"


class UserCreate(CamelModel):
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


class UserOut(CamelModel):
    """A user document as the client sees it."""

    uid: str
    email: str
    account_type: AccountType
    profile: UserProfile
    preferences: Optional[UserPreferences] = None
    subscription_status: Optional[SubscriptionStatus] = None
    subscription_end_date: Optional[datetime] = None
    created_at: datetime
    last_login_at: datetime
    last_updated_at: datetime


class ProfileUpdate(CamelModel):
    """Partial profile change; only fields that were sent are applied."""

    display_name: Optional[str] = None
    photo_url: Optional[str] = None


class EmailUpdate(CamelModel):
    email: str


class AccountTypeUpdate(CamelModel):
    account_type: AccountType
    subscription_status: Optional[SubscriptionStatus] = None
    subscription_end_date: Optional[datetime] = None


class AchievementStatus(CamelModel):
    achievement_id: str
    unlocked: bool
