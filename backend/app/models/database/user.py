"""User account and achievement database models."""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.models.database.base import Base, utcnow
from app.models.database.enums import AccountType


class UserAccount(Base):
    """Profile, preferences and plan of one signed-in user."""

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)

    # Plan
    account_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountType.FREE.value
    )
    subscription_status: Mapped[Optional[str]] = mapped_column(String(20))
    subscription_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime)

    # Profile
    display_name: Mapped[Optional[str]] = mapped_column(String(255))
    photo_url: Mapped[Optional[str]] = mapped_column(String(1000))
    language: Mapped[str] = mapped_column(String(20), default="en")

    # Reader preferences, stored with their wire (camelCase) names
    preferences: Mapped[Optional[dict]] = mapped_column(JSON)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    last_login_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    last_updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class UserAchievement(Base):
    """An achievement a user has unlocked. Locked achievements have no row."""

    __tablename__ = "user_achievements"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    achievement_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    unlocked_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
