"""User accounts: profile, reader preferences, plan and achievements.

A user document is created on first sign-in and updated field by field
afterwards. Every update of a user that does not exist fails with
``NotFoundError``. Achievements are a per-user set: an achievement is
unlocked when its row exists.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.core.context import ServiceContext
from app.core.errors import NotFoundError, StoreError
from app.models.database.base import upsert, utcnow
from app.models.database.enums import AccountType
from app.models.database.user import UserAccount, UserAchievement
from app.models.schemas.user import (
    AccountTypeUpdate,
    ProfileUpdate,
    UserOut,
    UserPreferences,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Columns a repeated create overwrites
_ACCOUNT_COLUMNS = [
    "email",
    "account_type",
    "subscription_status",
    "subscription_end_date",
    "display_name",
    "photo_url",
    "language",
    "preferences",
    "created_at",
    "last_login_at",
    "last_updated_at",
]


def _to_out(record: UserAccount) -> UserOut:
    return UserOut(
        uid=record.uid,
        email=record.email,
        account_type=record.account_type,
        profile=UserProfile(
            display_name=record.display_name,
            photo_url=record.photo_url,
            language=record.language,
        ),
        preferences=(
            UserPreferences.model_validate(record.preferences)
            if record.preferences is not None else None
        ),
        subscription_status=record.subscription_status,
        subscription_end_date=record.subscription_end_date,
        created_at=record.created_at,
        last_login_at=record.last_login_at,
        last_updated_at=record.last_updated_at,
    )


class UserService:
    """Create, read, update and delete user documents."""

    def __init__(self, context: ServiceContext):
        self.context = context

    # =========================================================================
    # User document
    # =========================================================================

    async def create_user(
        self,
        uid: str,
        email: str,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> UserOut:
        """Write a fresh user document with default plan and preferences.

        An existing document for ``uid`` is replaced.
        """
        now = utcnow()
        row = {
            "uid": uid,
            "email": email,
            "account_type": AccountType.FREE.value,
            "subscription_status": None,
            "subscription_end_date": None,
            "display_name": display_name,
            "photo_url": photo_url,
            "language": "en",
            "preferences": UserPreferences().model_dump(by_alias=True, exclude_none=True),
            "created_at": now,
            "last_login_at": now,
            "last_updated_at": now,
        }
        try:
            async with self.context.session_maker() as db:
                async with db.begin():
                    await db.execute(
                        upsert(
                            db.bind.dialect.name,
                            UserAccount,
                            [row],
                            keys=[UserAccount.uid],
                            update=_ACCOUNT_COLUMNS,
                        )
                    )
        except SQLAlchemyError as e:
            logger.error("Failed to create user %s: %s", uid, e)
            raise StoreError(f"Failed to create user: {e}") from e

        logger.info("Created user %s", uid)
        return await self.require_user(uid)

    async def get_user(self, uid: str) -> Optional[UserOut]:
        """The user document, or None if the user was never created."""
        record = await self._load(uid)
        return _to_out(record) if record is not None else None

    async def require_user(self, uid: str) -> UserOut:
        user = await self.get_user(uid)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_preferences(self, uid: str) -> Optional[UserPreferences]:
        user = await self.get_user(uid)
        return user.preferences if user is not None else None

    async def update_preferences(self, uid: str, changes: UserPreferences) -> UserPreferences:
        """Merge the preferences that were sent into the stored ones."""
        record = await self._load(uid)
        if record is None:
            raise NotFoundError("User not found")

        merged = dict(record.preferences or {})
        merged.update(changes.model_dump(by_alias=True, exclude_unset=True))
        await self._update(uid, preferences=merged, last_updated_at=utcnow())
        return UserPreferences.model_validate(merged)

    async def update_last_login(self, uid: str) -> None:
        await self._update(uid, last_login_at=utcnow())

    async def update_account_type(self, uid: str, changes: AccountTypeUpdate) -> None:
        await self._update(
            uid,
            account_type=changes.account_type.value,
            subscription_status=(
                changes.subscription_status.value if changes.subscription_status else None
            ),
            subscription_end_date=changes.subscription_end_date,
            last_updated_at=utcnow(),
        )

    async def update_profile(self, uid: str, changes: ProfileUpdate) -> None:
        values = changes.model_dump(exclude_unset=True)
        await self._update(uid, **values, last_updated_at=utcnow())

    async def update_email(self, uid: str, email: str) -> None:
        await self._update(uid, email=email, last_updated_at=utcnow())

    async def delete_user(self, uid: str) -> None:
        """Delete the user document and its achievements. Missing users are ignored."""
        try:
            async with self.context.session_maker() as db:
                async with db.begin():
                    await db.execute(delete(UserAchievement).where(UserAchievement.user_id == uid))
                    await db.execute(delete(UserAccount).where(UserAccount.uid == uid))
        except SQLAlchemyError as e:
            logger.error("Failed to delete user %s: %s", uid, e)
            raise StoreError(f"Failed to delete user: {e}") from e

        logger.info("Deleted user %s", uid)

    # =========================================================================
    # Achievements
    # =========================================================================

    async def get_achievements(self, uid: str) -> list[str]:
        """Ids of every unlocked achievement, oldest unlock first."""
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    select(UserAchievement.achievement_id)
                    .where(UserAchievement.user_id == uid)
                    .order_by(UserAchievement.unlocked_at)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to list achievements for user %s: %s", uid, e)
            raise StoreError(f"Failed to list achievements: {e}") from e

    async def unlock_achievement(self, uid: str, achievement_id: str) -> None:
        """Mark an achievement unlocked. Unlocking again refreshes its time."""
        row = {"user_id": uid, "achievement_id": achievement_id, "unlocked_at": utcnow()}
        try:
            async with self.context.session_maker() as db:
                async with db.begin():
                    await db.execute(
                        upsert(
                            db.bind.dialect.name,
                            UserAchievement,
                            [row],
                            keys=[UserAchievement.user_id, UserAchievement.achievement_id],
                            update=["unlocked_at"],
                        )
                    )
        except SQLAlchemyError as e:
            logger.error("Failed to unlock %s for user %s: %s", achievement_id, uid, e)
            raise StoreError(f"Failed to unlock achievement: {e}") from e

        logger.info("User %s unlocked %s", uid, achievement_id)

    async def is_achievement_unlocked(self, uid: str, achievement_id: str) -> bool:
        try:
            async with self.context.session_maker() as db:
                found = await db.get(UserAchievement, (uid, achievement_id))
        except SQLAlchemyError as e:
            logger.error("Failed to check %s for user %s: %s", achievement_id, uid, e)
            raise StoreError(f"Failed to check achievement: {e}") from e
        return found is not None

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load(self, uid: str) -> Optional[UserAccount]:
        try:
            async with self.context.session_maker() as db:
                return await db.get(UserAccount, uid)
        except SQLAlchemyError as e:
            logger.error("Failed to load user %s: %s", uid, e)
            raise StoreError(f"Failed to load user: {e}") from e

    async def _update(self, uid: str, **values) -> None:
        try:
            async with self.context.session_maker() as db:
                result = await db.execute(
                    update(UserAccount).where(UserAccount.uid == uid).values(**values)
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update user %s: %s", uid, e)
            raise StoreError(f"Failed to update user: {e}") from e

        if result.rowcount == 0:
            raise NotFoundError("User not found")
