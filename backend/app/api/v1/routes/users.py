"""User account API routes.

Every route acts on the calling user (``/users/me``).
"""

from fastapi import APIRouter

from app.models.schemas.user import (
    AccountTypeUpdate,
    AchievementStatus,
    EmailUpdate,
    ProfileUpdate,
    UserCreate,
    UserOut,
    UserPreferences,
)
from app.api.dependencies import CurrentUser, Users

router = APIRouter()


@router.post("/users/me", response_model=UserOut)
async def create_user(request: UserCreate, user_id: CurrentUser, users: Users):
    """Create (or reset) the caller's user document."""
    return await users.create_user(
        user_id, request.email, request.display_name, request.photo_url
    )


@router.get("/users/me", response_model=UserOut)
async def get_user(user_id: CurrentUser, users: Users):
    return await users.require_user(user_id)


@router.delete("/users/me")
async def delete_user(user_id: CurrentUser, users: Users):
    await users.delete_user(user_id)
    return {"status": "deleted"}


@router.post("/users/me/login")
async def record_login(user_id: CurrentUser, users: Users):
    """Stamp the caller's last sign-in time."""
    await users.update_last_login(user_id)
    return {"status": "updated"}


@router.get("/users/me/preferences", response_model=UserPreferences)
async def get_preferences(user_id: CurrentUser, users: Users):
    user = await users.require_user(user_id)
    return user.preferences or UserPreferences()


@router.patch("/users/me/preferences", response_model=UserPreferences)
async def update_preferences(changes: UserPreferences, user_id: CurrentUser, users: Users):
    """Merge the sent preferences into the stored ones."""
    return await users.update_preferences(user_id, changes)


@router.patch("/users/me/profile")
async def update_profile(changes: ProfileUpdate, user_id: CurrentUser, users: Users):
    await users.update_profile(user_id, changes)
    return {"status": "updated"}


@router.put("/users/me/email")
async def update_email(request: EmailUpdate, user_id: CurrentUser, users: Users):
    await users.update_email(user_id, request.email)
    return {"status": "updated"}


@router.put("/users/me/account")
async def update_account(changes: AccountTypeUpdate, user_id: CurrentUser, users: Users):
    """Change the caller's plan and subscription state."""
    await users.update_account_type(user_id, changes)
    return {"status": "updated"}


@router.get("/users/me/achievements", response_model=list[str])
async def list_achievements(user_id: CurrentUser, users: Users):
    return await users.get_achievements(user_id)


@router.get("/users/me/achievements/{achievement_id}", response_model=AchievementStatus)
async def get_achievement(achievement_id: str, user_id: CurrentUser, users: Users):
    unlocked = await users.is_achievement_unlocked(user_id, achievement_id)
    return AchievementStatus(achievement_id=achievement_id, unlocked=unlocked)


@router.put("/users/me/achievements/{achievement_id}", response_model=AchievementStatus)
async def unlock_achievement(achievement_id: str, user_id: CurrentUser, users: Users):
    await users.unlock_achievement(user_id, achievement_id)
    return AchievementStatus(achievement_id=achievement_id, unlocked=True)
