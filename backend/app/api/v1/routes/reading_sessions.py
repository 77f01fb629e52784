"""Reading history API routes."""

from typing import Optional

from fastapi import APIRouter, Query

from app.models.schemas.tracking import ReadingSessionCreate, ReadingSessionOut
from app.api.dependencies import CurrentUser, ReadingSessions

router = APIRouter()


@router.get("/reading-sessions", response_model=list[ReadingSessionOut])
async def list_sessions(
    user_id: CurrentUser,
    sessions: ReadingSessions,
    book_id: Optional[str] = Query(None, alias="bookId"),
):
    """List reading sessions, optionally for one book only."""
    if book_id:
        return await sessions.list_book_sessions(user_id, book_id)
    return await sessions.list_user_sessions(user_id)


@router.post("/reading-sessions", response_model=ReadingSessionOut)
async def add_session(
    request: ReadingSessionCreate,
    user_id: CurrentUser,
    sessions: ReadingSessions,
):
    return await sessions.add_session(user_id, request)


@router.delete("/reading-sessions")
async def remove_sessions(
    user_id: CurrentUser,
    sessions: ReadingSessions,
    section_id: str = Query(..., alias="sectionId"),
    book_id: Optional[str] = Query(None, alias="bookId"),
):
    """Unmark a section as read."""
    deleted = await sessions.remove_sessions(user_id, section_id, book_id)
    return {"status": "deleted", "count": deleted}
