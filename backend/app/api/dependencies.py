"""API dependencies for authentication and service construction.

This module provides:
- Optional API key authentication for network-exposed deployments
- Resolution of the calling user from the ``X-User-Id`` header
- Service instances built from the application's ServiceContext
"""

import logging
import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request

from app.config import settings
from app.core.assist.service import LanguageAssistService
from app.core.auth import AuthContext
from app.core.context import ServiceContext
from app.core.definitions.service import DefinitionService
from app.core.library.service import LibraryService
from app.core.reading.service import ReadingSessionService
from app.core.sentences.service import SentenceService
from app.core.transcript.service import TranscriptService
from app.core.users.service import UserService
from app.core.words.service import WordService

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication Dependencies
# =============================================================================


async def verify_api_token(
    authorization: Annotated[Optional[str], Header()] = None,
    x_api_key: Annotated[Optional[str], Header(alias="X-API-Key")] = None,
) -> bool:
    """Verify API token for sensitive endpoints.

    Supports two authentication methods:
    1. Authorization: Bearer <token>
    2. X-API-Key: <token>

    If API_AUTH_TOKEN is not set in environment, authentication is disabled
    (for local development).

    Raises:
        HTTPException: 401 if auth is required but token is invalid/missing
    """
    # If no auth token configured, skip authentication (local dev mode)
    if not settings.api_auth_token:
        return True

    # Extract token from headers
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:]
    elif x_api_key:
        token = x_api_key

    if not token:
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Provide Authorization: Bearer <token> or X-API-Key header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(token, settings.api_auth_token):
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return True


async def verify_api_token_if_configured(
    authorization: Annotated[Optional[str], Header()] = None,
    x_api_key: Annotated[Optional[str], Header(alias="X-API-Key")] = None,
) -> bool:
    """Verify API token only if require_auth_all is enabled.

    Used for the language proxies, which only need auth when full auth
    mode is on.
    """
    if not settings.require_auth_all:
        return True
    return await verify_api_token(authorization, x_api_key)


# Type aliases for cleaner dependency injection
RequireAuth = Annotated[bool, Depends(verify_api_token)]
OptionalAuth = Annotated[bool, Depends(verify_api_token_if_configured)]


async def get_auth_context(
    _: RequireAuth,
    x_user_id: Annotated[Optional[str], Header(alias="X-User-Id")] = None,
) -> AuthContext:
    """Build the request's auth context from the caller's user id header."""
    return AuthContext(x_user_id.strip() if x_user_id else None)


async def get_current_user_id(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> str:
    """Resolve the calling user.

    Raises:
        AuthError: 401 if the request carries no user id
    """
    return auth.require_user()


CurrentUser = Annotated[str, Depends(get_current_user_id)]


# =============================================================================
# Service Dependencies
# =============================================================================


def get_context(request: Request) -> ServiceContext:
    """The ServiceContext created at application startup."""
    return request.app.state.context


Context = Annotated[ServiceContext, Depends(get_context)]


def get_library_service(context: Context) -> LibraryService:
    return LibraryService(context)


def get_word_service(context: Context) -> WordService:
    return WordService(context)


def get_sentence_service(context: Context) -> SentenceService:
    return SentenceService(context)


def get_reading_session_service(context: Context) -> ReadingSessionService:
    return ReadingSessionService(context)


def get_assist_service(context: Context) -> LanguageAssistService:
    return LanguageAssistService(context)


def get_user_service(context: Context) -> UserService:
    return UserService(context)


def get_definition_service(context: Context) -> DefinitionService:
    return DefinitionService(context)


def get_transcript_service(context: Context) -> TranscriptService:
    return TranscriptService(context)


Library = Annotated[LibraryService, Depends(get_library_service)]
Words = Annotated[WordService, Depends(get_word_service)]
Sentences = Annotated[SentenceService, Depends(get_sentence_service)]
ReadingSessions = Annotated[ReadingSessionService, Depends(get_reading_session_service)]
Assist = Annotated[LanguageAssistService, Depends(get_assist_service)]
Users = Annotated[UserService, Depends(get_user_service)]
Definitions = Annotated[DefinitionService, Depends(get_definition_service)]
Transcripts = Annotated[TranscriptService, Depends(get_transcript_service)]
