"""Vocabulary API routes."""

from typing import Optional

from fastapi import APIRouter

from app.models.database.enums import WordType
from app.models.schemas.tracking import WordBatchRequest, WordTypeRequest
from app.api.dependencies import CurrentUser, Words

router = APIRouter()


@router.get("/words", response_model=dict[str, WordType])
async def list_words(user_id: CurrentUser, words: Words):
    """Every classified word mapped to its type. Unknown words are absent."""
    return await words.list_words(user_id)


@router.post("/words/batch")
async def set_words(request: WordBatchRequest, user_id: CurrentUser, words: Words):
    """Classify a list of words to one type, all or nothing."""
    await words.set_words(user_id, request.words, request.type)
    return {"status": "saved", "count": len(request.words)}


@router.put("/words/{word:path}")
async def set_word(
    word: str,
    user_id: CurrentUser,
    words: Words,
    request: Optional[WordTypeRequest] = None,
):
    """Add a word (tracking unless another type is given)."""
    word_type = request.type if request else WordType.TRACKING
    await words.set_word(user_id, word, word_type)
    return {"word": word, "type": word_type.value}


@router.patch("/words/{word:path}")
async def update_word(
    word: str,
    request: WordTypeRequest,
    user_id: CurrentUser,
    words: Words,
):
    """Reclassify a word."""
    await words.update_word(user_id, word, request.type)
    return {"word": word, "type": request.type.value}


@router.delete("/words/{word:path}")
async def remove_word(word: str, user_id: CurrentUser, words: Words):
    """Mark a word unknown by deleting it."""
    await words.remove_word(user_id, word)
    return {"status": "deleted"}
