"""Saved sentence API routes."""

from fastapi import APIRouter

from app.models.schemas.tracking import SentenceCreate, SentenceOut
from app.api.dependencies import CurrentUser, Sentences

router = APIRouter()


@router.get("/sentences", response_model=list[SentenceOut])
async def list_sentences(user_id: CurrentUser, sentences: Sentences):
    return await sentences.list_sentences(user_id)


@router.post("/sentences", response_model=SentenceOut)
async def add_sentence(request: SentenceCreate, user_id: CurrentUser, sentences: Sentences):
    return await sentences.add_sentence(user_id, request.text)


@router.delete("/sentences/{sentence_id}")
async def remove_sentence(sentence_id: str, user_id: CurrentUser, sentences: Sentences):
    await sentences.remove_sentence(user_id, sentence_id)
    return {"status": "deleted"}
