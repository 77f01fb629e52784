"""Dictionary lookup route."""

from fastapi import APIRouter, Query

from app.core.errors import NotFoundError
from app.models.schemas.definition import WordDefinition
from app.api.dependencies import Definitions, OptionalAuth

router = APIRouter()


@router.get("/definitions/{word:path}", response_model=WordDefinition)
async def get_definition(
    word: str,
    definitions: Definitions,
    _: OptionalAuth,
    language: str = Query("en"),
):
    """Look a word up in Wiktionary. Nothing found is a 404."""
    definition = await definitions.get_definition(word, language)
    if definition is None:
        raise NotFoundError("No definition found")
    return definition
