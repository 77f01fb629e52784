"""Language assist proxy routes.

Mounted under ``/api`` (not ``/api/v1``): the reader calls these paths
directly.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.errors import ReaderError
from app.models.schemas.assist import AssistRequest
from app.api.dependencies import Assist, OptionalAuth

logger = logging.getLogger(__name__)

router = APIRouter()

WORD_EXPLANATION = "wordExplanation"
SENTENCE_TRANSLATION = "sentenceTranslation"


def _missing(*fields: str) -> JSONResponse:
    return JSONResponse(
        {"error": f"Missing required field(s): {', '.join(fields)}"},
        status_code=400,
    )


@router.post("/gemini")
async def language_assist(request: AssistRequest, assist: Assist, _: OptionalAuth):
    """Explain a word in context or translate a sentence.

    Always answers ``{"text": ...}`` or ``{"error": ...}``; upstream
    failures keep the upstream status code.
    """
    try:
        if request.type == WORD_EXPLANATION:
            missing = [
                name for name, value in (
                    ("sentence", request.sentence),
                    ("word", request.word),
                    ("targetLang", request.target_lang),
                    ("interfaceLang", request.interface_lang),
                ) if not value
            ]
            if missing:
                return _missing(*missing)
            text = await assist.explain_word(
                request.sentence, request.word, request.target_lang, request.interface_lang
            )

        elif request.type == SENTENCE_TRANSLATION:
            missing = [
                name for name, value in (
                    ("sentence", request.sentence),
                    ("targetLang", request.target_lang),
                ) if not value
            ]
            if missing:
                return _missing(*missing)
            text = await assist.translate_sentence(request.sentence, request.target_lang)

        else:
            return JSONResponse({"error": "Invalid type"}, status_code=400)

    except ReaderError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)
    except Exception as e:
        logger.exception("Language assist request failed")
        return JSONResponse({"error": str(e) or "Unknown error"}, status_code=500)

    return {"text": text}


@router.get("/speech-token")
async def speech_token(assist: Assist, _: OptionalAuth):
    """Short-lived speech service token for the in-browser TTS player."""
    try:
        return await assist.issue_speech_token()
    except ReaderError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)
