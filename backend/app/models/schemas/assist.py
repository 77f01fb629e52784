"""Language assist proxy schemas."""

from typing import Optional

from .base import CamelModel


class AssistRequest(CamelModel):
    """Body of ``POST /api/gemini``.

    ``type`` selects the operation: ``wordExplanation`` needs sentence,
    word, target_lang and interface_lang; ``sentenceTranslation`` needs
    sentence and target_lang.
    """

    type: Optional[str] = None
    sentence: Optional[str] = None
    word: Optional[str] = None
    target_lang: Optional[str] = None
    interface_lang: Optional[str] = None
