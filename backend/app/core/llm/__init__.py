"""LLM access package."""

from .gateway import LLMGateway, LLMResponse, UnifiedLLMGateway
from .runtime_config import LLMRuntimeConfig, word_explanation_config
from .prompts import word_explanation_system_prompt, word_explanation_user_prompt

__all__ = [
    "LLMGateway",
    "LLMResponse",
    "UnifiedLLMGateway",
    "LLMRuntimeConfig",
    "word_explanation_config",
    "word_explanation_system_prompt",
    "word_explanation_user_prompt",
]
