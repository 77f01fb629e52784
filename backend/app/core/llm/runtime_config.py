"""LLM Runtime Configuration.

A single configuration object that flows unchanged from settings to the
actual litellm call, so the generation parameters a caller asks for are
the ones the provider receives.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class LLMRuntimeConfig:
    """Complete LLM configuration resolved for a single request."""

    # Connection parameters
    provider: str
    model: str
    api_key: str
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.7
    max_tokens: int = 4096
    top_p: Optional[float] = None

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        if self.provider == "openai":
            return self.model
        return f"{self.provider}/{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "api_key": self.api_key,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        if self.base_url:
            kwargs["api_base"] = self.base_url

        if self.top_p is not None:
            kwargs["top_p"] = self.top_p

        return kwargs


def word_explanation_config(api_key: str, model: str) -> LLMRuntimeConfig:
    """Near-deterministic, short-answer settings for word explanations."""
    return LLMRuntimeConfig(
        provider="gemini",
        model=model,
        api_key=api_key,
        temperature=0.1,
        top_p=1.0,
        max_tokens=100,
    )
