"""LLM Gateway for all provider access.

Takes an LLMRuntimeConfig directly, so configured parameters (temperature,
max_tokens) reach the LLM call, and logs every call the same way.
"""

import logging
import time
from dataclasses import dataclass

from litellm import acompletion

from .runtime_config import LLMRuntimeConfig

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Standardized LLM response."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0


class UnifiedLLMGateway:
    """Single entry point for LLM calls.

    Usage:
        config = word_explanation_config(api_key, "gemini-2.0-flash")
        response = await UnifiedLLMGateway.execute(
            system_prompt="You are a language API...",
            user_prompt="Explain usage of word(s): ...",
            config=config,
        )
    """

    @classmethod
    async def execute(
        cls,
        system_prompt: str,
        user_prompt: str,
        config: LLMRuntimeConfig,
    ) -> LLMResponse:
        """Execute LLM call with given prompts and config.

        Raises:
            Exception: Whatever litellm raises; provider errors carry a
                ``status_code`` attribute
        """
        start_time = time.time()

        kwargs = config.to_litellm_kwargs()
        kwargs["messages"] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        logger.info(
            f"LLM call: model={config.model}, provider={config.provider}, "
            f"temperature={config.temperature}, max_tokens={config.max_tokens}"
        )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM call failed: model={config.model}, error={e}")
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        usage = getattr(response, "usage", None)

        result = LLMResponse(
            content=response.choices[0].message.content or "",
            model=config.model,
            provider=config.provider,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            latency_ms=latency_ms,
        )

        logger.info(f"LLM response: tokens={result.total_tokens}, latency={latency_ms}ms")
        return result


# Convenience alias for shorter imports
LLMGateway = UnifiedLLMGateway
