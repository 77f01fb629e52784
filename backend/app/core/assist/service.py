"""Language assist: word explanations, sentence translation, speech tokens.

These are thin pass-throughs to third-party APIs. Upstream failures are
raised as ``UpstreamError`` carrying the upstream status and body so the
route can hand them back to the client unchanged.
"""

import logging

import httpx

from app.core.context import ServiceContext
from app.core.errors import UpstreamError
from app.core.llm import (
    UnifiedLLMGateway,
    word_explanation_config,
    word_explanation_system_prompt,
    word_explanation_user_prompt,
)

logger = logging.getLogger(__name__)

SPEECH_TOKEN_URL = "https://{region}.api.cognitive.microsoft.com/sts/v1.0/issueToken"


class LanguageAssistService:
    """Proxy reader requests to Gemini, Google Translate and Azure Speech."""

    def __init__(self, context: ServiceContext):
        self.context = context
        self.settings = context.settings

    def _require_google_key(self) -> str:
        if not self.settings.google_api_key:
            raise UpstreamError("Google API key not configured", status_code=500)
        return self.settings.google_api_key

    async def explain_word(
        self, sentence: str, word: str, target_lang: str, interface_lang: str
    ) -> str:
        """Explain the nuance of ``word`` as used in ``sentence``.

        The explanation is written in ``interface_lang``; the word itself
        stays in ``target_lang``.
        """
        config = word_explanation_config(
            api_key=self._require_google_key(),
            model=self.settings.gemini_model,
        )

        try:
            response = await UnifiedLLMGateway.execute(
                system_prompt=word_explanation_system_prompt(interface_lang),
                user_prompt=word_explanation_user_prompt(sentence, word, target_lang),
                config=config,
            )
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            if not isinstance(status_code, int):
                status_code = 502
            raise UpstreamError(str(e), status_code=status_code) from e

        return response.content

    async def translate_sentence(self, sentence: str, target_lang: str) -> str:
        """Translate a sentence, keeping its punctuation."""
        api_key = self._require_google_key()

        try:
            response = await self.context.http_client.post(
                self.settings.google_translate_url,
                params={"key": api_key},
                json={
                    "q": sentence,
                    "target": target_lang.lower(),
                    "format": "text",
                },
                timeout=self.settings.upstream_timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Translation API unreachable: %s", e)
            raise UpstreamError(f"Translation API unreachable: {e}") from e

        if not response.is_success:
            logger.error("Translation API error: %s", response.text)
            raise UpstreamError(response.text, status_code=response.status_code)

        data = response.json()
        translations = (data.get("data") or {}).get("translations") or [{}]
        return translations[0].get("translatedText", "")

    async def issue_speech_token(self) -> dict:
        """Exchange the server-held subscription key for a short-lived token.

        Raises:
            UpstreamError: 500 when the key is not configured or the token
                request fails for any reason
        """
        subscription_key = self.settings.azure_speech_key
        region = self.settings.azure_speech_region or "eastus"

        if not subscription_key:
            raise UpstreamError("Azure Speech key not configured", status_code=500)

        try:
            response = await self.context.http_client.post(
                SPEECH_TOKEN_URL.format(region=region),
                headers={
                    "Ocp-Apim-Subscription-Key": subscription_key,
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                timeout=self.settings.upstream_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Error getting speech token: %s", e)
            raise UpstreamError("Failed to get speech token", status_code=500) from e

        return {"token": response.text, "region": region}
