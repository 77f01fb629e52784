from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

from app.core import llm
from app.core.llm import gateway


class FakeCompletion:
    """Stand-in for ``litellm.acompletion`` that records its kwargs."""

    def __init__(self, content: str = "", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(prompt_tokens=40, completion_tokens=12, total_tokens=52),
        )


class ProviderError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def completion(monkeypatch) -> FakeCompletion:
    fake = FakeCompletion(content="« vite » here means quickly.")
    monkeypatch.setattr(gateway, "acompletion", fake)
    return fake


async def test_word_explanation(client: httpx.AsyncClient, completion: FakeCompletion) -> None:
    response = await client.post(
        "/api/gemini",
        json={
            "type": "wordExplanation",
            "sentence": "Il court vite",
            "word": "vite",
            "targetLang": "fr",
            "interfaceLang": "en",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"text": "« vite » here means quickly."}

    (call,) = completion.calls
    assert call["model"] == "gemini/gemini-2.0-flash"
    assert call["api_key"] == "test-google-key"
    assert call["temperature"] == 0.1
    assert call["top_p"] == 1.0
    assert call["max_tokens"] == 100
    system, user = call["messages"]
    assert "language en" in system["content"]
    assert user["content"] == "Il court vite. Explain usage of word(s): vite (lang: fr)"


async def test_word_explanation_keeps_upstream_status(
    client: httpx.AsyncClient, monkeypatch
) -> None:
    monkeypatch.setattr(
        gateway, "acompletion", FakeCompletion(error=ProviderError("quota exceeded", 429))
    )

    response = await client.post(
        "/api/gemini",
        json={
            "type": "wordExplanation",
            "sentence": "s",
            "word": "w",
            "targetLang": "fr",
            "interfaceLang": "en",
        },
    )

    assert response.status_code == 429
    assert response.json() == {"error": "quota exceeded"}


@pytest.mark.parametrize(
    "payload",
    [
        {
            "type": "wordExplanation",
            "sentence": "Il court vite",
            "word": "vite",
            "targetLang": "fr",
            "interfaceLang": "en",
        },
        {"type": "sentenceTranslation", "sentence": "Bonjour.", "targetLang": "EN"},
    ],
)
async def test_missing_google_key_returns_error(
    client: httpx.AsyncClient, context, completion: FakeCompletion, monkeypatch, payload: dict
) -> None:
    monkeypatch.setattr(context.settings, "google_api_key", None)

    response = await client.post("/api/gemini", json=payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Google API key not configured"}
    assert completion.calls == []


async def test_invalid_type_is_rejected(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/gemini", json={"type": "poem", "sentence": "x"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid type"}


async def test_missing_fields_are_rejected(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/gemini", json={"type": "wordExplanation", "sentence": "Il court vite"}
    )

    assert response.status_code == 400
    assert "word" in response.json()["error"]


async def test_sentence_translation(client: httpx.AsyncClient, upstream) -> None:
    def translate(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"data": {"translations": [{"translatedText": "Hello, world!"}]}}
        )

    upstream.handlers["translation.googleapis.com"] = translate

    response = await client.post(
        "/api/gemini",
        json={"type": "sentenceTranslation", "sentence": "Bonjour, le monde !", "targetLang": "EN"},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Hello, world!"}

    (request,) = [r for r in upstream.requests if r.url.host == "translation.googleapis.com"]
    assert request.url.params["key"] == "test-google-key"
    assert json.loads(request.content) == {
        "q": "Bonjour, le monde !",
        "target": "en",
        "format": "text",
    }


async def test_translation_error_passes_status_through(
    client: httpx.AsyncClient, upstream
) -> None:
    upstream.handlers["translation.googleapis.com"] = lambda request: httpx.Response(
        403, text="API key not valid"
    )

    response = await client.post(
        "/api/gemini",
        json={"type": "sentenceTranslation", "sentence": "Salut.", "targetLang": "en"},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "API key not valid"}


async def test_speech_token(client: httpx.AsyncClient, upstream) -> None:
    host = "westeurope.api.cognitive.microsoft.com"
    upstream.handlers[host] = lambda request: httpx.Response(200, text="speech-jwt")

    response = await client.get("/api/speech-token")

    assert response.status_code == 200
    assert response.json() == {"token": "speech-jwt", "region": "westeurope"}
    (request,) = [r for r in upstream.requests if r.url.host == host]
    assert request.method == "POST"
    assert request.url.path == "/sts/v1.0/issueToken"
    assert request.headers["Ocp-Apim-Subscription-Key"] == "test-speech-key"


async def test_speech_token_without_key(
    client: httpx.AsyncClient, context, monkeypatch
) -> None:
    monkeypatch.setattr(context.settings, "azure_speech_key", None)

    response = await client.get("/api/speech-token")

    assert response.status_code == 500
    assert response.json() == {"error": "Azure Speech key not configured"}


async def test_speech_token_upstream_failure(client: httpx.AsyncClient, upstream) -> None:
    upstream.handlers["westeurope.api.cognitive.microsoft.com"] = lambda request: httpx.Response(401)

    response = await client.get("/api/speech-token")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get speech token"}


def test_word_explanation_config_is_near_deterministic() -> None:
    config = llm.word_explanation_config(api_key="k", model="gemini-2.0-flash")

    kwargs = config.to_litellm_kwargs()

    assert kwargs == {
        "model": "gemini/gemini-2.0-flash",
        "api_key": "k",
        "temperature": 0.1,
        "max_tokens": 100,
        "top_p": 1.0,
    }
