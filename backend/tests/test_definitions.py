from __future__ import annotations

import httpx
import pytest

from app.core.context import ServiceContext
from app.core.definitions.service import DefinitionService, clean_word, parse_definitions

WIKTIONARY_HOST = "en.wiktionary.org"

CHAT_RESPONSE = {
    "fr": [
        {
            "partOfSpeech": "Noun",
            "definitions": [
                {"definition": "<a href='/wiki/cat'>cat</a>"},
                {"definition": "<b>chat</b> (online conversation)"},
                {"definition": "cat"},
                {"definition": 42},
            ],
        },
        {
            "partOfSpeech": "Verb",
            "definitions": [
                {"definition": "to chat"},
                {"definition": "to talk idly"},
            ],
        },
    ],
    "en": [{"definitions": [{"definition": "informal conversation"}]}],
}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Chat,", "chat"),
        ("  «Été»! ", "été"),
        ("...", ""),
    ],
)
def test_clean_word(raw: str, expected: str) -> None:
    assert clean_word(raw) == expected


def test_parse_strips_html_dedupes_and_caps() -> None:
    definition = parse_definitions(CHAT_RESPONSE, "chat", "fr")

    assert definition.definitions == ["cat", "chat (online conversation)", "to chat"]
    assert definition.language == "fr"


def test_parse_without_language_returns_none() -> None:
    assert parse_definitions(CHAT_RESPONSE, "chat", "de") is None


async def test_lookup_cleans_word_and_sends_headers(context: ServiceContext, upstream) -> None:
    upstream.handlers[WIKTIONARY_HOST] = lambda request: httpx.Response(200, json=CHAT_RESPONSE)
    definitions = DefinitionService(context)

    definition = await definitions.get_definition("Chat!", "fr")

    assert definition.word == "chat"
    (request,) = upstream.requests
    assert request.url.path == "/api/rest_v1/page/definition/chat"
    assert request.headers["Accept"] == "application/json"
    assert "User-Agent" in request.headers


async def test_lookup_failure_returns_none(context: ServiceContext, upstream) -> None:
    upstream.handlers[WIKTIONARY_HOST] = lambda request: httpx.Response(404, json={})
    definitions = DefinitionService(context)

    assert await definitions.get_definition("zzzz") is None
    assert await definitions.get_definition_simple("zzzz") is None


async def test_punctuation_only_word_skips_lookup(context: ServiceContext, upstream) -> None:
    definitions = DefinitionService(context)

    assert await definitions.get_definition("?!") is None
    assert upstream.requests == []


async def test_simple_definition(context: ServiceContext, upstream) -> None:
    upstream.handlers[WIKTIONARY_HOST] = lambda request: httpx.Response(200, json=CHAT_RESPONSE)

    assert await DefinitionService(context).get_definition_simple("chat") == "informal conversation"


async def test_definition_route(client: httpx.AsyncClient, upstream) -> None:
    upstream.handlers[WIKTIONARY_HOST] = lambda request: httpx.Response(200, json=CHAT_RESPONSE)

    found = await client.get("/api/v1/definitions/chat", params={"language": "fr"})
    missing = await client.get("/api/v1/definitions/chat", params={"language": "de"})

    assert found.status_code == 200
    assert found.json()["definitions"][0] == "cat"
    assert missing.status_code == 404
    assert missing.json() == {"error": "No definition found"}
