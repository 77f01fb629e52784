"""Dictionary lookups against the Wiktionary REST API.

A lookup that finds nothing, or that fails upstream, yields None: the
reader shows "no definition" either way.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from app.core.context import ServiceContext
from app.models.schemas.definition import WordDefinition

logger = logging.getLogger(__name__)

MAX_DEFINITIONS = 3
USER_AGENT = "LingoRead/1.0"

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def clean_word(word: str) -> str:
    """Drop punctuation, lowercase and trim a word picked from running text."""
    return _PUNCTUATION_RE.sub("", word).lower().strip()


def strip_html(markup: str) -> str:
    return BeautifulSoup(markup, "lxml").get_text().strip()


def parse_definitions(data: dict, word: str, language: str) -> Optional[WordDefinition]:
    """Pick the first distinct definitions of ``language`` out of a response body."""
    entries = data.get(language) or []

    definitions: list[str] = []
    for entry in entries:
        for sense in entry.get("definitions") or []:
            text = sense.get("definition")
            if not isinstance(text, str):
                continue
            text = strip_html(text)
            if text and text not in definitions:
                definitions.append(text)

    if not definitions:
        return None

    first = entries[0]
    return WordDefinition(
        word=word,
        definitions=definitions[:MAX_DEFINITIONS],
        language=language,
        etymology=first.get("etymology") or None,
        pronunciation=first.get("pronunciation") or None,
    )


class DefinitionService:
    """Look words up in Wiktionary."""

    def __init__(self, context: ServiceContext):
        self.context = context
        self.settings = context.settings

    async def get_definition(self, word: str, language: str = "en") -> Optional[WordDefinition]:
        """Definitions of ``word`` in ``language``, or None if there are none."""
        cleaned = clean_word(word)
        if not cleaned:
            return None

        url = f"{self.settings.wiktionary_url.rstrip('/')}/{quote(cleaned, safe='')}"
        try:
            response = await self.context.http_client.get(
                url,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                timeout=self.settings.upstream_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Wiktionary lookup for %r failed: %s", cleaned, e)
            return None

        if not isinstance(data, dict):
            return None
        return parse_definitions(data, cleaned, language)

    async def get_definition_simple(self, word: str, language: str = "en") -> Optional[str]:
        """Just the first definition."""
        definition = await self.get_definition(word, language)
        return definition.definitions[0] if definition else None
