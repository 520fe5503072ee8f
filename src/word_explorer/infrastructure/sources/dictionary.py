"""
Free Dictionary API Integration

Provides definitions, phonetic transcriptions and etymology notes from
dictionaryapi.dev.

API Documentation: https://dictionaryapi.dev/

Response shape (abridged):
    [
        {
            "word": "ephemeral",
            "phonetics": [{"text": "/ɪˈfɛm(ə)ɹəl/", "audio": "https://..."}],
            "origin": "late 16th century ...",
            "meanings": [
                {
                    "partOfSpeech": "adjective",
                    "definitions": [
                        {"definition": "lasting for a very short time.", "example": "..."}
                    ]
                }
            ],
            "sourceUrls": ["https://en.wiktionary.org/wiki/ephemeral"]
        }
    ]

An unknown word is answered with HTTP 404, which is an empty result here.
"""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any

from word_explorer.infrastructure.sources.base_client import DEFAULT_TIMEOUT, BaseAPIClient
from word_explorer.models import Definition, Phonetic, SourceAttribution, SourceTag

logger = logging.getLogger(__name__)

DICTIONARY_API_BASE = "https://api.dictionaryapi.dev/api/v2/entries"


@dataclass(frozen=True, slots=True)
class DictionaryResult:
    """The dictionary slice of a WordBundle."""
    definitions: tuple[Definition, ...] = ()
    phonetics: tuple[Phonetic, ...] = ()
    etymology: str | None = None

    @classmethod
    def empty(cls) -> DictionaryResult:
        return cls()

    @property
    def record_count(self) -> int:
        return len(self.definitions)


class DictionaryClient(BaseAPIClient):
    """
    Free Dictionary API client.

    Usage:
        async with DictionaryClient() as client:
            result = await client.fetch("ephemeral")
            result.definitions[0].text
    """

    _service_name = "DictionaryAPI"

    def __init__(
        self,
        lang: str = "en",
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int | None = None,
    ):
        self._lang = lang
        super().__init__(base_url=DICTIONARY_API_BASE, timeout=timeout, max_retries=max_retries)

    async def fetch(self, term: str) -> DictionaryResult:
        """
        Look up a term.

        Args:
            term: Normalized (lowercased, trimmed) search term

        Returns:
            DictionaryResult; empty when the word is unknown or the call failed
        """
        url = f"/{self._lang}/{urllib.parse.quote(term, safe='')}"
        data = await self._make_request(url)

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return DictionaryResult.empty()

        return self.parse_entry(data[0])

    @staticmethod
    def parse_entry(entry: dict[str, Any]) -> DictionaryResult:
        """Convert the first dictionary entry into unified records."""
        source_urls = entry.get("sourceUrls")
        source_url = _text(source_urls[0]) if isinstance(source_urls, list) and source_urls else None

        definitions: list[Definition] = []
        for meaning in _list(entry.get("meanings")):
            if not isinstance(meaning, dict):
                continue
            part_of_speech = _text(meaning.get("partOfSpeech"))
            for item in _list(meaning.get("definitions")):
                if not isinstance(item, dict) or not _text(item.get("definition")):
                    logger.debug(f"DictionaryAPI: skipping malformed definition {item!r}")
                    continue
                example = _text(item.get("example"))
                definitions.append(
                    Definition(
                        text=item["definition"],
                        part_of_speech=part_of_speech,
                        examples=(example,) if example else (),
                        attribution=SourceAttribution.now(SourceTag.DICTIONARYAPI, source_url),
                    )
                )

        phonetics = tuple(
            Phonetic(text=p["text"], audio=_text(p.get("audio")))
            for p in _list(entry.get("phonetics"))
            if isinstance(p, dict) and _text(p.get("text"))
        )

        return DictionaryResult(
            definitions=tuple(definitions),
            phonetics=phonetics,
            etymology=_text(entry.get("origin")),
        )


def _text(value: Any) -> str | None:
    """Non-empty string, or None for anything else."""
    return value if isinstance(value, str) and value else None


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []
