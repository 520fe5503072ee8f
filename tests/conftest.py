"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from word_explorer.infrastructure.sources import DictionaryResult
from word_explorer.models import (
    Association,
    Definition,
    Phonetic,
    RelationEdge,
    RelationType,
    SourceAttribution,
    SourceTag,
    WikiSection,
    WikiTocItem,
    WordBundle,
)

FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def attribution(source: SourceTag, url: str | None = None) -> SourceAttribution:
    return SourceAttribution(source=source, fetched_at=FIXED_TIME, url=url)


# ============================================================
# Canned Provider Payloads
# ============================================================


@pytest.fixture
def dictionary_payload():
    """Free Dictionary API response for "ephemeral"."""
    return [
        {
            "word": "ephemeral",
            "phonetics": [
                {"text": "/ɪˈfɛm(ə)ɹəl/", "audio": "https://api.dictionaryapi.dev/media/ephemeral-uk.mp3"},
                {"audio": ""},
            ],
            "origin": "late 16th century: from Greek ephēmeros 'lasting only a day'.",
            "meanings": [
                {
                    "partOfSpeech": "adjective",
                    "definitions": [
                        {
                            "definition": "Lasting for a short period of time.",
                            "example": "fashions are ephemeral",
                        },
                        {"definition": "Existing for only one day."},
                    ],
                },
                {
                    "partOfSpeech": "noun",
                    "definitions": [{"definition": "Something which lasts for a short period of time."}],
                },
            ],
            "sourceUrls": ["https://en.wiktionary.org/wiki/ephemeral"],
        }
    ]


@pytest.fixture
def datamuse_synonyms_payload():
    """Datamuse ml= response."""
    return [
        {"word": "transient", "score": 96},
        {"word": "fleeting", "score": 92},
        {"word": "short-lived", "score": 88},
    ]


@pytest.fixture
def datamuse_associations_payload():
    """Datamuse rel_trg= response."""
    return [
        {"word": "fleeting", "score": 1650},
        {"word": "nature"},
    ]


@pytest.fixture
def conceptnet_payload():
    """ConceptNet /query response for /c/en/ephemeral."""
    return {
        "edges": [
            {
                "@id": "/a/[/r/RelatedTo/,/c/en/ephemeral/,/c/en/transient/]",
                "rel": {"@id": "/r/RelatedTo", "label": "RelatedTo"},
                "start": {"@id": "/c/en/ephemeral", "label": "ephemeral"},
                "end": {"@id": "/c/en/transient", "label": "transient"},
                "weight": 1.5,
            },
            {
                "@id": "/a/[/r/Antonym/,/c/en/permanent/,/c/en/ephemeral/a/]",
                "rel": {"@id": "/r/Antonym", "label": "Antonym"},
                "start": {"@id": "/c/en/permanent", "label": "permanent"},
                "end": {"@id": "/c/en/ephemeral/a", "label": "ephemeral"},
                "weight": 2.0,
            },
            {
                "@id": "/a/[/r/FormOf/,/c/en/ephemerals/,/c/en/ephemeral/]",
                "rel": {"@id": "/r/FormOf", "label": "FormOf"},
                "start": {"@id": "/c/en/ephemerals", "label": "ephemerals"},
                "end": {"@id": "/c/en/ephemeral", "label": "ephemeral"},
                "weight": 1.0,
            },
        ]
    }


@pytest.fixture
def wikipedia_payload():
    """MediaWiki action=parse&prop=sections response."""
    return {
        "parse": {
            "title": "Ephemerality",
            "sections": [
                {"toclevel": 1, "level": "2", "line": "Etymology", "number": "1", "index": "1", "anchor": "Etymology"},
                {"toclevel": 1, "level": "2", "line": "In nature", "number": "2", "index": "2", "anchor": "In_nature"},
                {"toclevel": 2, "level": "3", "line": "Mayflies", "number": "2.1", "index": "3", "anchor": "Mayflies"},
            ],
        }
    }


# ============================================================
# Model Fixtures
# ============================================================


@pytest.fixture
def sample_bundle():
    """A fully populated bundle with fixed timestamps."""
    return WordBundle(
        query="Ephemeral",
        phonetics=(Phonetic(text="/ɪˈfɛm(ə)ɹəl/", audio="https://example.org/e.mp3"),),
        etymology="From Greek ephēmeros.",
        definitions=(
            Definition(
                text="Lasting for a short period of time.",
                part_of_speech="adjective",
                examples=("fashions are ephemeral",),
                attribution=attribution(SourceTag.DICTIONARYAPI, "https://en.wiktionary.org/wiki/ephemeral"),
            ),
        ),
        relations=(
            RelationEdge(
                rel=RelationType.SYNONYM,
                target="transient",
                weight=96,
                attribution=attribution(SourceTag.DATAMUSE),
            ),
            RelationEdge(
                rel=RelationType.RELATEDTO,
                target="brief",
                weight=1.5,
                attribution=attribution(SourceTag.CONCEPTNET, "https://api.conceptnet.io/a/x"),
            ),
        ),
        associations=(
            Association(term="fleeting", score=1650, attribution=attribution(SourceTag.DATAMUSE)),
            Association(term="nature", attribution=attribution(SourceTag.DATAMUSE)),
        ),
        wiki=WikiSection(
            toc=(
                WikiTocItem(
                    index="1", title="Etymology", level=1, anchor="Etymology",
                    attribution=attribution(SourceTag.WIKIPEDIA),
                ),
                WikiTocItem(
                    index="3", title="Mayflies", level=2, anchor="Mayflies",
                    attribution=attribution(SourceTag.WIKIPEDIA),
                ),
            )
        ),
    )


# ============================================================
# Mock Clients
# ============================================================


@pytest.fixture
def mock_clients(sample_bundle):
    """Four stub provider clients returning the sample bundle's pieces."""
    dictionary = MagicMock()
    dictionary.fetch = AsyncMock(
        return_value=DictionaryResult(
            definitions=sample_bundle.definitions,
            phonetics=sample_bundle.phonetics,
            etymology=sample_bundle.etymology,
        )
    )
    datamuse = MagicMock()
    datamuse.fetch_synonyms = AsyncMock(return_value=[sample_bundle.relations[0]])
    datamuse.fetch_associations = AsyncMock(return_value=list(sample_bundle.associations))
    conceptnet = MagicMock()
    conceptnet.fetch_edges = AsyncMock(return_value=[sample_bundle.relations[1]])
    wikipedia = MagicMock()
    wikipedia.fetch_toc = AsyncMock(return_value=list(sample_bundle.wiki.toc))
    return {
        "dictionary": dictionary,
        "datamuse": datamuse,
        "conceptnet": conceptnet,
        "wikipedia": wikipedia,
    }


def make_response(status_code: int = 200, json_data=None, headers: dict | None = None, json_error: bool = False):
    """Build a MagicMock shaped like an httpx.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.reason_phrase = "Error" if status_code >= 400 else "OK"
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_data
    response.raise_for_status = MagicMock()
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=response
        )
    return response


@pytest.fixture
def response_factory():
    """Factory for fake httpx responses."""
    return make_response
