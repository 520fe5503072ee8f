"""
Word Data Sources

One async client per external provider. Every client converts the provider's
native payload into unified records tagged with their source, and reports
"no data" (never an exception) when the provider fails, times out or has
nothing for the term.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │               WordBundleOrchestrator                    │
    └───────────────────────────┬─────────────────────────────┘
                                │  5 concurrent calls
    ┌───────────────────────────▼─────────────────────────────┐
    │  ┌────────────┬──────────────────┬───────────┬───────┐  │
    │  │ Dictionary │ Datamuse (ml +   │ ConceptNet│ Wiki  │  │
    │  │    API     │   rel_trg)       │  edges    │  TOC  │  │
    │  └────────────┴──────────────────┴───────────┴───────┘  │
    │                   BaseAPIClient (httpx)                 │
    └─────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

import logging
import os

from .base_client import DEFAULT_TIMEOUT, BaseAPIClient
from .conceptnet import ALLOWED_RELATIONS, ConceptNetClient, concept_node
from .datamuse import DatamuseClient
from .dictionary import DictionaryClient, DictionaryResult
from .wikipedia import WikipediaClient

logger = logging.getLogger(__name__)

# Lazy singletons
_dictionary_client: DictionaryClient | None = None
_datamuse_client: DatamuseClient | None = None
_conceptnet_client: ConceptNetClient | None = None
_wikipedia_client: WikipediaClient | None = None


def _default_timeout() -> float:
    return float(os.environ.get("WORD_EXPLORER_TIMEOUT", DEFAULT_TIMEOUT))


def get_dictionary_client() -> DictionaryClient:
    """Get or create Free Dictionary API client (lazy initialization)."""
    global _dictionary_client
    if _dictionary_client is None:
        _dictionary_client = DictionaryClient(timeout=_default_timeout())
    return _dictionary_client


def get_datamuse_client() -> DatamuseClient:
    """Get or create Datamuse client (lazy initialization)."""
    global _datamuse_client
    if _datamuse_client is None:
        _datamuse_client = DatamuseClient(timeout=_default_timeout())
    return _datamuse_client


def get_conceptnet_client(lang: str | None = None) -> ConceptNetClient:
    """Get or create ConceptNet client (lazy initialization)."""
    global _conceptnet_client
    if _conceptnet_client is None:
        _conceptnet_client = ConceptNetClient(
            lang=lang or os.environ.get("WORD_EXPLORER_LANG", "en"),
            timeout=_default_timeout(),
        )
    return _conceptnet_client


def get_wikipedia_client() -> WikipediaClient:
    """Get or create Wikipedia client (lazy initialization)."""
    global _wikipedia_client
    if _wikipedia_client is None:
        _wikipedia_client = WikipediaClient(timeout=_default_timeout())
    return _wikipedia_client


async def close_all_clients() -> None:
    """Close every singleton client that was created and forget it."""
    global _dictionary_client, _datamuse_client, _conceptnet_client, _wikipedia_client
    clients: list[BaseAPIClient | None] = [
        _dictionary_client,
        _datamuse_client,
        _conceptnet_client,
        _wikipedia_client,
    ]
    for client in clients:
        if client is not None:
            await client.close()
    _dictionary_client = _datamuse_client = _conceptnet_client = _wikipedia_client = None
    logger.debug("Source clients closed")


__all__ = [
    "ALLOWED_RELATIONS",
    "DEFAULT_TIMEOUT",
    "BaseAPIClient",
    "ConceptNetClient",
    "DatamuseClient",
    "DictionaryClient",
    "DictionaryResult",
    "WikipediaClient",
    "close_all_clients",
    "concept_node",
    "get_conceptnet_client",
    "get_datamuse_client",
    "get_dictionary_client",
    "get_wikipedia_client",
]
