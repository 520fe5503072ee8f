"""
Datamuse API Integration

Provides lexical associations from the Datamuse word-finding engine.

API Documentation: https://www.datamuse.com/api/

Two query modes are used:
- ``ml=<term>``      "means like"  -> synonym relation edges
- ``rel_trg=<term>`` "triggers"    -> associations

Each result item looks like ``{"word": "fleeting", "score": 90, "tags": [...]}``.
The score is Datamuse's own relevance scale and is passed through as-is.

Rate Limits:
- 100,000 requests per day without a key
"""

from __future__ import annotations

import logging
from typing import Any

from word_explorer.core.async_utils import RateLimiter
from word_explorer.infrastructure.sources.base_client import DEFAULT_TIMEOUT, BaseAPIClient
from word_explorer.models import Association, RelationEdge, RelationType, SourceAttribution, SourceTag

logger = logging.getLogger(__name__)

DATAMUSE_API_BASE = "https://api.datamuse.com/words"

DEFAULT_SYNONYM_LIMIT = 20
DEFAULT_ASSOCIATION_LIMIT = 30


class DatamuseClient(BaseAPIClient):
    """
    Datamuse API client.

    Usage:
        client = DatamuseClient()
        edges = await client.fetch_synonyms("ephemeral")
        associations = await client.fetch_associations("ephemeral")
    """

    _service_name = "Datamuse"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int | None = None,
    ):
        super().__init__(
            timeout=timeout,
            max_retries=max_retries,
            rate_limiter=RateLimiter(rate=10.0, per=1.0),
        )

    async def _query(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        data = await self._make_request(DATAMUSE_API_BASE, params=params)
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict) and isinstance(item.get("word"), str) and item["word"]]

    async def fetch_synonyms(self, term: str, max_results: int = DEFAULT_SYNONYM_LIMIT) -> list[RelationEdge]:
        """
        Words similar in meaning to the term.

        Returns:
            Synonym edges weighted by the Datamuse score, in provider order
        """
        items = await self._query({"ml": term, "md": "f", "max": max_results})
        return [
            RelationEdge(
                rel=RelationType.SYNONYM,
                target=item["word"],
                weight=_score(item),
                attribution=SourceAttribution.now(SourceTag.DATAMUSE),
            )
            for item in items
        ]

    async def fetch_associations(
        self,
        term: str,
        max_results: int = DEFAULT_ASSOCIATION_LIMIT,
    ) -> list[Association]:
        """
        Words triggered by (statistically associated with) the term.

        Returns:
            Associations scored by Datamuse, in provider order
        """
        items = await self._query({"rel_trg": term, "md": "f", "max": max_results})
        return [
            Association(
                term=item["word"],
                score=_score(item),
                attribution=SourceAttribution.now(SourceTag.DATAMUSE),
            )
            for item in items
        ]


def _score(item: dict[str, Any]) -> float | int | None:
    """Datamuse score, or None when absent or not a number."""
    score = item.get("score")
    if isinstance(score, bool) or not isinstance(score, int | float):
        return None
    return score
