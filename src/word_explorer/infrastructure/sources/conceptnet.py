"""
ConceptNet API Integration

Provides semantic-graph edges between concepts from ConceptNet 5.

API Documentation: https://github.com/commonsense/conceptnet5/wiki/API

Edge shape (abridged):
    {
        "@id": "/a/[/r/RelatedTo/,/c/en/ephemeral/,/c/en/transient/]",
        "rel": {"@id": "/r/RelatedTo", "label": "RelatedTo"},
        "start": {"@id": "/c/en/ephemeral", "label": "ephemeral"},
        "end": {"@id": "/c/en/transient", "label": "transient"},
        "weight": 1.0
    }

Only a fixed set of relation kinds is kept; everything else the graph
returns (FormOf, Synonym, ExternalURL, ...) is dropped.
"""

from __future__ import annotations

import logging
from typing import Any

from word_explorer.infrastructure.sources.base_client import DEFAULT_TIMEOUT, BaseAPIClient
from word_explorer.models import RelationEdge, RelationType, SourceAttribution, SourceTag

logger = logging.getLogger(__name__)

CONCEPTNET_API_BASE = "https://api.conceptnet.io"

DEFAULT_EDGE_LIMIT = 50

ALLOWED_RELATIONS: frozenset[RelationType] = frozenset(
    {
        RelationType.RELATEDTO,
        RelationType.ISA,
        RelationType.USEDFOR,
        RelationType.ANTONYM,
        RelationType.HASSUBEVENT,
        RelationType.HASCONTEXT,
        RelationType.MANNEROF,
        RelationType.CAUSES,
        RelationType.DERIVEDFROM,
        RelationType.CAPABLEOF,
    }
)

_ALLOWED_BY_ID = {rel.value: rel for rel in ALLOWED_RELATIONS}


def concept_node(term: str, lang: str = "en") -> str:
    """ConceptNet node id for a term, e.g. ``/c/en/ice_cream``."""
    return f"/c/{lang}/{term.replace(' ', '_')}"


def relation_id(edge: dict[str, Any]) -> str:
    """Lowercased last path segment of an edge's relation, e.g. ``relatedto``."""
    return str(edge["rel"]["@id"]).rstrip("/").split("/")[-1].lower()


def _is_node(node_id: str, node: str) -> bool:
    # Sense-tagged ids such as /c/en/ephemeral/a still denote the query node
    return node_id == node or node_id.startswith(node + "/")


class ConceptNetClient(BaseAPIClient):
    """
    ConceptNet API client.

    Usage:
        client = ConceptNetClient(lang="en")
        edges = await client.fetch_edges("ephemeral")
    """

    _service_name = "ConceptNet"

    def __init__(
        self,
        lang: str = "en",
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int | None = None,
    ):
        self._lang = lang
        super().__init__(base_url=CONCEPTNET_API_BASE, timeout=timeout, max_retries=max_retries)

    async def fetch_edges(self, term: str, limit: int = DEFAULT_EDGE_LIMIT) -> list[RelationEdge]:
        """
        Fetch edges touching the term's concept node.

        Returns:
            Allowed relation edges, in provider order, with the target set to
            the endpoint that is not the query node
        """
        node = concept_node(term, self._lang)
        data = await self._make_request("/query", params={"node": node, "limit": limit})

        if not isinstance(data, dict) or not isinstance(data.get("edges"), list):
            return []

        return self.parse_edges(data["edges"], node)

    @staticmethod
    def parse_edges(edges: list[Any], node: str) -> list[RelationEdge]:
        """Filter and orient raw ConceptNet edges relative to ``node``."""
        results: list[RelationEdge] = []
        for edge in edges:
            try:
                rel = _ALLOWED_BY_ID.get(relation_id(edge))
                if rel is None:
                    continue

                target_node = edge["end"] if _is_node(edge["start"]["@id"], node) else edge["start"]
                label = target_node["label"]
                if not isinstance(label, str) or not label:
                    continue
                weight = edge.get("weight")
                edge_id = edge.get("@id")
                results.append(
                    RelationEdge(
                        rel=rel,
                        target=label,
                        weight=weight if isinstance(weight, int | float) and not isinstance(weight, bool) else None,
                        attribution=SourceAttribution.now(
                            SourceTag.CONCEPTNET,
                            f"{CONCEPTNET_API_BASE}{edge_id}" if edge_id else None,
                        ),
                    )
                )
            except (KeyError, TypeError, AttributeError) as e:
                logger.debug(f"ConceptNet: skipping malformed edge ({e!r})")
        return results
