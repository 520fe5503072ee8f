"""
Word Bundle Orchestrator - Fan-out lookup across all word data providers.

Given a raw user-entered term, the orchestrator:
1. Normalizes the term (trim + lowercase); an empty term is rejected before
   any network call is made
2. Dispatches the five provider calls concurrently
3. Waits for every call to settle; a rejected call never aborts or delays
   the others and is replaced by that provider's empty result
4. Merges the pieces into one immutable WordBundle, with Datamuse synonym
   edges always ahead of ConceptNet edges
5. Returns the bundle with ``query`` set to the user's own spelling

Deciding that an empty bundle means "not found" is left to the caller.

Alongside the bundle, ``build_with_report`` returns an AggregationReport
that keeps apart "provider had nothing" (empty) and "provider call raised"
(failed). The report is diagnostic only; it never changes the bundle.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from word_explorer.core.async_utils import gather_settled
from word_explorer.core.exceptions import ErrorContext, InvalidInputError
from word_explorer.infrastructure.sources import (
    DictionaryResult,
    get_conceptnet_client,
    get_datamuse_client,
    get_dictionary_client,
    get_wikipedia_client,
)
from word_explorer.models import WikiSection, WordBundle

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from word_explorer.infrastructure.sources import (
        ConceptNetClient,
        DatamuseClient,
        DictionaryClient,
        WikipediaClient,
    )

logger = logging.getLogger(__name__)


# Adapter names, in dispatch order
DICTIONARY = "dictionary"
DATAMUSE_SYNONYMS = "datamuse_synonyms"
DATAMUSE_ASSOCIATIONS = "datamuse_associations"
CONCEPTNET = "conceptnet"
WIKIPEDIA = "wikipedia"

ADAPTERS: tuple[str, ...] = (
    DICTIONARY,
    DATAMUSE_SYNONYMS,
    DATAMUSE_ASSOCIATIONS,
    CONCEPTNET,
    WIKIPEDIA,
)

# What each adapter contributes when its call is rejected
EMPTY_RESULTS: dict[str, Callable[[], Any]] = {
    DICTIONARY: DictionaryResult.empty,
    DATAMUSE_SYNONYMS: list,
    DATAMUSE_ASSOCIATIONS: list,
    CONCEPTNET: list,
    WIKIPEDIA: list,
}


class AdapterStatus(Enum):
    """How one adapter call settled."""
    OK = "ok"           # Fulfilled with at least one record
    EMPTY = "empty"     # Fulfilled with nothing (not found, or failure absorbed by the adapter)
    FAILED = "failed"   # Rejected; the empty shape was substituted


@dataclass(frozen=True)
class AdapterOutcome:
    """Diagnostic record for one adapter call."""
    adapter: str
    status: AdapterStatus
    record_count: int = 0
    elapsed_ms: float = 0.0
    error: str | None = None


@dataclass(frozen=True)
class AggregationReport:
    """Per-search diagnostics: which providers contributed and how fast."""
    query: str
    normalized_query: str
    outcomes: tuple[AdapterOutcome, ...] = ()
    elapsed_ms: float = 0.0

    def outcome(self, adapter: str) -> AdapterOutcome:
        for o in self.outcomes:
            if o.adapter == adapter:
                return o
        raise KeyError(adapter)

    @property
    def failed(self) -> list[str]:
        return [o.adapter for o in self.outcomes if o.status is AdapterStatus.FAILED]

    @property
    def empty(self) -> list[str]:
        return [o.adapter for o in self.outcomes if o.status is AdapterStatus.EMPTY]

    def summary(self) -> str:
        """One-line description for logs."""
        parts = [f"{o.adapter}={o.status.value}({o.record_count})" for o in self.outcomes]
        return f"'{self.normalized_query}' in {self.elapsed_ms:.0f}ms: " + ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "normalized_query": self.normalized_query,
            "elapsed_ms": round(self.elapsed_ms, 1),
            "adapters": [
                {
                    "adapter": o.adapter,
                    "status": o.status.value,
                    "record_count": o.record_count,
                    "elapsed_ms": round(o.elapsed_ms, 1),
                    "error": o.error,
                }
                for o in self.outcomes
            ],
        }


def _record_count(value: Any) -> int:
    if isinstance(value, DictionaryResult):
        return value.record_count
    return len(value)


class WordBundleOrchestrator:
    """
    Builds a WordBundle from the four provider clients.

    The Datamuse client serves two of the five calls (synonyms and
    associations).

    Usage:
        orchestrator = WordBundleOrchestrator(
            dictionary=DictionaryClient(),
            datamuse=DatamuseClient(),
            conceptnet=ConceptNetClient(),
            wikipedia=WikipediaClient(),
        )
        bundle = await orchestrator.build("Ephemeral")
    """

    def __init__(
        self,
        dictionary: DictionaryClient,
        datamuse: DatamuseClient,
        conceptnet: ConceptNetClient,
        wikipedia: WikipediaClient,
    ) -> None:
        self._dictionary = dictionary
        self._datamuse = datamuse
        self._conceptnet = conceptnet
        self._wikipedia = wikipedia

    @staticmethod
    def normalize_term(term: str) -> str:
        """
        Trim and lowercase a search term.

        Raises:
            InvalidInputError: If nothing is left after trimming
        """
        normalized = term.strip().lower() if isinstance(term, str) else ""
        if not normalized:
            raise InvalidInputError(
                term,
                context=ErrorContext(tool_name="explore_word", operation="normalize_term"),
            )
        return normalized

    async def build(self, term: str) -> WordBundle:
        """
        Build the bundle for a raw user-entered term.

        Raises:
            InvalidInputError: If the term is empty or whitespace-only.
                Provider failures never raise.
        """
        bundle, _ = await self.build_with_report(term)
        return bundle

    async def build_with_report(self, term: str) -> tuple[WordBundle, AggregationReport]:
        """Build the bundle and the per-adapter diagnostic report."""
        normalized = self.normalize_term(term)
        start_time = time.perf_counter()
        timings: dict[str, float] = {}

        async def timed(adapter: str, call: Awaitable[Any]) -> Any:
            started = time.perf_counter()
            try:
                return await call
            finally:
                timings[adapter] = (time.perf_counter() - started) * 1000

        settled = await gather_settled(
            timed(DICTIONARY, self._dictionary.fetch(normalized)),
            timed(DATAMUSE_SYNONYMS, self._datamuse.fetch_synonyms(normalized)),
            timed(DATAMUSE_ASSOCIATIONS, self._datamuse.fetch_associations(normalized)),
            timed(CONCEPTNET, self._conceptnet.fetch_edges(normalized)),
            timed(WIKIPEDIA, self._wikipedia.fetch_toc(normalized)),
        )

        values: dict[str, Any] = {}
        outcomes: list[AdapterOutcome] = []
        for adapter, result in zip(ADAPTERS, settled, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Adapter '{adapter}' rejected for '{normalized}': {result!r}")
                values[adapter] = EMPTY_RESULTS[adapter]()
                outcomes.append(
                    AdapterOutcome(
                        adapter=adapter,
                        status=AdapterStatus.FAILED,
                        elapsed_ms=timings.get(adapter, 0.0),
                        error=f"{type(result).__name__}: {result}",
                    )
                )
                continue

            values[adapter] = result
            count = _record_count(result)
            outcomes.append(
                AdapterOutcome(
                    adapter=adapter,
                    status=AdapterStatus.OK if count else AdapterStatus.EMPTY,
                    record_count=count,
                    elapsed_ms=timings.get(adapter, 0.0),
                )
            )

        dictionary: DictionaryResult = values[DICTIONARY]
        bundle = WordBundle(
            query=term.strip(),
            phonetics=dictionary.phonetics,
            etymology=dictionary.etymology,
            definitions=dictionary.definitions,
            relations=(*values[DATAMUSE_SYNONYMS], *values[CONCEPTNET]),
            associations=tuple(values[DATAMUSE_ASSOCIATIONS]),
            morphology=(),
            wiki=WikiSection(toc=tuple(values[WIKIPEDIA])),
        )

        report = AggregationReport(
            query=bundle.query,
            normalized_query=normalized,
            outcomes=tuple(outcomes),
            elapsed_ms=(time.perf_counter() - start_time) * 1000,
        )
        logger.info(f"Word bundle built: {report.summary()}")

        return bundle, report


# Default orchestrator over the singleton clients
_default_orchestrator: WordBundleOrchestrator | None = None


def get_default_orchestrator() -> WordBundleOrchestrator:
    """Get or create the orchestrator wired to the default source clients."""
    global _default_orchestrator
    if _default_orchestrator is None:
        _default_orchestrator = WordBundleOrchestrator(
            dictionary=get_dictionary_client(),
            datamuse=get_datamuse_client(),
            conceptnet=get_conceptnet_client(),
            wikipedia=get_wikipedia_client(),
        )
    return _default_orchestrator


def reset_default_orchestrator() -> None:
    """Forget the default orchestrator (after its clients were closed)."""
    global _default_orchestrator
    _default_orchestrator = None


async def build_word_bundle(term: str) -> WordBundle:
    """
    Build a WordBundle for a raw term using the default source clients.

    Raises:
        InvalidInputError: If the term is empty or whitespace-only
    """
    return await get_default_orchestrator().build(term)
