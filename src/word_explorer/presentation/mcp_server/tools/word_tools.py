"""
Word Tools - MCP tools over the aggregated WordBundle.

Provides:
- explore_word: Look a word up across all providers
- export_word_bundle: Look a word up and return it as a JSON/Markdown document
- synthesize_word_summary: Look a word up and summarize it with Gemini
- get_word_of_the_day: Suggested seed word

Invalid input and "no data found" are returned to the agent as formatted
error text. Provider failures never surface here; the bundle simply has less
in it.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from word_explorer.application.synthesis import extract_citations
from word_explorer.application.word_of_the_day import get_word_of_the_day as _pick_word_of_the_day
from word_explorer.core.exceptions import (
    EmptyResultError,
    ErrorContext,
    SynthesisError,
    ValidationError,
)
from word_explorer.exports import export_bundle, export_filename, export_json, normalize_format

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from word_explorer.application.aggregation import WordBundleOrchestrator
    from word_explorer.application.synthesis import SynthesisService
    from word_explorer.models import WordBundle

logger = logging.getLogger(__name__)


async def _lookup(orchestrator: WordBundleOrchestrator, word: str, tool_name: str) -> WordBundle:
    """Build a bundle, raising EmptyResultError when nothing came back."""
    bundle = await orchestrator.build(word)
    if bundle.is_empty:
        raise EmptyResultError(bundle.query, context=ErrorContext(tool_name=tool_name))
    return bundle


def register_word_tools(
    mcp: FastMCP,
    orchestrator: WordBundleOrchestrator,
    synthesis_service: SynthesisService,
) -> list[str]:
    """Register word lookup tools. Returns the registered tool names."""

    @mcp.tool()
    async def explore_word(word: str) -> str:
        """
        Look up a word across dictionary, thesaurus, semantic network and
        encyclopedia sources, merged into one attributed bundle.

        ## What You Get
        - Definitions with part of speech and examples (Free Dictionary)
        - Phonetics and etymology when available
        - Synonyms (Datamuse) and semantic relations (ConceptNet)
        - Associated words (Datamuse)
        - Wikipedia table of contents for the word's article

        Every record carries its source tag and capture time.

        Args:
            word: Word or short phrase to explore, e.g. "ephemeral"

        Returns:
            JSON WordBundle, or an error message when the word is empty or
            no source knows it.

        Example:
            explore_word(word="ephemeral")
        """
        logger.info(f"explore_word: {word!r}")
        try:
            bundle = await _lookup(orchestrator, word, "explore_word")
        except (ValidationError, EmptyResultError) as e:
            return e.to_agent_message()
        return export_json(bundle)

    @mcp.tool()
    async def export_word_bundle(word: str, format: str = "json") -> str:
        """
        Look up a word and export the bundle as a document.

        Args:
            word: Word to explore
            format: "json" (lossless, re-importable) or "markdown"/"md"
                    (readable document with YAML front matter)

        Returns:
            JSON with status, filename, format and content.
        """
        try:
            # Reject bad formats before spending five provider calls
            fmt = normalize_format(format)
            bundle = await _lookup(orchestrator, word, "export_word_bundle")
        except (ValidationError, EmptyResultError) as e:
            return e.to_agent_message()

        return json.dumps(
            {
                "status": "success",
                "filename": export_filename(bundle, fmt),
                "format": fmt,
                "content": export_bundle(bundle, fmt),
            },
            indent=2,
            ensure_ascii=False,
        )

    @mcp.tool()
    async def synthesize_word_summary(word: str) -> str:
        """
        Look up a word and write a short AI synthesis of everything found.

        The summary is 90-120 words, grounded only in the retrieved data and
        cites its sources inline, e.g. [dictionaryapi] or [conceptnet].
        Requires a Gemini API key (GEMINI_API_KEY).

        Args:
            word: Word to explore and summarize

        Returns:
            JSON with word, summary and the cited source tags, or a message
            explaining why no summary could be produced.
        """
        try:
            bundle = await _lookup(orchestrator, word, "synthesize_word_summary")
        except (ValidationError, EmptyResultError) as e:
            return e.to_agent_message()

        try:
            summary = await synthesis_service.summarize(bundle)
        except SynthesisError as e:
            logger.warning(f"Synthesis failed for {bundle.query!r}: {e}")
            return f"⚠️ {e}"

        return json.dumps(
            {
                "word": bundle.query,
                "summary": summary,
                "citations": extract_citations(summary),
            },
            indent=2,
            ensure_ascii=False,
        )

    @mcp.tool()
    def get_word_of_the_day() -> str:
        """
        Suggested word to explore. Stays the same while the server runs.

        Returns:
            The word of the day.
        """
        return _pick_word_of_the_day()

    return [
        "explore_word",
        "export_word_bundle",
        "synthesize_word_summary",
        "get_word_of_the_day",
    ]
