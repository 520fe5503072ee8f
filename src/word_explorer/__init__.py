"""
Unified Word Explorer - Multi-source, AI-augmented lexicon

Looks a word up across several free providers at once and merges what comes
back into one attributed, immutable bundle.

Usage:
    from word_explorer import build_word_bundle, export_markdown

    bundle = await build_word_bundle("ephemeral")
    for d in bundle.definitions:
        print(f"({d.part_of_speech}) {d.text}  [{d.attribution.source.value}]")

    print(export_markdown(bundle))

Features:
    - Free Dictionary definitions, phonetics and etymology
    - Datamuse synonyms and associations
    - ConceptNet semantic relations
    - Wikipedia table of contents
    - JSON / Markdown export
    - Gemini synthesis with inline source citations
"""

from .application.aggregation import (
    AggregationReport,
    WordBundleOrchestrator,
    build_word_bundle,
)
from .application.synthesis import SynthesisService
from .exports import export_bundle, export_json, export_markdown, parse_json
from .models import (
    Association,
    Definition,
    RelationEdge,
    RelationType,
    SourceAttribution,
    SourceTag,
    WordBundle,
)

__version__ = "1.0.0"

__all__ = [
    # High-level API
    "build_word_bundle",
    "WordBundleOrchestrator",
    "AggregationReport",
    "SynthesisService",
    # Export
    "export_bundle",
    "export_json",
    "export_markdown",
    "parse_json",
    # Models
    "Association",
    "Definition",
    "RelationEdge",
    "RelationType",
    "SourceAttribution",
    "SourceTag",
    "WordBundle",
]
