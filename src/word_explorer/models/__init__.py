"""
Models Module - Unified data models for multi-source word lookup.
"""

from .word_bundle import (
    Association,
    Definition,
    MorphKind,
    MorphVariant,
    Phonetic,
    RelationEdge,
    RelationType,
    SourceAttribution,
    SourceTag,
    WikiSection,
    WikiTocItem,
    WordBundle,
)

__all__ = [
    "Association",
    "Definition",
    "MorphKind",
    "MorphVariant",
    "Phonetic",
    "RelationEdge",
    "RelationType",
    "SourceAttribution",
    "SourceTag",
    "WikiSection",
    "WikiTocItem",
    "WordBundle",
]
