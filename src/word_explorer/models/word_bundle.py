"""
WordBundle - Unified Word Model for Multi-Source Lookup

This module defines the canonical data structure for everything known about
a word, normalizing data from several providers into a single format.

Architecture Decision:
    We use frozen dataclasses instead of Pydantic for:
    1. Lightweight - no external dependency
    2. Immutability - a bundle has no mutation API once built
    3. Simplicity - structural equality for free

Supported Sources:
    - dictionaryapi (Free Dictionary API)
    - datamuse (lexical associations)
    - conceptnet (semantic graph)
    - wikipedia (table of contents)
    - gemini (generated synthesis)

Every leaf record (Definition, RelationEdge, Association, WikiTocItem,
MorphVariant) carries exactly one SourceAttribution naming the provider that
produced it. Records from different providers are never merged.

Example:
    >>> edge = RelationEdge(
    ...     rel=RelationType.SYNONYM,
    ...     target="fleeting",
    ...     weight=90,
    ...     attribution=SourceAttribution.now(SourceTag.DATAMUSE),
    ... )
    >>> edge.attribution.source.value
    'datamuse'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class SourceTag(Enum):
    """Closed set of providers a record can be attributed to."""
    DICTIONARYAPI = "dictionaryapi"
    DATAMUSE = "datamuse"
    CONCEPTNET = "conceptnet"
    WIKIPEDIA = "wikipedia"
    GEMINI = "gemini"
    INTERNAL = "internal"


class RelationType(Enum):
    """Closed set of relation kinds between the query and a target."""
    SYNONYM = "synonym"
    ANTONYM = "antonym"
    HYPERNYM = "hypernym"
    HYPONYM = "hyponym"
    MERONYM = "meronym"
    HOLONYM = "holonym"
    ISA = "isa"
    USEDFOR = "usedfor"
    RELATEDTO = "relatedto"
    ATLOCATION = "atlocation"
    DERIVEDFROM = "derivedfrom"
    TRIGGERS = "triggers"
    HASSUBEVENT = "hassubevent"
    HASCONTEXT = "hascontext"
    MANNEROF = "mannerof"
    CAUSES = "causes"
    CAPABLEOF = "capableof"


class MorphKind(Enum):
    """Kinds of morphological variant."""
    PREFIX = "prefix"
    SUFFIX = "suffix"
    INFLECTION = "inflection"


@dataclass(frozen=True, slots=True)
class SourceAttribution:
    """
    Where a record came from.

    fetched_at is always timezone-aware (UTC) and travels as ISO-8601.
    """
    source: SourceTag
    fetched_at: datetime
    url: str | None = None

    @classmethod
    def now(cls, source: SourceTag, url: str | None = None) -> SourceAttribution:
        """Stamp an attribution with the current capture time."""
        return cls(source=source, fetched_at=datetime.now(UTC), url=url)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "url": self.url,
            "fetchedAt": self.fetched_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceAttribution:
        return cls(
            source=SourceTag(data["source"]),
            fetched_at=datetime.fromisoformat(data["fetchedAt"]),
            url=data.get("url"),
        )


@dataclass(frozen=True, slots=True)
class Phonetic:
    """A pronunciation record."""
    text: str
    audio: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "audio": self.audio}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Phonetic:
        return cls(text=data["text"], audio=data.get("audio"))


@dataclass(frozen=True, slots=True)
class Definition:
    """One sense of the word, as given by a dictionary provider."""
    text: str
    attribution: SourceAttribution
    part_of_speech: str | None = None
    examples: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "partOfSpeech": self.part_of_speech,
            "examples": list(self.examples),
            "attribution": self.attribution.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Definition:
        return cls(
            text=data["text"],
            part_of_speech=data.get("partOfSpeech"),
            examples=tuple(data.get("examples") or ()),
            attribution=SourceAttribution.from_dict(data["attribution"]),
        )


@dataclass(frozen=True, slots=True)
class RelationEdge:
    """
    A typed edge from the query word to a related word or phrase.

    weight is on the provider's own scale and is not normalized across
    providers.
    """
    rel: RelationType
    target: str
    attribution: SourceAttribution
    weight: float | int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rel": self.rel.value,
            "target": self.target,
            "weight": self.weight,
            "attribution": self.attribution.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelationEdge:
        return cls(
            rel=RelationType(data["rel"]),
            target=data["target"],
            weight=data.get("weight"),
            attribution=SourceAttribution.from_dict(data["attribution"]),
        )


@dataclass(frozen=True, slots=True)
class Association:
    """A word associated with (triggered by) the query."""
    term: str
    attribution: SourceAttribution
    score: float | int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "term": self.term,
            "score": self.score,
            "attribution": self.attribution.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Association:
        return cls(
            term=data["term"],
            score=data.get("score"),
            attribution=SourceAttribution.from_dict(data["attribution"]),
        )


@dataclass(frozen=True, slots=True)
class MorphVariant:
    """A prefix, suffix or inflected form of the query word."""
    form: str
    kind: MorphKind
    attribution: SourceAttribution
    rule: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "form": self.form,
            "kind": self.kind.value,
            "rule": self.rule,
            "attribution": self.attribution.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MorphVariant:
        return cls(
            form=data["form"],
            kind=MorphKind(data["kind"]),
            rule=data.get("rule"),
            attribution=SourceAttribution.from_dict(data["attribution"]),
        )


@dataclass(frozen=True, slots=True)
class WikiTocItem:
    """One heading from an encyclopedia page's table of contents."""
    index: str  # Section path, e.g. "2.1"
    title: str
    level: int  # 1-based heading depth
    attribution: SourceAttribution
    anchor: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "title": self.title,
            "level": self.level,
            "anchor": self.anchor,
            "attribution": self.attribution.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WikiTocItem:
        return cls(
            index=data["index"],
            title=data["title"],
            level=int(data["level"]),
            anchor=data.get("anchor"),
            attribution=SourceAttribution.from_dict(data["attribution"]),
        )


@dataclass(frozen=True, slots=True)
class WikiSection:
    """Encyclopedia slice of a bundle."""
    toc: tuple[WikiTocItem, ...] = ()
    summary: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "toc": [item.to_dict() for item in self.toc],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WikiSection:
        return cls(
            toc=tuple(WikiTocItem.from_dict(item) for item in data.get("toc") or ()),
            summary=data.get("summary"),
        )


@dataclass(frozen=True, slots=True)
class WordBundle:
    """
    Unified, attributed view of a word across all providers.

    Design Principles:
    1. Immutable - built once per search, replaced wholesale on the next one
    2. Attributed - every leaf record names its single producing source
    3. Nullable - phonetics and etymology may be absent
    4. Extensible - morphology is a first-class (currently empty) collection

    query keeps the user's casing; providers were called with the
    lowercased form.
    """
    query: str
    definitions: tuple[Definition, ...] = ()
    relations: tuple[RelationEdge, ...] = ()
    associations: tuple[Association, ...] = ()
    morphology: tuple[MorphVariant, ...] = ()
    wiki: WikiSection = field(default_factory=WikiSection)
    phonetics: tuple[Phonetic, ...] | None = None
    etymology: str | None = None

    # ===================================================================
    # Properties
    # ===================================================================

    @property
    def is_empty(self) -> bool:
        """True when there are no definitions, relations or associations."""
        return not (self.definitions or self.relations or self.associations)

    def sources_used(self) -> list[SourceTag]:
        """Source tags over definitions then relations, first-seen order, no duplicates."""
        seen: dict[SourceTag, None] = {}
        for record in (*self.definitions, *self.relations):
            seen.setdefault(record.attribution.source, None)
        return list(seen)

    def relations_by_type(self) -> dict[RelationType, list[RelationEdge]]:
        """Group relation edges by relation type, keeping edge order."""
        grouped: dict[RelationType, list[RelationEdge]] = {}
        for edge in self.relations:
            grouped.setdefault(edge.rel, []).append(edge)
        return grouped

    # ===================================================================
    # Serialization
    # ===================================================================

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        This is the structured export format; from_dict() reverses it
        exactly.
        """
        return {
            "query": self.query,
            "phonetics": (
                [p.to_dict() for p in self.phonetics]
                if self.phonetics is not None
                else None
            ),
            "etymology": self.etymology,
            "definitions": [d.to_dict() for d in self.definitions],
            "relations": [r.to_dict() for r in self.relations],
            "associations": [a.to_dict() for a in self.associations],
            "morphology": [m.to_dict() for m in self.morphology],
            "wiki": self.wiki.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordBundle:
        """Rebuild a bundle from its structured export form."""
        phonetics = data.get("phonetics")
        return cls(
            query=data["query"],
            phonetics=(
                tuple(Phonetic.from_dict(p) for p in phonetics)
                if phonetics is not None
                else None
            ),
            etymology=data.get("etymology"),
            definitions=tuple(Definition.from_dict(d) for d in data.get("definitions") or ()),
            relations=tuple(RelationEdge.from_dict(r) for r in data.get("relations") or ()),
            associations=tuple(Association.from_dict(a) for a in data.get("associations") or ()),
            morphology=tuple(MorphVariant.from_dict(m) for m in data.get("morphology") or ()),
            wiki=WikiSection.from_dict(data.get("wiki") or {}),
        )
