"""
Export Formats - Convert a WordBundle to downloadable documents.

Supported formats:
- JSON: Lossless structured export, parseable back into a WordBundle
- Markdown: Human-readable document with YAML front matter
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

import yaml

from word_explorer.core.exceptions import InvalidParameterError, ParseError
from word_explorer.models import WordBundle

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ["json", "markdown"]

_FORMAT_ALIASES = {"md": "markdown"}

_FILE_EXTENSIONS = {"json": "json", "markdown": "md"}


def normalize_format(format: str) -> str:
    """Canonical format name for *format* (case-insensitive, "md" accepted)."""
    key = (format or "").strip().lower()
    key = _FORMAT_ALIASES.get(key, key)
    if key not in SUPPORTED_FORMATS:
        raise InvalidParameterError("format", format, f"one of {SUPPORTED_FORMATS} (or 'md')")
    return key


def export_json(bundle: WordBundle, pretty: bool = True) -> str:
    """
    Export a bundle to JSON.

    Args:
        bundle: The bundle to export.
        pretty: Whether to pretty-print JSON.

    Returns:
        JSON formatted string; parse_json() reverses it.
    """
    if pretty:
        return json.dumps(bundle.to_dict(), indent=2, ensure_ascii=False)
    else:
        return json.dumps(bundle.to_dict(), ensure_ascii=False)


def parse_json(text: str) -> WordBundle:
    """
    Rebuild a WordBundle from export_json() output.

    Raises:
        ParseError: If the text is not a valid bundle document
    """
    try:
        return WordBundle.from_dict(json.loads(text))
    except (ValueError, KeyError, TypeError) as e:
        raise ParseError(f"Invalid word bundle JSON: {e}", source="export") from e


def _front_matter(bundle: WordBundle, exported_at: datetime) -> str:
    data = {
        "word": bundle.query,
        "exportedAt": exported_at.isoformat(),
        "sources": [tag.value for tag in bundle.sources_used()],
    }
    body = yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
    return f"---\n{body}---"


def export_markdown(bundle: WordBundle, exported_at: datetime | None = None) -> str:
    """
    Export a bundle to a Markdown document.

    Layout: front matter, title, phonetics line, then one section each for
    etymology, definitions, relations, associations and Wikipedia subtopics.
    Sections with nothing in them are left out.

    Args:
        bundle: The bundle to export.
        exported_at: Timestamp for the front matter. Defaults to now (UTC).

    Returns:
        Markdown formatted string.
    """
    exported_at = exported_at or datetime.now(UTC)
    parts = [_front_matter(bundle, exported_at), f"# {bundle.query}"]

    if bundle.phonetics:
        parts.append(" | ".join(p.text for p in bundle.phonetics))

    if bundle.etymology:
        parts.append(f"## Etymology\n{bundle.etymology}")

    if bundle.definitions:
        lines = ["## Definitions"]
        for d in bundle.definitions:
            if d.part_of_speech:
                lines.append(f"- **({d.part_of_speech})** {d.text}")
            else:
                lines.append(f"- {d.text}")
        parts.append("\n".join(lines))

    if bundle.relations:
        lines = ["## Relations"]
        lines.extend(f"- **[{r.rel.value}]** {r.target}" for r in bundle.relations)
        parts.append("\n".join(lines))

    if bundle.associations:
        lines = ["## Associations"]
        for a in bundle.associations:
            score = a.score if a.score is not None else "N/A"
            lines.append(f"- {a.term} (score: {score})")
        parts.append("\n".join(lines))

    if bundle.wiki.toc:
        lines = ["## Wikipedia Subtopics"]
        for item in bundle.wiki.toc:
            indent = "  " * max(item.level - 1, 0)
            lines.append(f"{indent}- {item.title}")
        parts.append("\n".join(lines))

    return "\n\n".join(parts)


def export_filename(bundle: WordBundle, format: str) -> str:
    """Download file name for a bundle, e.g. ``ephemeral.md``."""
    return f"{bundle.query}.{_FILE_EXTENSIONS[normalize_format(format)]}"


def export_bundle(bundle: WordBundle, format: str = "json") -> str:
    """
    Export a bundle to the specified format.

    Args:
        bundle: The bundle to export.
        format: Export format (json, markdown or md).

    Returns:
        Formatted string in requested format.

    Raises:
        InvalidParameterError: If format is not supported.
    """
    format = normalize_format(format)
    logger.debug(f"Exporting '{bundle.query}' as {format}")

    if format == "json":
        return export_json(bundle)
    return export_markdown(bundle)
