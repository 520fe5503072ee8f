"""
Exports Module - Download formats for a WordBundle.

Provides:
- Lossless JSON export and parsing
- Markdown export with YAML front matter
"""

from .formats import (
    SUPPORTED_FORMATS,
    export_bundle,
    export_filename,
    export_json,
    export_markdown,
    normalize_format,
    parse_json,
)

__all__ = [
    "SUPPORTED_FORMATS",
    "export_bundle",  # Unified export function
    "export_filename",
    "export_json",
    "export_markdown",
    "normalize_format",
    "parse_json",
]
