"""
Synthesis - AI-generated natural-language summary of a WordBundle.
"""

from .service import (
    DEFAULT_MODEL_GEMINI,
    SynthesisService,
    build_prompt,
    extract_citations,
    format_bundle_for_prompt,
)

__all__ = [
    "DEFAULT_MODEL_GEMINI",
    "SynthesisService",
    "build_prompt",
    "extract_citations",
    "format_bundle_for_prompt",
]
