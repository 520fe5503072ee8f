"""
Synthesis Service - Short AI summary of a WordBundle.

Turns the bundle into a compact text context, asks Gemini for a 90-120 word
synthesis that cites source tags inline (``[dictionaryapi]``,
``[conceptnet]``, ...) and returns the text. The bundle is only read.

A failed generation call raises SynthesisError and is not retried.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types

from word_explorer.core.exceptions import ErrorContext, SynthesisError, SynthesisUnavailableError

if TYPE_CHECKING:
    from word_explorer.models import WordBundle

logger = logging.getLogger(__name__)

DEFAULT_MODEL_GEMINI = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_OUTPUT_TOKENS = 512

MAX_PROMPT_DEFINITIONS = 5
MAX_PROMPT_RELATIONS = 15
MAX_PROMPT_ASSOCIATIONS = 10
MAX_PROMPT_SUBTOPICS = 5

_CITATION_RE = re.compile(r"\[([a-zA-Z]+)\]")


def format_bundle_for_prompt(bundle: WordBundle) -> str:
    """Render the parts of a bundle the model should see."""
    context = f"Word: {bundle.query}\n\n"

    if bundle.definitions:
        context += "Definitions:\n"
        for d in bundle.definitions[:MAX_PROMPT_DEFINITIONS]:
            context += f"- ({d.part_of_speech}) {d.text}\n"
        context += "\n"

    if bundle.relations:
        context += "Semantic Relations:\n"
        relations_by_type: dict[str, list[str]] = {}
        for r in bundle.relations[:MAX_PROMPT_RELATIONS]:
            relations_by_type.setdefault(r.rel.value, []).append(r.target)
        for rel, targets in relations_by_type.items():
            context += f"- {rel}: {', '.join(targets)}\n"
        context += "\n"

    if bundle.associations:
        context += "Associations:\n"
        context += ", ".join(a.term for a in bundle.associations[:MAX_PROMPT_ASSOCIATIONS]) + "\n\n"

    if bundle.wiki.toc:
        context += "Wikipedia Subtopics:\n"
        context += ", ".join(t.title for t in bundle.wiki.toc[:MAX_PROMPT_SUBTOPICS]) + "\n"

    return context


def build_prompt(bundle: WordBundle) -> str:
    """Full instruction prompt for one bundle."""
    return f"""
You are a linguistic analyst AI. Your task is to synthesize the provided data about a word into a concise and insightful summary.

**Instructions:**
1.  Produce a 90-120 word synthesis based *only* on the provided data bundles.
2.  Do not invent facts or definitions.
3.  When you use information, cite the source tag inline, like [dictionaryapi] or [conceptnet].
4.  Start with a primary definition.
5.  Weave in semantic relationships and associations to provide deeper context.
6.  Conclude with a brief mention of its conceptual space based on Wikipedia topics, if available.
7.  Maintain a neutral, analytical tone.

**Provided Data for "{bundle.query}":**
---
{format_bundle_for_prompt(bundle)}
---

**Synthesis:**
"""


def extract_citations(text: str) -> list[str]:
    """Bracketed source tags cited in a synthesis, first-seen order, no duplicates."""
    return list(dict.fromkeys(_CITATION_RE.findall(text)))


class SynthesisService:
    """
    Gemini-backed bundle summarizer.

    Args:
        api_key: Gemini API key. Without one the service is disabled and
            summarize() raises SynthesisUnavailableError.
        model: Model to use. Defaults to gemini-2.5-flash.
        temperature: Sampling temperature.
        client: Pre-built genai.Client (mainly for tests).
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL_GEMINI,
        temperature: float = DEFAULT_TEMPERATURE,
        client: Any = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._client = client
        if self._client is None and api_key:
            self._client = genai.Client(api_key=api_key)
        if self._client is None:
            logger.warning("Gemini API key not found. AI features will be disabled.")

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def summarize(self, bundle: WordBundle) -> str:
        """
        Generate the synthesis text for a bundle.

        Raises:
            SynthesisUnavailableError: If no API key is configured
            SynthesisError: If the generation call fails or returns no text
        """
        if self._client is None:
            raise SynthesisUnavailableError()

        config_kwargs: dict[str, Any] = {
            "temperature": self.temperature,
            "max_output_tokens": DEFAULT_MAX_OUTPUT_TOKENS,
        }
        # Flash models: skip internal thinking, the task is short
        if "flash" in self.model:
            config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=0)

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(bundle),
                config=types.GenerateContentConfig(**config_kwargs),
            )
        except Exception as e:
            logger.exception(f"Error calling Gemini API: {e}")
            raise SynthesisError(
                context=ErrorContext(tool_name="synthesize_word_summary", input_value=bundle.query),
            ) from e

        text = (response.text or "").strip()
        if not text:
            raise SynthesisError(
                "Gemini returned an empty synthesis.",
                context=ErrorContext(tool_name="synthesize_word_summary", input_value=bundle.query),
            )
        return text
