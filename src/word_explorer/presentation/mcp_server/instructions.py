"""
MCP Server Instructions - Usage guide for AI agents.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
Unified Word Explorer MCP Server - multi-source lexicon for AI agents

═══════════════════════════════════════════════════════════════════════════════
🎯 Tool selection
═══════════════════════════════════════════════════════════════════════════════

## 1️⃣ Look a word up
explore_word(word="ephemeral")
→ One JSON bundle: definitions, phonetics, etymology (Free Dictionary),
  synonyms and associations (Datamuse), semantic relations (ConceptNet),
  Wikipedia table of contents. Every record names its source.

## 2️⃣ Save it
export_word_bundle(word="ephemeral", format="markdown")
→ "json" is lossless; "markdown" (or "md") is a readable document with YAML
  front matter listing the sources used.

## 3️⃣ Explain it
synthesize_word_summary(word="ephemeral")
→ 90-120 word synthesis citing sources inline as [dictionaryapi],
  [conceptnet], ... Needs GEMINI_API_KEY on the server.

## 4️⃣ Need a starting point?
get_word_of_the_day()

═══════════════════════════════════════════════════════════════════════════════
⚠️ Notes
═══════════════════════════════════════════════════════════════════════════════
- Sources are queried concurrently. A source that fails or times out simply
  contributes nothing; the rest of the bundle is still returned.
- "No data found" means every source came back empty. Check the spelling.
- Relations list Datamuse synonyms first, then ConceptNet edges.
"""
