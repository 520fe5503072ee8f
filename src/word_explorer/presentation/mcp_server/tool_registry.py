"""
Tool Registry - Central MCP tool registration.

Usage:
    from .tool_registry import register_all_mcp_tools, list_registered_tools

    register_all_mcp_tools(mcp, orchestrator, synthesis_service)

    tools = list_registered_tools()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from word_explorer.application.aggregation import WordBundleOrchestrator
    from word_explorer.application.synthesis import SynthesisService

logger = logging.getLogger(__name__)


TOOL_CATEGORIES = {
    "lookup": {
        "name": "Lookup",
        "description": "Multi-source word lookup",
        "tools": ["explore_word", "get_word_of_the_day"],
    },
    "export": {
        "name": "Export",
        "description": "JSON / Markdown documents",
        "tools": ["export_word_bundle"],
    },
    "synthesis": {
        "name": "Synthesis",
        "description": "Gemini summary with inline citations",
        "tools": ["synthesize_word_summary"],
    },
}


def register_all_mcp_tools(
    mcp: FastMCP,
    orchestrator: WordBundleOrchestrator,
    synthesis_service: SynthesisService,
) -> dict[str, int]:
    """
    Register all MCP tools.

    Returns:
        Dict with category names and tool counts
    """
    from .tools import register_word_tools

    logger.info("Registering word tools...")
    registered = set(register_word_tools(mcp, orchestrator, synthesis_service))

    stats = {
        category: sum(1 for tool in info["tools"] if tool in registered)
        for category, info in TOOL_CATEGORIES.items()
    }
    logger.info(f"Total registered: {sum(stats.values())} tools")
    return stats


def list_registered_tools() -> dict[str, list[str]]:
    """List every defined tool, grouped by category."""
    return {category: list(info["tools"]) for category, info in TOOL_CATEGORIES.items()}
