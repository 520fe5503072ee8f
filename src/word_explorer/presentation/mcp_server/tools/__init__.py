"""
MCP Tools - Tool implementations by category.
"""

from .word_tools import register_word_tools

__all__ = ["register_word_tools"]
