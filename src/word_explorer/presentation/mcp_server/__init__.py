"""
Unified Word Explorer MCP Server

Usage as standalone server:
    python -m word_explorer.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "word-explorer": {
                "type": "stdio",
                "command": "word-explorer-mcp",
                "env": {"GEMINI_API_KEY": "..."}
            }
        }
    }

Usage for integration:
    from word_explorer.presentation.mcp_server import create_server

    server = create_server(gemini_api_key="...")
    server.run()
"""

from .server import create_server, get_container, main
from .tool_registry import list_registered_tools, register_all_mcp_tools

__all__ = [
    "create_server",
    "get_container",
    "list_registered_tools",
    "main",
    "register_all_mcp_tools",
]
