"""
Presentation Layer - Agent-facing surfaces.

- mcp_server: FastMCP server exposing the word tools
"""
