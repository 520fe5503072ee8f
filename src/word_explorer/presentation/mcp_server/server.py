"""
Unified Word Explorer MCP Server

A Model Context Protocol server that looks words up across several free
lexical providers and merges the results into one attributed bundle.

Features:
- Concurrent lookup (Free Dictionary, Datamuse, ConceptNet, Wikipedia)
- JSON / Markdown export
- Gemini synthesis with inline source citations

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tool_registry.py: Centralized tool registration
- tools/: Tool implementations
- container: DI container (dependency-injector) for service lifecycle
"""

from __future__ import annotations

import logging
import os
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any, TypeVar, cast

from mcp.server.fastmcp import FastMCP

from word_explorer.application.synthesis import DEFAULT_MODEL_GEMINI
from word_explorer.container import ApplicationContainer, close_clients
from word_explorer.core.exceptions import ConfigurationError
from word_explorer.infrastructure.sources import DEFAULT_TIMEOUT

from .instructions import SERVER_INSTRUCTIONS
from .tool_registry import register_all_mcp_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from word_explorer.application.aggregation import WordBundleOrchestrator
    from word_explorer.application.synthesis import SynthesisService

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 1
DEFAULT_LANG = "en"

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """Create a FastMCP lifespan handler bound to *container*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        """Application lifecycle: startup → yield → shutdown."""
        logger.info("Lifecycle: startup, resources ready")
        try:
            yield container
        finally:
            await close_clients(container)
            logger.info("Lifecycle: shutdown, provider HTTP clients closed")

    return _lifespan


def create_server(
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    lang: str = DEFAULT_LANG,
    gemini_api_key: str | None = None,
    gemini_model: str = DEFAULT_MODEL_GEMINI,
    name: str = "word-explorer",
) -> FastMCP:
    """
    Create and configure the Word Explorer MCP server.

    Uses :class:`~word_explorer.container.ApplicationContainer` for
    dependency injection and lifecycle management.

    Args:
        timeout: Per-call timeout for provider requests, in seconds.
        max_retries: Transport-error retries per provider call.
        lang: ConceptNet / Free Dictionary language code.
        gemini_api_key: Enables synthesize_word_summary when set.
        gemini_model: Gemini model used for synthesis.
        name: Server name.

    Returns:
        Configured FastMCP server instance.

    Raises:
        ConfigurationError: If timeout, max_retries or lang are out of range.
    """
    global _container
    logger.info("Initializing Word Explorer MCP Server...")

    if timeout <= 0:
        raise ConfigurationError(f"Provider timeout must be positive, got {timeout}")
    if max_retries < 0:
        raise ConfigurationError(f"max_retries cannot be negative, got {max_retries}")
    if not lang:
        raise ConfigurationError("Language code cannot be empty")

    # ── DI container ────────────────────────────────────────────────────
    _container = ApplicationContainer()
    _container.config.from_dict(
        {
            "timeout": timeout,
            "max_retries": max_retries,
            "lang": lang,
            "gemini_api_key": gemini_api_key,
            "gemini_model": gemini_model,
        }
    )

    orchestrator = cast("WordBundleOrchestrator", _container.orchestrator())
    synthesis_service = cast("SynthesisService", _container.synthesis_service())

    logger.info("Provider timeout: %.1fs, retries: %d, lang: %s", timeout, max_retries, lang)
    if synthesis_service.enabled:
        logger.info("Synthesis enabled: %s", gemini_model)
    else:
        logger.info("Synthesis disabled (no Gemini API key)")

    # ── Create MCP server with lifespan ─────────────────────────────────
    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(_container),
    )

    # ── Register all tools via centralized registry ─────────────────────
    stats = register_all_mcp_tools(
        mcp=mcp,
        orchestrator=orchestrator,
        synthesis_service=synthesis_service,
    )
    logger.info("Tool registration complete: %s", stats)

    logger.info("Word Explorer MCP Server initialized successfully")

    return mcp


N = TypeVar("N", int, float)


def _env_number(name: str, cast_to: type[N], default: N) -> N:
    """Read a numeric environment variable, falling back to *default* when unset."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast_to(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be {cast_to.__name__}, got {raw!r}") from e


def main():
    """Run the MCP server."""

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    timeout = _env_number("WORD_EXPLORER_TIMEOUT", float, DEFAULT_TIMEOUT)
    max_retries = _env_number("WORD_EXPLORER_MAX_RETRIES", int, DEFAULT_MAX_RETRIES)
    lang = os.environ.get("WORD_EXPLORER_LANG", "").strip() or DEFAULT_LANG

    # Gemini key: GEMINI_API_KEY → GOOGLE_API_KEY
    gemini_api_key = (
        os.environ.get("GEMINI_API_KEY", "").strip()
        or os.environ.get("GOOGLE_API_KEY", "").strip()
        or None
    )
    gemini_model = os.environ.get("WORD_EXPLORER_GEMINI_MODEL", "").strip() or DEFAULT_MODEL_GEMINI

    server = create_server(
        timeout=timeout,
        max_retries=max_retries,
        lang=lang,
        gemini_api_key=gemini_api_key,
        gemini_model=gemini_model,
    )

    # Run stdio MCP server (blocks)
    server.run()


if __name__ == "__main__":
    main()
