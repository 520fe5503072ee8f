"""
Application DI Container (dependency-injector).

Centralizes creation and lifecycle of the provider clients, the
aggregation orchestrator and the synthesis service.

Usage::

    from word_explorer.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "timeout": 8.0,
        "max_retries": 1,
        "lang": "en",
        "gemini_api_key": None,
        "gemini_model": "gemini-2.5-flash",
    })

    orchestrator = container.orchestrator()
    bundle = await orchestrator.build("ephemeral")

    # In tests, override any provider:
    container.orchestrator.override(providers.Object(mock_orchestrator))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

logger = logging.getLogger(__name__)


def _create_dictionary_client(lang: str, timeout: float, max_retries: int) -> object:
    """Lazy factory for DictionaryClient (avoids top-level import)."""
    from word_explorer.infrastructure.sources import DictionaryClient

    return DictionaryClient(lang=lang or "en", timeout=timeout, max_retries=max_retries)


def _create_datamuse_client(timeout: float, max_retries: int) -> object:
    """Lazy factory for DatamuseClient."""
    from word_explorer.infrastructure.sources import DatamuseClient

    return DatamuseClient(timeout=timeout, max_retries=max_retries)


def _create_conceptnet_client(lang: str, timeout: float, max_retries: int) -> object:
    """Lazy factory for ConceptNetClient."""
    from word_explorer.infrastructure.sources import ConceptNetClient

    return ConceptNetClient(lang=lang or "en", timeout=timeout, max_retries=max_retries)


def _create_wikipedia_client(timeout: float, max_retries: int) -> object:
    """Lazy factory for WikipediaClient."""
    from word_explorer.infrastructure.sources import WikipediaClient

    return WikipediaClient(timeout=timeout, max_retries=max_retries)


def _create_orchestrator(dictionary, datamuse, conceptnet, wikipedia) -> object:
    """Lazy factory for WordBundleOrchestrator."""
    from word_explorer.application.aggregation import WordBundleOrchestrator

    return WordBundleOrchestrator(
        dictionary=dictionary,
        datamuse=datamuse,
        conceptnet=conceptnet,
        wikipedia=wikipedia,
    )


def _create_synthesis_service(api_key: str | None, model: str | None) -> object:
    """Lazy factory for SynthesisService."""
    from word_explorer.application.synthesis import DEFAULT_MODEL_GEMINI, SynthesisService

    return SynthesisService(api_key=api_key or None, model=model or DEFAULT_MODEL_GEMINI)


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the Word Explorer application.

    Manages creation and lifecycle of all core services:
    - ``dictionary_client`` / ``datamuse_client`` / ``conceptnet_client`` /
      ``wikipedia_client``: one httpx-backed client per provider
    - ``orchestrator``: concurrent lookup merged into a WordBundle
    - ``synthesis_service``: Gemini summary of a bundle
    """

    config = providers.Configuration()

    dictionary_client = providers.Singleton(
        _create_dictionary_client,
        lang=config.lang,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )

    datamuse_client = providers.Singleton(
        _create_datamuse_client,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )

    conceptnet_client = providers.Singleton(
        _create_conceptnet_client,
        lang=config.lang,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )

    wikipedia_client = providers.Singleton(
        _create_wikipedia_client,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )

    orchestrator = providers.Singleton(
        _create_orchestrator,
        dictionary=dictionary_client,
        datamuse=datamuse_client,
        conceptnet=conceptnet_client,
        wikipedia=wikipedia_client,
    )

    synthesis_service = providers.Singleton(
        _create_synthesis_service,
        api_key=config.gemini_api_key,
        model=config.gemini_model,
    )


async def close_clients(container: ApplicationContainer) -> None:
    """Close the provider clients held by *container* and drop its singletons.

    A client that never sent a request has no HTTP connection pool, so
    closing it releases nothing.
    """
    for provider in (
        container.dictionary_client,
        container.datamuse_client,
        container.conceptnet_client,
        container.wikipedia_client,
    ):
        await provider().close()
    container.reset_singletons()
    logger.debug("Container clients closed")


__all__ = ["ApplicationContainer", "close_clients"]
