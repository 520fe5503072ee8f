"""Tests for DI container and application lifecycle."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from word_explorer.application.aggregation import WordBundleOrchestrator
from word_explorer.application.synthesis import SynthesisService
from word_explorer.container import ApplicationContainer, close_clients
from word_explorer.infrastructure.sources import (
    ConceptNetClient,
    DatamuseClient,
    DictionaryClient,
    WikipediaClient,
)

CONFIG = {
    "timeout": 3.0,
    "max_retries": 2,
    "lang": "de",
    "gemini_api_key": None,
    "gemini_model": "gemini-2.5-flash",
}


def make_container(**overrides) -> ApplicationContainer:
    container = ApplicationContainer()
    container.config.from_dict({**CONFIG, **overrides})
    return container


# ============================================================================
# DI Container Tests
# ============================================================================


class TestApplicationContainer:
    """Test the DI container manages services correctly."""

    def test_container_config(self) -> None:
        container = make_container()
        assert container.config.timeout() == 3.0
        assert container.config.lang() == "de"

    async def test_clients_configured(self) -> None:
        container = make_container()

        dictionary = container.dictionary_client()
        conceptnet = container.conceptnet_client()

        assert isinstance(dictionary, DictionaryClient)
        assert isinstance(conceptnet, ConceptNetClient)
        assert isinstance(container.datamuse_client(), DatamuseClient)
        assert isinstance(container.wikipedia_client(), WikipediaClient)
        assert dictionary.timeout == 3.0
        assert dictionary._max_retries == 2
        assert conceptnet._lang == "de"
        await close_clients(container)

    async def test_orchestrator_singleton_wired(self) -> None:
        container = make_container()

        o1 = container.orchestrator()
        o2 = container.orchestrator()

        assert o1 is o2
        assert isinstance(o1, WordBundleOrchestrator)
        assert o1._dictionary is container.dictionary_client()
        assert o1._datamuse is container.datamuse_client()
        await close_clients(container)

    def test_synthesis_disabled_without_key(self) -> None:
        container = make_container()
        service = container.synthesis_service()
        assert isinstance(service, SynthesisService)
        assert not service.enabled

    def test_override_provider(self) -> None:
        """Container supports provider overriding for tests."""
        from dependency_injector import providers

        container = make_container()
        mock_orchestrator = MagicMock()
        container.orchestrator.override(providers.Object(mock_orchestrator))

        assert container.orchestrator() is mock_orchestrator

        container.orchestrator.reset_override()


class TestCloseClients:
    async def test_closes_and_resets(self) -> None:
        from dependency_injector import providers

        container = make_container()
        mocks = {}
        for name in ("dictionary_client", "datamuse_client", "conceptnet_client", "wikipedia_client"):
            mock = MagicMock()
            mock.close = AsyncMock()
            getattr(container, name).override(providers.Object(mock))
            mocks[name] = mock

        await close_clients(container)

        for mock in mocks.values():
            mock.close.assert_awaited_once()

    async def test_unused_clients_open_no_connections(self) -> None:
        container = make_container()
        dictionary = container.dictionary_client()
        dictionary._get_client()
        wikipedia = container.wikipedia_client()

        await close_clients(container)

        assert dictionary._client is None
        assert wikipedia._client is None
        assert container.dictionary_client() is not dictionary
        await close_clients(container)
