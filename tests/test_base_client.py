"""
Tests for BaseAPIClient: status handling, retries, deadline, circuit breaker.
"""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from word_explorer.core.async_utils import CircuitBreaker
from word_explorer.core.exceptions import NotFoundError
from word_explorer.infrastructure.sources.base_client import DEFAULT_TIMEOUT, BaseAPIClient

SLEEP = "word_explorer.infrastructure.sources.base_client.asyncio.sleep"


def make_client(response=None, side_effect=None, **kwargs) -> BaseAPIClient:
    client = BaseAPIClient(base_url="https://api.example.com/", **kwargs)
    client._client = MagicMock()
    client._client.get = AsyncMock(return_value=response, side_effect=side_effect)
    client._client.aclose = AsyncMock()
    return client


class TestBaseClientBasics:
    async def test_defaults(self):
        client = BaseAPIClient()
        assert client.timeout == DEFAULT_TIMEOUT == 8.0
        assert client._max_retries == 1
        await client.close()

    async def test_build_url(self):
        client = make_client()
        assert client._build_url("/items/1") == "https://api.example.com/items/1"
        assert client._build_url("https://other.org/x") == "https://other.org/x"

    async def test_context_manager_closes(self):
        client = make_client()
        http = client._client
        async with client:
            pass
        http.aclose.assert_awaited_once()
        assert client._client is None

    async def test_http_client_created_lazily(self):
        client = BaseAPIClient()
        assert client._client is None

        http = client._get_client()
        assert isinstance(http, httpx.AsyncClient)
        assert client._get_client() is http

        await client.close()
        assert client._client is None
        assert http.is_closed

    async def test_close_unused_client_is_noop(self):
        client = BaseAPIClient()
        await client.close()
        assert client._client is None


class TestBaseClientResponses:
    async def test_success_returns_json(self, response_factory):
        client = make_client(response_factory(200, {"ok": True}))
        result = await client._make_request("/items", params={"q": "x"})
        assert result == {"ok": True}
        client._client.get.assert_awaited_once_with(
            "https://api.example.com/items", params={"q": "x"}, headers={}
        )

    async def test_not_found_is_none(self, response_factory):
        breaker = CircuitBreaker(failure_threshold=1)
        client = make_client(response_factory(404), circuit_breaker=breaker)
        assert await client._make_request("/missing") is None
        assert client._client.get.await_count == 1
        assert breaker.state == "closed"

    def test_not_found_raises_from_status_hook(self, response_factory):
        client = make_client()
        with pytest.raises(NotFoundError):
            client._handle_expected_status(response_factory(404), "https://api.example.com/missing")

    async def test_client_error_not_retried(self, response_factory):
        client = make_client(response_factory(400), max_retries=3)
        assert await client._make_request("/bad-request") is None
        assert client._client.get.await_count == 1

    async def test_malformed_json_is_none(self, response_factory):
        client = make_client(response_factory(200, json_error=True))
        assert await client._make_request("/bad") is None

    async def test_text_mode(self, response_factory):
        response = response_factory(200)
        response.text = "plain"
        client = make_client(response)
        assert await client._make_request("/text", expect_json=False) == "plain"


class TestBaseClientRetries:
    async def test_rate_limit_honors_retry_after(self, response_factory):
        limited = response_factory(429, headers={"Retry-After": "0.5"})
        ok = response_factory(200, [1, 2])
        client = make_client(side_effect=[limited, ok])
        with patch(SLEEP, new=AsyncMock()) as sleep:
            assert await client._make_request("/x") == [1, 2]
        sleep.assert_awaited_once_with(0.5)

    async def test_rate_limit_exhausted(self, response_factory):
        limited = response_factory(429)
        client = make_client(side_effect=[limited, limited])
        with patch(SLEEP, new=AsyncMock()):
            assert await client._make_request("/x") is None
        assert client._client.get.await_count == 2

    async def test_transport_error_retried(self, response_factory):
        client = make_client(side_effect=[httpx.ConnectError("refused"), response_factory(200, {"a": 1})])
        with patch(SLEEP, new=AsyncMock()):
            assert await client._make_request("/x") == {"a": 1}
        assert client._client.get.await_count == 2

    async def test_transport_error_gives_up(self):
        client = make_client(side_effect=httpx.ConnectError("refused"), max_retries=2)
        with patch(SLEEP, new=AsyncMock()):
            assert await client._make_request("/x") is None
        assert client._client.get.await_count == 3

    async def test_server_error_retried_then_none(self, response_factory):
        client = make_client(response_factory(500))
        with patch(SLEEP, new=AsyncMock()) as sleep:
            assert await client._make_request("/boom") is None
        assert client._client.get.await_count == 2
        sleep.assert_awaited_once()

    async def test_service_unavailable_recovers(self, response_factory):
        client = make_client(side_effect=[response_factory(503), response_factory(200, {"ok": 1})])
        with patch(SLEEP, new=AsyncMock()):
            assert await client._make_request("/x") == {"ok": 1}

    async def test_server_error_without_retries(self, response_factory):
        client = make_client(response_factory(502), max_retries=0)
        with patch(SLEEP, new=AsyncMock()) as sleep:
            assert await client._make_request("/x") is None
        sleep.assert_not_awaited()

    async def test_timeout_never_retried(self):
        client = make_client(side_effect=httpx.ReadTimeout("slow"), max_retries=3)
        assert await client._make_request("/x") is None
        assert client._client.get.await_count == 1


class TestBaseClientDeadline:
    async def test_deadline_returns_none(self, response_factory):
        async def hang(*args, **kwargs):
            await asyncio.sleep(1.0)
            return response_factory(200, {"late": True})

        client = make_client(side_effect=hang, timeout=0.05)
        assert await client._make_request("/slow") is None


class TestBaseClientCircuitBreaker:
    async def test_open_circuit_skips_request(self, response_factory):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=60.0)
        client = make_client(response_factory(200, {}), circuit_breaker=breaker)
        breaker._state = "open"
        breaker._last_failure_time = time.monotonic()

        assert await client._make_request("/x") is None
        client._client.get.assert_not_awaited()
