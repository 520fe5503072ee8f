"""
Base API Client - Common HTTP request pattern for every word data provider.

Provides a reusable base class with:
- A hard per-call deadline (8 seconds by default); a call that runs out of
  time is cancelled and reported as "no data"
- Automatic retry on 429 (rate limit) with Retry-After support
- Retry of 5xx answers and transient transport errors (never of timeouts)
- httpx client created on first request
- Optional token-bucket rate limiting
- Circuit breaker for fault tolerance
- Consistent error handling and logging

Every failure mode ends in ``None`` so that adapters can turn it into their
empty result shape.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx
from typing_extensions import Self

from word_explorer.core.async_utils import CircuitBreaker, timeout_with_fallback
from word_explorer.core.exceptions import (
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
    get_retry_delay,
    is_retryable_error,
)

if TYPE_CHECKING:
    from word_explorer.core.async_utils import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0
DEFAULT_USER_AGENT = "unified-word-explorer/1.0"


class BaseAPIClient:
    """
    Base class for word data provider clients.

    Provides common infrastructure:
    - httpx.AsyncClient management
    - Per-call deadline covering retries and backoff
    - Retry on 429, on 5xx and on transient transport errors
    - Circuit breaker for fault tolerance
    - Consistent error handling

    Subclasses should set `_service_name` and can override:
    - `_handle_expected_status()`: Handle service-specific status codes (e.g., 404)
    - `_parse_response()`: Custom response processing

    Example:
        class MyClient(BaseAPIClient):
            _service_name = "MyAPI"

            def __init__(self):
                super().__init__(base_url="https://api.example.com")

            async def get_item(self, item_id: str) -> dict | None:
                return await self._make_request(f"/items/{item_id}")
    """

    _service_name: str = "API"
    _MAX_RETRIES: int = 1

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int | None = None,
        headers: dict[str, str] | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """
        Initialize base client.

        Args:
            base_url: Base URL for the API (optional, can pass full URLs)
            timeout: Deadline in seconds for one call, retries included
            max_retries: Retries for 429, 5xx and transport errors (default: class setting)
            headers: Default headers for all requests
            circuit_breaker: Optional circuit breaker for fault tolerance.
                             If None, a default one is created (threshold=10, recovery=60s).
            rate_limiter: Optional token bucket shared by all calls of this client
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = self._MAX_RETRIES if max_retries is None else max_retries
        self._rate_limiter = rate_limiter
        self._headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json", **(headers or {})}
        self._client: httpx.AsyncClient | None = None
        self._circuit_breaker = circuit_breaker or CircuitBreaker(failure_threshold=10, recovery_timeout=60.0)

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
                limits=httpx.Limits(
                    max_connections=20,
                    max_keepalive_connections=10,
                    keepalive_expiry=30.0,
                ),
            )
        return self._client

    def _build_url(self, url: str) -> str:
        """Build full URL from path or full URL."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self._base_url}{url}"

    async def _make_request(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> Any:
        """
        Make a GET request bounded by the client deadline.

        Args:
            url: Full URL or path (appended to base_url)
            params: Query string parameters
            headers: Additional headers for this request
            expect_json: If True, parse response as JSON; otherwise return text

        Returns:
            Parsed JSON, response text, or None on any failure or timeout
        """
        full_url = self._build_url(url)

        def on_deadline() -> None:
            logger.warning(f"{self._service_name}: request timed out after {self._timeout:.1f}s - {full_url}")

        return await timeout_with_fallback(
            self._request_with_retry(full_url, params=params, headers=headers, expect_json=expect_json),
            self._timeout,
            on_deadline,
        )

    async def _request_with_retry(
        self,
        url: str,
        *,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        expect_json: bool,
    ) -> Any:
        for attempt in range(self._max_retries + 1):
            if self._rate_limiter is not None:
                await self._rate_limiter.acquire()
            try:
                async with self._circuit_breaker:
                    response = await self._execute_request(url, params=params, headers=headers)
                    if response.status_code >= 500:
                        raise ServiceUnavailableError(
                            f"HTTP {response.status_code}: {response.reason_phrase}",
                            service=self._service_name,
                        )

                # Handle expected error codes (e.g., 404 = not found)
                expected = self._handle_expected_status(response, url)
                if expected is not _CONTINUE:
                    return expected

                # Handle 429 rate limiting
                if response.status_code == 429:
                    if attempt < self._max_retries:
                        retry_after = self._get_retry_after(response, attempt)
                        logger.warning(
                            f"{self._service_name}: Rate limited (429), "
                            f"retry {attempt + 1}/{self._max_retries} in {retry_after:.1f}s"
                        )
                        await asyncio.sleep(retry_after)
                        continue
                    logger.warning(f"{self._service_name}: Rate limit exceeded after retries")
                    return None

                response.raise_for_status()
                return self._parse_response(response, expect_json)

            except NotFoundError as e:
                logger.debug(str(e))
                return None
            except ServiceUnavailableError as e:
                if self._should_retry(e, attempt):
                    delay = get_retry_delay(e, attempt, cap=self._timeout / 2)
                    logger.warning(f"{e} (attempt {attempt + 1}), retrying in {delay:.1f}s")
                    await asyncio.sleep(delay)
                    continue
                logger.warning(f"{e}, giving up")
                return None
            except httpx.HTTPStatusError as e:
                logger.warning(
                    f"{self._service_name} HTTP error {e.response.status_code}: {e.response.reason_phrase}"
                )
                return None
            except httpx.TimeoutException as e:
                logger.warning(f"{self._service_name} request timed out: {e!r}")
                return None
            except httpx.RequestError as e:
                error = NetworkError(f"{self._service_name}: {e}")
                if self._should_retry(error, attempt):
                    delay = get_retry_delay(error, attempt, cap=self._timeout / 2)
                    logger.warning(f"{self._service_name} request error (attempt {attempt + 1}): {e}")
                    await asyncio.sleep(delay)
                    continue
                logger.warning(f"{self._service_name} request failed: {e}")
                return None
            except RateLimitError:
                logger.warning(f"{self._service_name}: Circuit breaker open, skipping request")
                return None
            except ParseError as e:
                logger.warning(str(e))
                return None

        return None

    async def _execute_request(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute the actual HTTP request. Override for custom behavior."""
        return await self._get_client().get(url, params=params, headers=headers or {})

    def _handle_expected_status(self, response: httpx.Response, url: str) -> Any:
        """
        Handle expected non-200 status codes that shouldn't trigger retry.

        Return a value to short-circuit (e.g., None for 404).
        Return the sentinel _CONTINUE to continue normal processing.

        Default: 404 means "the provider has nothing for this term" and
        raises NotFoundError, which the request loop turns into None.
        """
        if response.status_code == 404:
            raise NotFoundError(self._service_name, url)
        return _CONTINUE

    def _should_retry(self, error: Exception, attempt: int) -> bool:
        return attempt < self._max_retries and is_retryable_error(error)

    def _parse_response(self, response: httpx.Response, expect_json: bool) -> Any:
        """Parse response body. Override for custom extraction logic."""
        if not expect_json:
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(str(e), source=self._service_name) from e

    @staticmethod
    def _get_retry_after(response: httpx.Response, attempt: int) -> float:
        """Extract Retry-After from response headers, with exponential backoff fallback."""
        try:
            return float(response.headers.get("Retry-After", 2 ** (attempt + 1)))
        except (ValueError, TypeError):
            return float(2 ** (attempt + 1))

    async def close(self) -> None:
        """Close the underlying HTTP client, if one was ever created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


# Sentinel object to indicate "continue normal processing" from _handle_expected_status
_CONTINUE = object()
