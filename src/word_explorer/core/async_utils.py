"""
Async Utilities for Provider Calls.

Provides:
- Settle-all parallel execution (results and exceptions in call order)
- Rate limiting with token bucket
- Circuit breaker for flaky providers
- Timeout with fallback value
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import RateLimitError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

# =============================================================================
# Rate Limiter (Token Bucket Algorithm)
# =============================================================================

@dataclass
class RateLimiter:
    """
    Token bucket rate limiter for API calls.

    Example:
        limiter = RateLimiter(rate=10, per=1.0)
        async with limiter:
            await make_api_call()
    """
    rate: float = 10.0  # requests per period
    per: float = 1.0    # period in seconds
    _tokens: float = field(init=False)
    _last_update: float = field(init=False)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)

    def __post_init__(self) -> None:
        self._tokens = self.rate
        self._last_update = time.monotonic()

    async def acquire(self) -> None:
        """Acquire a token, waiting if necessary."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_update
            self._tokens = min(self.rate, self._tokens + elapsed * (self.rate / self.per))
            self._last_update = now

            if self._tokens < 1:
                wait_time = (1 - self._tokens) * (self.per / self.rate)
                logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)
                self._tokens = 0
            else:
                self._tokens -= 1

    async def __aenter__(self) -> RateLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


# =============================================================================
# Settle-all Parallel Execution
# =============================================================================

async def gather_settled(*coros: Awaitable[T]) -> list[T | BaseException]:
    """
    Run awaitables concurrently and collect every outcome.

    Each slot in the returned list holds either the awaitable's result or
    the exception it raised, in the order the awaitables were passed. A
    failure in one never cancels or delays the others.

    Example:
        first, second = await gather_settled(fetch_a(), fetch_b())
        if isinstance(first, BaseException):
            first = []
    """
    return list(await asyncio.gather(*coros, return_exceptions=True))


# =============================================================================
# Circuit Breaker Pattern
# =============================================================================

@dataclass
class CircuitBreaker:
    """
    Circuit breaker for fault tolerance.

    States:
    - CLOSED: Normal operation
    - OPEN: Failing, reject requests immediately
    - HALF_OPEN: Testing if service recovered

    Example:
        breaker = CircuitBreaker(failure_threshold=5)

        async with breaker:
            result = await risky_api_call()
    """
    failure_threshold: int = 5
    recovery_timeout: float = 30.0
    half_open_max_calls: int = 3

    _failure_count: int = field(init=False, default=0)
    _last_failure_time: float | None = field(init=False, default=None)
    _state: str = field(init=False, default="closed")
    _half_open_calls: int = field(init=False, default=0)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_open(self) -> bool:
        """Check if circuit is open (rejecting requests)."""
        if self._state == "open":
            if self._last_failure_time is not None:
                if time.monotonic() - self._last_failure_time > self.recovery_timeout:
                    return False  # Move to half-open
            return True
        return False

    async def __aenter__(self) -> CircuitBreaker:
        async with self._lock:
            if self.is_open:
                raise RateLimitError(
                    "Circuit breaker is open",
                    retry_after=self.recovery_timeout,
                )

            if self._state == "open":
                self._state = "half_open"
                self._half_open_calls = 0

            if self._state == "half_open":
                if self._half_open_calls >= self.half_open_max_calls:
                    raise RateLimitError(
                        "Circuit breaker is half-open (max calls reached)",
                        retry_after=self.recovery_timeout / 2,
                    )
                self._half_open_calls += 1

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        async with self._lock:
            if exc_val is not None:
                self._failure_count += 1
                self._last_failure_time = time.monotonic()

                if self._failure_count >= self.failure_threshold:
                    self._state = "open"
                    logger.warning(
                        f"Circuit breaker opened after {self._failure_count} failures"
                    )
            else:
                if self._state == "half_open":
                    self._state = "closed"
                    self._failure_count = 0
                    logger.info("Circuit breaker closed (recovered)")
                elif self._state == "closed":
                    self._failure_count = max(0, self._failure_count - 1)


# =============================================================================
# Utility Functions
# =============================================================================

async def timeout_with_fallback(
    coro: Awaitable[T],
    timeout: float,
    fallback: T | Callable[[], T],
) -> T:
    """
    Execute coroutine with timeout and fallback.

    On timeout the coroutine is cancelled and the fallback is returned.

    Args:
        coro: Coroutine to execute
        timeout: Timeout in seconds
        fallback: Value or callable to return on timeout

    Returns:
        Result or fallback value
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except TimeoutError:
        if callable(fallback):
            return fallback()
        return fallback
