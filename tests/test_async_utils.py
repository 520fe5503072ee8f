"""Tests for async_utils.py: RateLimiter, CircuitBreaker, gather_settled, timeout."""

import asyncio

import pytest

from word_explorer.core.async_utils import (
    CircuitBreaker,
    RateLimiter,
    gather_settled,
    timeout_with_fallback,
)
from word_explorer.core.exceptions import RateLimitError


# ============================================================
# RateLimiter
# ============================================================

class TestRateLimiter:
    async def test_acquire_fast(self):
        rl = RateLimiter(rate=10.0, per=1.0)
        await rl.acquire()  # Should not block

    async def test_context_manager(self):
        rl = RateLimiter(rate=10.0)
        async with rl:
            pass

    async def test_waits_when_drained(self):
        rl = RateLimiter(rate=2.0, per=0.2)
        loop = asyncio.get_running_loop()
        started = loop.time()
        for _ in range(3):
            await rl.acquire()
        assert loop.time() - started >= 0.05


# ============================================================
# gather_settled
# ============================================================

class TestGatherSettled:
    async def test_results_in_call_order(self):
        async def delayed(value, delay):
            await asyncio.sleep(delay)
            return value

        results = await gather_settled(delayed("slow", 0.03), delayed("fast", 0.0))
        assert results == ["slow", "fast"]

    async def test_exception_does_not_cancel_siblings(self):
        finished = []

        async def fail():
            raise ValueError("boom")

        async def succeed():
            await asyncio.sleep(0.01)
            finished.append(True)
            return 42

        results = await gather_settled(fail(), succeed())
        assert isinstance(results[0], ValueError)
        assert results[1] == 42
        assert finished == [True]

    async def test_empty(self):
        assert await gather_settled() == []


# ============================================================
# CircuitBreaker
# ============================================================

class TestCircuitBreaker:
    async def test_starts_closed(self):
        cb = CircuitBreaker()
        assert cb.state == "closed"
        assert not cb.is_open

    async def test_opens_after_threshold(self):
        cb = CircuitBreaker(failure_threshold=2, recovery_timeout=60.0)
        for _ in range(2):
            with pytest.raises(RuntimeError):
                async with cb:
                    raise RuntimeError("fail")
        assert cb.state == "open"
        assert cb.is_open

        with pytest.raises(RateLimitError):
            async with cb:
                pass

    async def test_half_open_recovers(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0.01)
        with pytest.raises(RuntimeError):
            async with cb:
                raise RuntimeError("fail")
        await asyncio.sleep(0.02)

        async with cb:
            pass
        assert cb.state == "closed"


# ============================================================
# timeout_with_fallback
# ============================================================

class TestTimeoutWithFallback:
    async def test_returns_result(self):
        async def quick():
            return "done"

        assert await timeout_with_fallback(quick(), 1.0, "fallback") == "done"

    async def test_returns_fallback_value(self):
        async def slow():
            await asyncio.sleep(1.0)
            return "done"

        assert await timeout_with_fallback(slow(), 0.01, "fallback") == "fallback"

    async def test_calls_fallback_callable(self):
        calls = []

        async def slow():
            await asyncio.sleep(1.0)

        def on_timeout():
            calls.append(1)
            return []

        assert await timeout_with_fallback(slow(), 0.01, on_timeout) == []
        assert calls == [1]
