"""Tests for stockreel.utils.rate_limiter."""

from __future__ import annotations

import time

from stockreel.utils.rate_limiter import RateLimiter


class TestRateLimiter:
    def test_acquire_within_limit(self):
        """Immediate acquisition when tokens are available."""
        rl = RateLimiter(requests_per_hour=200.0)
        assert rl.acquire(timeout=1.0) is True

    def test_burst_allowed(self):
        """Burst up to requests_per_hour // 20 without blocking."""
        rl = RateLimiter(requests_per_hour=200.0)
        start = time.monotonic()
        count = sum(1 for _ in range(10) if rl.acquire(timeout=0.01))
        assert count == 10
        assert time.monotonic() - start < 1.0

    def test_timeout_returns_false(self):
        """Returns False once the burst is spent and the refill is slow."""
        rl = RateLimiter(requests_per_hour=200.0)  # burst 10, one token per 18s
        for _ in range(10):
            rl.acquire(timeout=0.01)
        assert rl.acquire(timeout=0.05) is False

    def test_tokens_refill_over_time(self):
        rl = RateLimiter(requests_per_hour=36000.0)  # 10 per second
        rl._tokens = 0.0
        rl._last_refill = time.monotonic()
        assert rl.acquire(timeout=2.0) is True

    def test_minimum_burst_of_one(self):
        rl = RateLimiter(requests_per_hour=5.0)
        assert rl.available == 1.0
        assert rl.acquire(timeout=0.01) is True
        assert rl.acquire(timeout=0.01) is False

    def test_unlimited_rate(self):
        """requests_per_hour=0 disables limiting."""
        rl = RateLimiter(requests_per_hour=0)
        for _ in range(100):
            assert rl.acquire(timeout=0.01) is True
        assert rl.available == float("inf")
