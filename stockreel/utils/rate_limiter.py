"""Token bucket rate limiter for provider API calls."""

from __future__ import annotations

import threading
import time


class RateLimiter:
    """Thread-safe token bucket expressed as an hourly quota.

    Stock-footage APIs publish their limits per hour (Pexels: 200/hour), so
    tokens refill at ``requests_per_hour / 3600`` per second. Burst capacity
    is ``requests_per_hour // 20`` (minimum 1). A rate of 0 disables limiting.
    """

    def __init__(self, requests_per_hour: float = 200.0) -> None:
        self.requests_per_hour = requests_per_hour
        self._disabled = requests_per_hour <= 0
        self._max_tokens = 0.0 if self._disabled else max(1.0, requests_per_hour // 20)
        self._tokens = self._max_tokens
        self._refill_rate = 0.0 if self._disabled else requests_per_hour / 3600.0
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

    @property
    def available(self) -> float:
        """Tokens currently available (refilled up to now)."""
        if self._disabled:
            return float("inf")
        with self._lock:
            self._refill()
            return self._tokens

    def acquire(self, timeout: float = 60.0) -> bool:
        """Block until a token is available. Returns False on timeout."""
        if self._disabled:
            return True

        deadline = time.monotonic() + timeout
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return True
                wait = (1.0 - self._tokens) / self._refill_rate
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(wait, remaining, 0.25))

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self._max_tokens, self._tokens + elapsed * self._refill_rate)
        self._last_refill = now
