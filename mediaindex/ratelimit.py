"""
ratelimit — Token bucket for outbound metadata requests (TMDB allows bursts, then ~4/s).

    limiter = RateLimiter(rate=4.0, burst=4)
    limiter.wait()
    session.get(url)
"""
from __future__ import annotations
import threading
import time
from typing import Callable


class RateLimiter:
    """Thread-safe token bucket. `clock` and `sleep` are swappable for tests."""

    def __init__(
        self,
        rate: float = 4.0,
        burst: int = 4,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rate = rate
        self.burst = burst
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(burst)
        self._stamp = clock()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = self._clock()
        self._tokens = min(float(self.burst), self._tokens + (now - self._stamp) * self.rate)
        self._stamp = now

    def try_acquire(self) -> bool:
        with self._lock:
            self._refill()
            if self._tokens < 1.0:
                return False
            self._tokens -= 1.0
            return True

    def wait(self) -> None:
        """Block until one token can be taken."""
        while not self.try_acquire():
            with self._lock:
                missing = 1.0 - self._tokens
            self._sleep(max(missing / self.rate, 0.01) if self.rate > 0 else 0.05)
