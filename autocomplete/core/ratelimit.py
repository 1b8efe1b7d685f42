from __future__ import annotations

import time
from typing import TYPE_CHECKING

from autocomplete.utils.cache import LRU

if TYPE_CHECKING:
    from collections.abc import Callable


class TokenBucket:
    __slots__ = ("burst", "rate", "tokens", "updated")

    def __init__(self, rate: float, burst: int, now: float) -> None:
        self.rate = rate
        self.burst = burst
        self.tokens = float(burst)
        self.updated = now

    def consume(self, now: float) -> float:
        """Take one token. Returns 0.0 on success, else the seconds until one is available."""
        self.tokens = min(self.burst, self.tokens + (now - self.updated) * self.rate)
        self.updated = now
        if self.tokens >= 1:
            self.tokens -= 1
            return 0.0
        return (1 - self.tokens) / self.rate


class RateLimiter:
    """Per-client token buckets: ``rate`` requests per second with bursts of up to ``burst``."""

    def __init__(
        self,
        rate: float,
        burst: int,
        *,
        maxsize: int = 4096,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate <= 0 or burst < 1:
            msg = "rate must be greater than 0 and burst at least 1"
            raise ValueError(msg) from None

        self.rate = rate
        self.burst = burst
        self._timer = timer
        self._buckets = LRU[str, TokenBucket](maxsize)

    def hit(self, key: str) -> float:
        now = self._timer()
        if (bucket := self._buckets.get(key, None)) is None:
            self._buckets[key] = bucket = TokenBucket(self.rate, self.burst, now)
        return bucket.consume(now)
