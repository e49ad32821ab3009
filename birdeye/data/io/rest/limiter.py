"""Request rate limiter for the REST transport."""

from __future__ import annotations

import asyncio
import time
from collections import deque

from ...config import RATE_LIMITS


class RateLimiter:
    """Sliding-window limiter: at most ``capacity`` acquisitions per ``period`` seconds."""

    def __init__(self, capacity: int, period: float) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if period <= 0:
            raise ValueError("period must be positive")
        self.capacity = capacity
        self.period = period
        self._stamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    @classmethod
    def for_plan(cls, plan: str) -> RateLimiter:
        """Limiter preset for an API plan (standard, starter, premium, business)."""
        try:
            capacity, period = RATE_LIMITS[plan.lower()]
        except KeyError:
            raise ValueError(f"Unknown plan: {plan!r}") from None
        return cls(capacity, period)

    def _prune(self, now: float) -> None:
        while self._stamps and now - self._stamps[0] >= self.period:
            self._stamps.popleft()

    async def acquire(self) -> None:
        """Wait until a request may be sent."""
        async with self._lock:
            while True:
                now = time.monotonic()
                self._prune(now)
                if len(self._stamps) < self.capacity:
                    self._stamps.append(now)
                    return
                await asyncio.sleep(self.period - (now - self._stamps[0]))

    async def __aenter__(self) -> RateLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None
