"""
Request limiter for the market data provider.

Bounds concurrent requests with a semaphore and spaces request starts by a
minimum interval. Business code wraps calls in `async with limiter:` and never
sleeps on its own.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable


class RequestLimiter:
    def __init__(
        self,
        max_concurrency: int = 10,
        min_interval_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds cannot be negative")
        self.max_concurrency = max_concurrency
        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._spacing_lock = asyncio.Lock()
        self._next_start = 0.0
        self._active = 0
        self.peak_active = 0

    @classmethod
    def from_settings(cls, settings) -> "RequestLimiter":
        return cls(
            max_concurrency=settings.FETCH_MAX_CONCURRENCY,
            min_interval_seconds=settings.FETCH_MIN_INTERVAL_SECONDS,
        )

    @property
    def active(self) -> int:
        return self._active

    async def __aenter__(self) -> "RequestLimiter":
        await self._semaphore.acquire()
        try:
            await self._wait_for_slot()
        except BaseException:
            self._semaphore.release()
            raise
        self._active += 1
        self.peak_active = max(self.peak_active, self._active)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._active -= 1
        self._semaphore.release()
        return False

    async def _wait_for_slot(self) -> None:
        if self.min_interval_seconds <= 0:
            return
        async with self._spacing_lock:
            now = self._clock()
            delay = self._next_start - now
            if delay > 0:
                await asyncio.sleep(delay)
                now = self._clock()
            self._next_start = now + self.min_interval_seconds
