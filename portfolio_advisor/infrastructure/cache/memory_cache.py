"""
In-memory TTL cache shared by all market data and selection services.

Single-process only. Concurrent get_or_fetch calls for the same missing key
share one in-flight task, so the supplier runs once per miss.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class CacheTTL:
    """TTL tiers in seconds"""
    market_analysis: int = _DAY
    stock_data: int = _DAY
    portfolio: int = 31 * _DAY
    backtest: int = _DAY

    @classmethod
    def from_settings(cls, settings) -> "CacheTTL":
        return cls(
            market_analysis=settings.CACHE_TTL_MARKET_ANALYSIS_SECONDS,
            stock_data=settings.CACHE_TTL_STOCK_DATA_SECONDS,
            portfolio=settings.CACHE_TTL_PORTFOLIO_SECONDS,
            backtest=settings.CACHE_TTL_BACKTEST_SECONDS,
        )


@dataclass
class CacheEntry:
    key: str
    payload: Any
    created_at: float
    expiry: float


@dataclass(frozen=True)
class CacheStats:
    size: int
    hits: int
    misses: int
    hit_rate: float
    inflight: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "inflight": self.inflight,
        }


def make_cache_key(operation: str, *parts: Any) -> str:
    """
    Build "operation:part1:part2" skipping None parts.
    """
    valid = [str(p) for p in parts if p is not None]
    return ":".join([operation, *valid])


class MemoryCache:
    def __init__(
        self,
        cleanup_interval_seconds: float = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Task] = {}
        self._hits = 0
        self._misses = 0
        self._clock = clock
        self._cleanup_interval_seconds = cleanup_interval_seconds
        self._sweeper: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep_loop())

    async def stop(self) -> None:
        if self._sweeper:
            self._sweeper.cancel()
            try:
                await self._sweeper
            except asyncio.CancelledError:
                pass
            self._sweeper = None

    @property
    def running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._cleanup_interval_seconds)
            removed = self.cleanup()
            if removed > 0:
                logger.info("Cache sweep removed %d expired entries", removed)

    # ------------------------------------------------------------------
    # BASIC OPERATIONS
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._clock() > entry.expiry:
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.payload

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        now = self._clock()
        self._entries[key] = CacheEntry(
            key=key,
            payload=value,
            created_at=now,
            expiry=now + ttl_seconds,
        )

    def delete(self, key: str) -> bool:
        self._inflight.pop(key, None)
        return self._entries.pop(key, None) is not None

    def delete_pattern(self, pattern: Union[str, Pattern[str]]) -> int:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        keys = [key for key in self._entries if regex.search(key)]
        for key in keys:
            del self._entries[key]
        for key in [key for key in self._inflight if regex.search(key)]:
            del self._inflight[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()
        self._inflight.clear()
        self._hits = 0
        self._misses = 0

    def cleanup(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expiry]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stats(self) -> CacheStats:
        total = self._hits + self._misses
        return CacheStats(
            size=len(self._entries),
            hits=self._hits,
            misses=self._misses,
            hit_rate=self._hits / total if total > 0 else 0.0,
            inflight=len(self._inflight),
        )

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() <= entry.expiry

    def keys(self) -> List[str]:
        now = self._clock()
        return [key for key, entry in self._entries.items() if now <= entry.expiry]

    # ------------------------------------------------------------------
    # READ-THROUGH
    # ------------------------------------------------------------------

    async def get_or_fetch(
        self,
        key: str,
        supplier: Callable[[], Awaitable[T]],
        ttl_seconds: float,
        cache_if: Optional[Callable[[T], bool]] = None,
    ) -> T:
        """
        Return the cached value for `key`, or run `supplier` and cache its
        result when it is not None (and `cache_if` accepts it).

        Callers arriving while a supplier for the same key is running await
        that run instead of starting another. Supplier exceptions reach
        every waiter and nothing is cached. Invalidating the key while the
        supplier runs detaches that run, so the next call fetches again.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fill(key, supplier, ttl_seconds, cache_if))
            self._inflight[key] = task
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        return await asyncio.shield(task)

    async def _fill(
        self,
        key: str,
        supplier: Callable[[], Awaitable[T]],
        ttl_seconds: float,
        cache_if: Optional[Callable[[T], bool]],
    ) -> T:
        # An invalidation while the supplier runs unregisters this task;
        # its result then goes to the waiters only and is not stored.
        current = asyncio.current_task()
        try:
            value = await supplier()
            if self._inflight.get(key) is not current:
                return value
            if value is not None and (cache_if is None or cache_if(value)):
                self.set(key, value, ttl_seconds)
            return value
        finally:
            if self._inflight.get(key) is current:
                del self._inflight[key]
