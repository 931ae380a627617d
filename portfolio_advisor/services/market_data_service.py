"""
Cached market data access.

Every provider call goes through the request limiter and every successful
series is cached, so repeated selection cycles within a TTL never hit the
provider again. Failed fetches are not cached.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, Iterable

from portfolio_advisor.infrastructure.cache.memory_cache import CacheTTL, MemoryCache, make_cache_key
from portfolio_advisor.infrastructure.market_data.limiter import RequestLimiter
from portfolio_advisor.infrastructure.market_data.types import MarketDataGateway, SeriesFetch

logger = logging.getLogger(__name__)


def _is_ok(fetch: SeriesFetch) -> bool:
    return fetch.ok


class MarketDataService:
    def __init__(
        self,
        gateway: MarketDataGateway,
        cache: MemoryCache,
        limiter: RequestLimiter,
        ttl: CacheTTL = CacheTTL(),
    ):
        self.gateway = gateway
        self.cache = cache
        self.limiter = limiter
        self.ttl = ttl

    async def _guarded(self, symbol: str, call) -> SeriesFetch:
        try:
            async with self.limiter:
                return await call()
        except Exception as exc:
            logger.error(f"Provider call failed for {symbol}: {exc}")
            return SeriesFetch.failure(symbol, str(exc))

    async def fetch_series(self, symbol: str, range_spec: str = "6mo", interval: str = "1d") -> SeriesFetch:
        key = make_cache_key("stock", symbol, range_spec, interval)
        return await self.cache.get_or_fetch(
            key,
            lambda: self._guarded(symbol, lambda: self.gateway.fetch_series(symbol, range_spec, interval)),
            self.ttl.stock_data,
            cache_if=_is_ok,
        )

    async def fetch_many(
        self,
        symbols: Iterable[str],
        range_spec: str = "6mo",
        interval: str = "1d",
    ) -> Dict[str, SeriesFetch]:
        """
        Fetch several symbols concurrently; the limiter bounds provider load.
        Result order follows the input order.
        """
        symbols = list(dict.fromkeys(symbols))
        results = await asyncio.gather(
            *(self.fetch_series(symbol, range_spec, interval) for symbol in symbols)
        )
        fetched = dict(zip(symbols, results))
        failed = sum(1 for f in results if not f.ok)
        if failed:
            logger.info(f"Fetched {len(symbols) - failed}/{len(symbols)} series ({range_spec}); {failed} unavailable")
        return fetched

    async def fetch_history(self, symbol: str, start: date, end: date, as_of: date) -> SeriesFetch:
        """
        Historical window for a backtest anchored at `as_of`.
        Keyed by (symbol, as_of) since past bars do not change.
        """
        key = make_cache_key("history", symbol, as_of.isoformat())
        return await self.cache.get_or_fetch(
            key,
            lambda: self._guarded(symbol, lambda: self.gateway.fetch_series_between(symbol, start, end)),
            self.ttl.backtest,
            cache_if=_is_ok,
        )
