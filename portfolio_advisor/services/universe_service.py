"""
Dynamic Universe Service

Reduces the full S&P 500 list to the top-K names by six-month momentum.
Re-ranking ~500 symbols is expensive and changes slowly, so the reduced
universe is cached at the portfolio (month-scale) TTL.
"""

import logging
from typing import List, Optional, Sequence

from portfolio_advisor.domain.indicators.signal_indicators import momentum
from portfolio_advisor.domain.models import CandidateMetric
from portfolio_advisor.domain.services.portfolio_engine import MIN_LIVE_BARS, top_symbols_by_momentum
from portfolio_advisor.domain.strategy.universe import SP500_ALL_SYMBOLS
from portfolio_advisor.infrastructure.cache.memory_cache import make_cache_key
from portfolio_advisor.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


class UniverseService:
    def __init__(
        self,
        market_data: MarketDataService,
        top_k: int = 100,
        symbols: Optional[Sequence[str]] = None,
        min_bars: int = MIN_LIVE_BARS,
    ):
        self.market_data = market_data
        self.top_k = top_k
        self.symbols = list(symbols) if symbols is not None else list(SP500_ALL_SYMBOLS)
        self.min_bars = min_bars

    @property
    def cache_key(self) -> str:
        return make_cache_key("universe", "top", self.top_k)

    async def get_reduced_universe(self) -> List[str]:
        """Top-K symbols, momentum descending. Empty results are not cached."""
        return await self.market_data.cache.get_or_fetch(
            self.cache_key,
            self.compute_reduced_universe,
            self.market_data.ttl.portfolio,
            cache_if=bool,
        )

    async def compute_reduced_universe(self) -> List[str]:
        logger.info(f"Fetching momentum data for {len(self.symbols)} symbols...")
        fetched = await self.market_data.fetch_many(self.symbols, "6mo", "1d")

        metrics = []
        for symbol, fetch in fetched.items():
            if not fetch.ok or len(fetch.series) < self.min_bars:
                continue
            metrics.append(
                CandidateMetric(
                    symbol=symbol,
                    name=fetch.series.name,
                    momentum=momentum(fetch.series.bars),
                    risk=0.0,
                )
            )

        top = top_symbols_by_momentum(metrics, self.top_k)
        logger.info(
            f"Selected top {len(top)} of {len(metrics)} ranked symbols by momentum. "
            f"Top 5: {', '.join(top[:5])}"
        )
        return top
