"""
Indicator Service

• Benchmark (SPY) price, moving averages and six-month return
• VIX, yield curve and credit spread as secondary feeds
• Secondary failures degrade to defaults; benchmark failure is fatal
"""

import logging
from typing import Optional

from portfolio_advisor.domain.errors import PrimaryIndicatorUnavailable
from portfolio_advisor.domain.indicators.signal_indicators import (
    momentum,
    moving_average,
    six_month_window,
)
from portfolio_advisor.domain.models import IndicatorSnapshot
from portfolio_advisor.domain.strategy.universe import SIGNAL_SYMBOLS
from portfolio_advisor.infrastructure.cache.memory_cache import make_cache_key
from portfolio_advisor.services.market_data_service import MarketDataService
from portfolio_advisor.utils.time import utc_now

logger = logging.getLogger(__name__)

DEFAULT_VIX = 20.0
DEFAULT_YIELD_CURVE = 0.0
DEFAULT_CREDIT_SPREAD = 0.0
CREDIT_SPREAD_BARS = 20

INDICATORS_CACHE_KEY = make_cache_key("market", "indicators")


class IndicatorService:
    def __init__(self, market_data: MarketDataService, benchmark_symbol: str = "SPY"):
        self.market_data = market_data
        self.benchmark_symbol = benchmark_symbol

    async def get_snapshot(self) -> IndicatorSnapshot:
        """Cached snapshot; a benchmark failure propagates and is not cached."""
        return await self.market_data.cache.get_or_fetch(
            INDICATORS_CACHE_KEY,
            self.collect,
            self.market_data.ttl.market_analysis,
        )

    async def collect(self) -> IndicatorSnapshot:
        benchmark = await self.market_data.fetch_series(self.benchmark_symbol, "1y", "1d")
        if not benchmark.ok:
            raise PrimaryIndicatorUnavailable(
                self.benchmark_symbol,
                benchmark.error or benchmark.status.value,
            )

        bars = benchmark.series.bars
        adj_closes = benchmark.series.adj_closes
        degraded = []

        vix = await self._last_close(SIGNAL_SYMBOLS["VIX"], "5d")
        if vix is None:
            logger.warning(f"Could not fetch VIX, using default {DEFAULT_VIX}")
            vix = DEFAULT_VIX
            degraded.append("vix")

        yield_curve = await self._yield_curve()
        if yield_curve is None:
            logger.warning("Could not fetch yield curve data, using default")
            yield_curve = DEFAULT_YIELD_CURVE
            degraded.append("yield_curve")

        credit_spread = await self._credit_spread()
        if credit_spread is None:
            logger.warning("Could not fetch credit spread data, using default")
            credit_spread = DEFAULT_CREDIT_SPREAD
            degraded.append("credit_spread")

        return IndicatorSnapshot(
            spot_price=adj_closes[-1],
            ma10=moving_average(adj_closes, 10),
            ma50=moving_average(adj_closes, 50),
            ma200=moving_average(adj_closes, 200),
            six_month_return_pct=momentum(six_month_window(bars)) * 100,
            vix=vix,
            yield_curve_spread=yield_curve,
            credit_spread=credit_spread,
            captured_at=utc_now(),
            degraded_feeds=tuple(degraded),
        )

    async def _last_close(self, symbol: str, range_spec: str) -> Optional[float]:
        fetch = await self.market_data.fetch_series(symbol, range_spec, "1d")
        if not fetch.ok:
            return None
        return fetch.series.last_close

    async def _yield_curve(self) -> Optional[float]:
        """10-year minus 3-month Treasury yield, in percentage points"""
        ten_year = await self._last_close(SIGNAL_SYMBOLS["TNX"], "5d")
        three_month = await self._last_close(SIGNAL_SYMBOLS["IRX"], "5d")
        if ten_year is None or three_month is None:
            return None
        return ten_year - three_month

    async def _credit_spread(self) -> Optional[float]:
        """
        Price-performance proxy: investment-grade return minus high-yield
        return over the last 20 bars, in percent. Positive means risk-off.
        """
        hyg_return = await self._recent_return(SIGNAL_SYMBOLS["HYG"])
        lqd_return = await self._recent_return(SIGNAL_SYMBOLS["LQD"])
        if hyg_return is None or lqd_return is None:
            return None
        return (lqd_return - hyg_return) * 100

    async def _recent_return(self, symbol: str) -> Optional[float]:
        fetch = await self.market_data.fetch_series(symbol, "1mo", "1d")
        if not fetch.ok:
            return None
        return momentum(fetch.series.bars[-CREDIT_SPREAD_BARS:])
