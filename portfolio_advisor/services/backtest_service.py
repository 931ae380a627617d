"""
Backtest Service

Replays the aggressive selection (rank -> truncate -> risk-inverse weight)
anchored at a past date. Each symbol's history is cut at the as-of date
before any metric is computed, so nothing after that date is seen.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence

import pandas as pd

from portfolio_advisor.domain.indicators.signal_indicators import SIX_MONTH_BARS
from portfolio_advisor.domain.models import BacktestHolding, BacktestResult, CandidateMetric
from portfolio_advisor.domain.services.portfolio_engine import (
    clamp_holdings,
    evaluate_series,
    rank_by_momentum,
    risk_inverse_weights,
)
from portfolio_advisor.domain.strategy.universe import BACKTEST_UNIVERSE
from portfolio_advisor.infrastructure.cache.memory_cache import make_cache_key
from portfolio_advisor.services.market_data_service import MarketDataService
from portfolio_advisor.utils.time import previous_month_ends

logger = logging.getLogger(__name__)

DEFAULT_DIVERSIFICATION = 5


def _has_holdings(result: BacktestResult) -> bool:
    return result.total_holdings > 0


class BacktestService:
    def __init__(
        self,
        market_data: MarketDataService,
        symbols: Optional[Sequence[str]] = None,
        lookback_months: int = 9,
        min_bars: int = SIX_MONTH_BARS,
    ):
        self.market_data = market_data
        self.symbols = list(symbols) if symbols is not None else list(BACKTEST_UNIVERSE)
        self.lookback_months = lookback_months
        self.min_bars = min_bars

    async def run_backtest(
        self,
        as_of: date,
        diversification_count: int = DEFAULT_DIVERSIFICATION,
        today: Optional[date] = None,
    ) -> BacktestResult:
        today = today or date.today()
        if as_of > today:
            raise ValueError(f"Backtest date {as_of.isoformat()} is in the future")

        count = clamp_holdings(diversification_count)
        key = make_cache_key("backtest", as_of.isoformat(), count)
        return await self.market_data.cache.get_or_fetch(
            key,
            lambda: self._simulate(as_of, count),
            self.market_data.ttl.backtest,
            cache_if=_has_holdings,
        )

    def lookback_start(self, as_of: date) -> date:
        return (pd.Timestamp(as_of) - pd.DateOffset(months=self.lookback_months)).date()

    async def _simulate(self, as_of: date, count: int) -> BacktestResult:
        start = self.lookback_start(as_of)
        end = as_of + timedelta(days=1)

        async def _evaluate(symbol: str) -> Optional[CandidateMetric]:
            fetch = await self.market_data.fetch_history(symbol, start, end, as_of)
            if not fetch.ok:
                return None
            return evaluate_series(fetch.series.up_to(as_of), min_bars=self.min_bars).metric

        metrics = await asyncio.gather(*(_evaluate(symbol) for symbol in self.symbols))
        valid = [m for m in metrics if m is not None]

        ranked = rank_by_momentum(valid)
        ranks = {metric.symbol: idx + 1 for idx, metric in enumerate(ranked)}
        selected = ranked[:count]

        holdings = [
            BacktestHolding(
                symbol=metric.symbol,
                name=metric.name,
                weight_percent=weight,
                momentum=metric.momentum,
                risk=metric.risk,
                price=metric.price or 0.0,
                rank=ranks[metric.symbol],
            )
            for metric, weight in risk_inverse_weights(selected)
        ]
        holdings.sort(key=lambda h: h.weight_percent, reverse=True)

        logger.info(
            f"Backtest {as_of.isoformat()}: {len(valid)}/{len(self.symbols)} symbols usable, "
            f"{len(holdings)} selected"
        )
        return BacktestResult(
            as_of=as_of,
            holdings=tuple(holdings),
            diversification_count=count,
            evaluated_symbols=len(self.symbols),
            excluded_count=len(self.symbols) - len(valid),
        )

    @staticmethod
    def suggested_dates(today: Optional[date] = None, months: int = 24) -> List[date]:
        """Month-end dates of the previous `months` months, newest first"""
        return previous_month_ends(today or date.today(), months)
