"""
Portfolio Selection Service

Aggressive sleeve: reduced S&P 500 universe, momentum-ranked.
Defensive sleeve: fixed ETF list, momentum-ranked.
Both are weighted by inverse risk and topped up from static fallbacks when
live data falls short of the target holding count.
"""

import logging
from typing import Dict, List, Optional, Sequence

from portfolio_advisor.domain.models import (
    CandidateMetric,
    ExclusionReason,
    PortfolioSelection,
    Regime,
    SleeveType,
)
from portfolio_advisor.domain.services.portfolio_engine import (
    build_selection,
    evaluate_series,
    resolve_target_holdings,
)
from portfolio_advisor.domain.strategy.fallback import AGGRESSIVE_FALLBACKS, DEFENSIVE_FALLBACKS
from portfolio_advisor.domain.strategy.universe import DEFENSIVE_ETFS, DefensiveInstrument
from portfolio_advisor.infrastructure.cache.memory_cache import make_cache_key
from portfolio_advisor.services.market_data_service import MarketDataService
from portfolio_advisor.services.universe_service import UniverseService
from portfolio_advisor.utils.time import utc_now

logger = logging.getLogger(__name__)


class PortfolioSelectionService:
    def __init__(
        self,
        market_data: MarketDataService,
        universe: UniverseService,
        defensive_instruments: Sequence[DefensiveInstrument] = tuple(DEFENSIVE_ETFS),
        aggressive_fallbacks: Sequence[CandidateMetric] = tuple(AGGRESSIVE_FALLBACKS),
        defensive_fallbacks: Sequence[CandidateMetric] = tuple(DEFENSIVE_FALLBACKS),
    ):
        self.market_data = market_data
        self.universe = universe
        self.defensive_instruments = list(defensive_instruments)
        self.aggressive_fallbacks = list(aggressive_fallbacks)
        self.defensive_fallbacks = list(defensive_fallbacks)

    @staticmethod
    def cache_key(sleeve: SleeveType, regime: Regime, target: int) -> str:
        return make_cache_key("portfolio", sleeve.value, regime.value, target)

    # ------------------------------------------------------------------
    # AGGRESSIVE
    # ------------------------------------------------------------------

    async def select_aggressive(
        self,
        regime: Regime,
        diversification_count: Optional[int] = None,
    ) -> PortfolioSelection:
        target = resolve_target_holdings(SleeveType.AGGRESSIVE, regime, diversification_count)
        return await self.market_data.cache.get_or_fetch(
            self.cache_key(SleeveType.AGGRESSIVE, regime, target),
            lambda: self._compute_aggressive(regime, target),
            self.market_data.ttl.portfolio,
        )

    async def _compute_aggressive(self, regime: Regime, target: int) -> PortfolioSelection:
        symbols = await self.universe.get_reduced_universe()
        fetched = await self.market_data.fetch_many(symbols, "6mo", "1d")

        candidates: List[CandidateMetric] = []
        excluded: Dict[str, ExclusionReason] = {}
        for symbol, fetch in fetched.items():
            if not fetch.ok:
                excluded[symbol] = fetch.exclusion()
                continue
            evaluation = evaluate_series(fetch.series)
            if evaluation.metric is None:
                excluded[symbol] = evaluation.exclusion
                continue
            candidates.append(evaluation.metric)

        selection = build_selection(
            SleeveType.AGGRESSIVE,
            candidates,
            target,
            calculated_at=utc_now(),
            fallback_pool=self.aggressive_fallbacks,
            regime=regime,
            excluded=excluded,
        )
        self._log_selection(selection, len(symbols))
        return selection

    # ------------------------------------------------------------------
    # DEFENSIVE
    # ------------------------------------------------------------------

    async def select_defensive(
        self,
        regime: Regime,
        diversification_count: Optional[int] = None,
    ) -> PortfolioSelection:
        target = resolve_target_holdings(SleeveType.DEFENSIVE, regime, diversification_count)
        return await self.market_data.cache.get_or_fetch(
            self.cache_key(SleeveType.DEFENSIVE, regime, target),
            lambda: self._compute_defensive(regime, target),
            self.market_data.ttl.portfolio,
        )

    async def _compute_defensive(self, regime: Regime, target: int) -> PortfolioSelection:
        fetched = await self.market_data.fetch_many(
            [etf.symbol for etf in self.defensive_instruments], "6mo", "1d"
        )

        candidates: List[CandidateMetric] = []
        excluded: Dict[str, ExclusionReason] = {}
        for etf in self.defensive_instruments:
            fetch = fetched[etf.symbol]
            if not fetch.ok:
                excluded[etf.symbol] = fetch.exclusion()
                continue
            evaluation = evaluate_series(fetch.series, name=etf.name, category=etf.category)
            if evaluation.metric is None:
                excluded[etf.symbol] = evaluation.exclusion
                continue
            candidates.append(evaluation.metric)

        selection = build_selection(
            SleeveType.DEFENSIVE,
            candidates,
            target,
            calculated_at=utc_now(),
            fallback_pool=self.defensive_fallbacks,
            regime=regime,
            excluded=excluded,
        )
        self._log_selection(selection, len(self.defensive_instruments))
        return selection

    @staticmethod
    def _log_selection(selection: PortfolioSelection, universe_size: int) -> None:
        logger.info(
            f"{selection.type.value} selection: {selection.total_holdings}/{selection.target_holdings} "
            f"holdings from {universe_size} candidates ({len(selection.excluded)} excluded)"
        )
        if selection.using_fallback:
            logger.warning(f"{selection.type.value} selection using fallback: {selection.fallback_reason}")
