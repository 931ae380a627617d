"""
Advisor Service

Entry point for every exposed operation:
• Market analysis (regime + allocation + indicators)
• Portfolio recommendations for both sleeves
• Backtests
• Forced refresh with update-history bookkeeping
"""

import asyncio
import logging
import time
from datetime import date
from typing import List, Optional

from portfolio_advisor.domain.models import (
    BacktestResult,
    MarketAnalysis,
    PortfolioRecommendations,
    RefreshScope,
    RefreshSummary,
    Regime,
    SleevePerformance,
    SleeveType,
)
from portfolio_advisor.domain.services.performance_engine import build_sleeve_performance
from portfolio_advisor.domain.services.regime_classifier import RegimeClassifier
from portfolio_advisor.domain.strategy.performance_history import MONTHLY_RETURNS, SLEEVE_NAMES
from portfolio_advisor.infrastructure.cache.memory_cache import CacheStats, MemoryCache
from portfolio_advisor.services.backtest_service import BacktestService
from portfolio_advisor.services.history_service import HistoryRecorder
from portfolio_advisor.services.indicator_service import IndicatorService
from portfolio_advisor.services.portfolio_service import PortfolioSelectionService
from portfolio_advisor.utils.time import utc_now

logger = logging.getLogger(__name__)

SIGNALS_PATTERN = r"^(market|signals)"
PORTFOLIO_PATTERN = r"^(portfolio|universe)"


class AdvisorService:
    def __init__(
        self,
        cache: MemoryCache,
        indicators: IndicatorService,
        portfolios: PortfolioSelectionService,
        backtests: BacktestService,
        history: HistoryRecorder,
        classifier: Optional[RegimeClassifier] = None,
    ):
        self.cache = cache
        self.indicators = indicators
        self.portfolios = portfolios
        self.backtests = backtests
        self.history = history
        self.classifier = classifier or RegimeClassifier()

    # ------------------------------------------------------------------
    # ANALYSIS / RECOMMENDATIONS / BACKTEST
    # ------------------------------------------------------------------

    async def get_analysis(self) -> MarketAnalysis:
        """
        Raises PrimaryIndicatorUnavailable when the benchmark cannot be fetched.
        """
        snapshot = await self.indicators.get_snapshot()
        decision = self.classifier.classify(snapshot)
        allocation = RegimeClassifier.allocation_for(decision.regime)

        self.history.save_signal_snapshot(decision, allocation, utc_now())
        return MarketAnalysis(decision=decision, allocation=allocation, snapshot=snapshot)

    async def get_portfolio_recommendations(
        self,
        diversification_count: Optional[int] = None,
    ) -> PortfolioRecommendations:
        snapshot = await self.indicators.get_snapshot()
        regime = self.classifier.classify(snapshot).regime

        aggressive, defensive = await asyncio.gather(
            self.portfolios.select_aggressive(regime, diversification_count),
            self.portfolios.select_defensive(regime, diversification_count),
        )

        self.history.save_portfolio_selection(aggressive)
        self.history.save_portfolio_selection(defensive)
        return PortfolioRecommendations(
            regime=regime,
            allocation=RegimeClassifier.allocation_for(regime),
            aggressive=aggressive,
            defensive=defensive,
        )

    async def run_backtest(self, as_of: date, diversification_count: int = 5) -> BacktestResult:
        return await self.backtests.run_backtest(as_of, diversification_count)

    def suggested_backtest_dates(self, today: Optional[date] = None) -> List[date]:
        return BacktestService.suggested_dates(today)

    def get_performance(self) -> List[SleevePerformance]:
        """Monthly track record of both sleeves, aggressive first"""
        return [
            build_sleeve_performance(sleeve, SLEEVE_NAMES[sleeve], MONTHLY_RETURNS[sleeve])
            for sleeve in (SleeveType.AGGRESSIVE, SleeveType.DEFENSIVE)
        ]

    # ------------------------------------------------------------------
    # REFRESH
    # ------------------------------------------------------------------

    def invalidate(self, scope: RefreshScope) -> int:
        """Drop cached entries for `scope`; returns how many were removed"""
        if scope == RefreshScope.SIGNALS:
            return self.cache.delete_pattern(SIGNALS_PATTERN)
        if scope == RefreshScope.PORTFOLIO:
            return self.cache.delete_pattern(PORTFOLIO_PATTERN)
        removed = self.cache.stats().size
        self.cache.clear()
        return removed

    async def refresh(self, scope: RefreshScope, source: str = "manual") -> RefreshSummary:
        """
        Invalidate, recompute and record the outcome in update history.
        A failed recompute is recorded and then re-raised.
        """
        started = time.perf_counter()
        removed = self.invalidate(scope)
        logger.info(f"Refresh ({scope.value}, {source}): invalidated {removed} cache entries")

        regime: Optional[Regime] = None
        recommendations: Optional[PortfolioRecommendations] = None
        try:
            if scope in (RefreshScope.SIGNALS, RefreshScope.ALL):
                analysis = await self.get_analysis()
                regime = analysis.decision.regime
            if scope in (RefreshScope.PORTFOLIO, RefreshScope.ALL):
                recommendations = await self.get_portfolio_recommendations()
                regime = recommendations.regime
        except Exception as exc:
            summary = RefreshSummary(
                scope=scope,
                success=False,
                duration_ms=_elapsed_ms(started),
                completed_at=utc_now(),
                source=source,
                regime=regime,
                error_message=str(exc),
            )
            self.history.save_update_history(summary)
            logger.error(f"Refresh ({scope.value}) failed after {summary.duration_ms} ms: {exc}")
            raise

        summary = _success_summary(scope, source, started, regime, recommendations)
        self.history.save_update_history(summary)
        logger.info(f"Refresh ({scope.value}) completed in {summary.duration_ms} ms")
        return summary

    # ------------------------------------------------------------------
    # DIAGNOSTICS / HISTORY
    # ------------------------------------------------------------------

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    async def signal_history(self, limit: int = 30):
        return await self.history.signal_history(limit)

    async def latest_portfolios(self):
        return await self.history.latest_portfolios()

    async def update_history(self, limit: int = 20):
        return await self.history.update_history(limit)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _success_summary(
    scope: RefreshScope,
    source: str,
    started: float,
    regime: Optional[Regime],
    recommendations: Optional[PortfolioRecommendations],
) -> RefreshSummary:
    if recommendations is None:
        return RefreshSummary(
            scope=scope,
            success=True,
            duration_ms=_elapsed_ms(started),
            completed_at=utc_now(),
            source=source,
            regime=regime,
        )

    sleeves = (recommendations.aggressive, recommendations.defensive)
    reasons = [s.fallback_reason for s in sleeves if s.fallback_reason]
    return RefreshSummary(
        scope=scope,
        success=True,
        duration_ms=_elapsed_ms(started),
        completed_at=utc_now(),
        source=source,
        regime=regime,
        used_fallback=recommendations.using_fallback,
        fallback_count=sum(s.fallback_count for s in sleeves),
        fallback_reason=" ".join(reasons) or None,
        holdings_count=sum(s.total_holdings for s in sleeves),
    )
