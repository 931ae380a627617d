"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    ExclusionReason,
    RefreshScope,
    Regime,
    SleeveType,

    # Entities
    Allocation,
    BacktestHolding,
    BacktestResult,
    BarSeries,
    CandidateMetric,
    IndicatorSnapshot,
    MarketAnalysis,
    MonthlyPerformance,
    PerformanceSummary,
    PortfolioHolding,
    PortfolioRecommendations,
    PortfolioSelection,
    PriceBar,
    RefreshSummary,
    RegimeDecision,
    Signal,
    SleevePerformance,
)

__all__ = [
    # Enums
    "ExclusionReason",
    "RefreshScope",
    "Regime",
    "SleeveType",

    # Entities
    "Allocation",
    "BacktestHolding",
    "BacktestResult",
    "BarSeries",
    "CandidateMetric",
    "IndicatorSnapshot",
    "MarketAnalysis",
    "MonthlyPerformance",
    "PerformanceSummary",
    "PortfolioHolding",
    "PortfolioRecommendations",
    "PortfolioSelection",
    "PriceBar",
    "RefreshSummary",
    "RegimeDecision",
    "Signal",
    "SleevePerformance",
]
