"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class Regime(str, Enum):
    """Market regime produced by signal voting"""
    BULL = "bull"
    BEAR = "bear"
    NEUTRAL = "neutral"


class SleeveType(str, Enum):
    """Portfolio sleeve"""
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"


class ExclusionReason(str, Enum):
    """Why a candidate was dropped from a selection cycle"""
    PROVIDER_ERROR = "provider_error"
    NO_DATA = "no_data"
    INSUFFICIENT_DATA = "insufficient_data"
    NON_POSITIVE_RISK = "non_positive_risk"


@dataclass(frozen=True)
class PriceBar:
    """Single daily OHLC bar - Immutable"""
    date: date
    open: float
    high: float
    low: float
    close: float
    adj_close: float
    volume: int = 0


@dataclass(frozen=True)
class BarSeries:
    """
    Ordered bar series for one symbol.

    Use `from_bars` to build one from raw provider rows: bars with a
    non-positive close are dropped, the rest are sorted ascending by date
    and de-duplicated (the last bar for a date wins).
    """
    symbol: str
    name: str
    bars: Tuple[PriceBar, ...]

    @classmethod
    def from_bars(cls, symbol: str, bars: Iterable[PriceBar], name: Optional[str] = None) -> "BarSeries":
        by_date: Dict[date, PriceBar] = {}
        for bar in bars:
            if bar.close is None or not bar.close > 0:
                continue
            by_date[bar.date] = bar
        ordered = tuple(by_date[d] for d in sorted(by_date))
        return cls(symbol=symbol, name=name or symbol, bars=ordered)

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def adj_closes(self) -> list[float]:
        return [bar.adj_close for bar in self.bars]

    @property
    def last_close(self) -> Optional[float]:
        return self.bars[-1].close if self.bars else None

    def up_to(self, as_of: date) -> "BarSeries":
        """Series truncated to bars dated on or before `as_of`"""
        return BarSeries(
            symbol=self.symbol,
            name=self.name,
            bars=tuple(bar for bar in self.bars if bar.date <= as_of),
        )


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Point-in-time benchmark indicator bundle - Immutable"""
    spot_price: float
    ma10: float
    ma50: float
    ma200: float
    six_month_return_pct: float
    vix: float
    yield_curve_spread: float
    credit_spread: float
    captured_at: datetime
    degraded_feeds: Tuple[str, ...] = ()

    def summary(self) -> Dict[str, object]:
        return {
            "spot_price": self.spot_price,
            "ma10": self.ma10,
            "ma50": self.ma50,
            "ma200": self.ma200,
            "six_month_return_pct": self.six_month_return_pct,
            "vix": self.vix,
            "yield_curve_spread": self.yield_curve_spread,
            "credit_spread": self.credit_spread,
            "captured_at": self.captured_at.isoformat(),
            "degraded_feeds": list(self.degraded_feeds),
        }


@dataclass(frozen=True)
class Signal:
    """One vote in the regime classifier"""
    name: str
    active: bool
    raw_value: float
    description: str
    display_value: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "active": self.active,
            "raw_value": self.raw_value,
            "value": self.display_value,
            "description": self.description,
        }


@dataclass(frozen=True)
class RegimeDecision:
    """Regime verdict derived from one IndicatorSnapshot - Immutable"""
    regime: Regime
    confidence_percent: float
    bull_active_count: int
    bear_active_count: int
    bull_signals: Tuple[Signal, ...]
    bear_signals: Tuple[Signal, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "regime": self.regime.value,
            "confidence": self.confidence_percent,
            "bull_count": self.bull_active_count,
            "bear_count": self.bear_active_count,
            "bull_signals": [s.to_dict() for s in self.bull_signals],
            "bear_signals": [s.to_dict() for s in self.bear_signals],
        }


@dataclass(frozen=True)
class Allocation:
    """Aggressive/defensive split in percent"""
    aggressive_percent: float
    defensive_percent: float

    def __post_init__(self):
        if abs(self.aggressive_percent + self.defensive_percent - 100) > 1e-9:
            raise ValueError("Allocation must sum to 100")

    def to_dict(self) -> Dict[str, float]:
        return {
            "aggressive": self.aggressive_percent,
            "defensive": self.defensive_percent,
        }


@dataclass(frozen=True)
class CandidateMetric:
    """Per-cycle ranking inputs for one candidate"""
    symbol: str
    name: str
    momentum: float
    risk: float
    category: Optional[str] = None
    price: Optional[float] = None
    is_fallback: bool = False


@dataclass(frozen=True)
class PortfolioHolding:
    symbol: str
    name: str
    weight_percent: float
    momentum: Optional[float] = None
    risk: Optional[float] = None
    category: Optional[str] = None
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "weight": round(self.weight_percent, 4),
            "momentum": self.momentum,
            "risk": self.risk,
            "category": self.category,
            "is_fallback": self.is_fallback,
        }


@dataclass(frozen=True)
class PortfolioSelection:
    """Weighted sleeve - holdings ordered by weight descending"""
    type: SleeveType
    holdings: Tuple[PortfolioHolding, ...]
    calculated_at: datetime
    target_holdings: int
    regime: Optional[Regime] = None
    using_fallback: bool = False
    fallback_count: int = 0
    fallback_reason: Optional[str] = None
    excluded: Dict[str, ExclusionReason] = field(default_factory=dict)

    @property
    def total_holdings(self) -> int:
        return len(self.holdings)

    @property
    def total_weight(self) -> float:
        return sum(h.weight_percent for h in self.holdings)

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type.value,
            "holdings": [h.to_dict() for h in self.holdings],
            "total_holdings": self.total_holdings,
            "target_holdings": self.target_holdings,
            "regime": self.regime.value if self.regime else None,
            "calculated_at": self.calculated_at.isoformat(),
            "using_fallback": self.using_fallback,
            "fallback_count": self.fallback_count,
            "fallback_reason": self.fallback_reason,
            "excluded": {symbol: reason.value for symbol, reason in self.excluded.items()},
        }


@dataclass(frozen=True)
class MarketAnalysis:
    """Regime decision with its allocation and the snapshot it was derived from"""
    decision: RegimeDecision
    allocation: Allocation
    snapshot: IndicatorSnapshot

    def to_dict(self) -> Dict[str, object]:
        return {
            **self.decision.to_dict(),
            "allocation": self.allocation.to_dict(),
            "indicators": self.snapshot.summary(),
            "last_updated": self.snapshot.captured_at.isoformat(),
        }


@dataclass(frozen=True)
class PortfolioRecommendations:
    """Both sleeves for the current regime"""
    regime: Regime
    allocation: Allocation
    aggressive: PortfolioSelection
    defensive: PortfolioSelection

    @property
    def using_fallback(self) -> bool:
        return self.aggressive.using_fallback or self.defensive.using_fallback

    def to_dict(self) -> Dict[str, object]:
        return {
            "regime": self.regime.value,
            "allocation": self.allocation.to_dict(),
            "aggressive": self.aggressive.to_dict(),
            "defensive": self.defensive.to_dict(),
        }


@dataclass(frozen=True)
class BacktestHolding:
    symbol: str
    name: str
    weight_percent: float
    momentum: float
    risk: float
    price: float
    rank: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "weight": round(self.weight_percent, 4),
            "momentum_pct": self.momentum * 100,
            "risk": self.risk,
            "price": self.price,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class BacktestResult:
    """Selection replayed as of a past date"""
    as_of: date
    holdings: Tuple[BacktestHolding, ...]
    diversification_count: int
    evaluated_symbols: int
    excluded_count: int

    @property
    def total_holdings(self) -> int:
        return len(self.holdings)

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.as_of.isoformat(),
            "holdings": [h.to_dict() for h in self.holdings],
            "total_holdings": self.total_holdings,
            "diversification_count": self.diversification_count,
            "evaluated_symbols": self.evaluated_symbols,
            "excluded_count": self.excluded_count,
        }


@dataclass(frozen=True)
class MonthlyPerformance:
    """One month of a sleeve's track record, percentages rounded to 2 dp"""
    month: str
    label: str
    return_percent: float
    cumulative_return_percent: float
    drawdown_percent: float
    peak_value: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "month": self.month,
            "label": self.label,
            "monthly_return": self.return_percent,
            "cumulative_return": self.cumulative_return_percent,
            "drawdown": self.drawdown_percent,
            "peak": self.peak_value,
        }


@dataclass(frozen=True)
class PerformanceSummary:
    total_return: float = 0.0
    annualized_return: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    win_rate: float = 0.0
    avg_monthly_return: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_return": self.total_return,
            "annualized_return": self.annualized_return,
            "max_drawdown": self.max_drawdown,
            "sharpe_ratio": self.sharpe_ratio,
            "win_rate": self.win_rate,
            "avg_monthly_return": self.avg_monthly_return,
        }


@dataclass(frozen=True)
class SleevePerformance:
    type: SleeveType
    name: str
    months: Tuple[MonthlyPerformance, ...]
    summary: PerformanceSummary

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type.value,
            "name": self.name,
            "monthly_data": [m.to_dict() for m in self.months],
            "summary": self.summary.to_dict(),
        }


class RefreshScope(str, Enum):
    """What a manual or scheduled refresh recomputes"""
    SIGNALS = "signals"
    PORTFOLIO = "portfolio"
    ALL = "all"


@dataclass(frozen=True)
class RefreshSummary:
    """Outcome of one refresh, also written to update history"""
    scope: RefreshScope
    success: bool
    duration_ms: int
    completed_at: datetime
    source: str = "manual"
    regime: Optional[Regime] = None
    used_fallback: bool = False
    fallback_count: int = 0
    fallback_reason: Optional[str] = None
    holdings_count: Optional[int] = None
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "scope": self.scope.value,
            "success": self.success,
            "duration_ms": self.duration_ms,
            "completed_at": self.completed_at.isoformat(),
            "source": self.source,
            "regime": self.regime.value if self.regime else None,
            "used_fallback": self.used_fallback,
            "fallback_count": self.fallback_count,
            "fallback_reason": self.fallback_reason,
            "holdings_count": self.holdings_count,
            "error_message": self.error_message,
        }
