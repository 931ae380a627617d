"""
PORTFOLIO ENGINE
Rank candidates by momentum, weight them by inverse risk

RESPONSIBILITIES:
- Turn a fetched series into a CandidateMetric (or an exclusion reason)
- Rank by momentum, fill gaps from a fallback pool, truncate to N
- Risk-inverse weighting: weight_i = (1/risk_i) / sum(1/risk_j) * 100
- Order holdings by weight descending

Ranking and weighting use different axes on purpose: momentum decides
WHICH names are held, risk decides HOW MUCH of each.

RULES:
✅ Pure calculation
❌ No data fetching
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from portfolio_advisor.domain.indicators.signal_indicators import (
    momentum,
    risk,
    six_month_window,
)
from portfolio_advisor.domain.models import (
    BarSeries,
    CandidateMetric,
    ExclusionReason,
    PortfolioHolding,
    PortfolioSelection,
    Regime,
    SleeveType,
)

MIN_HOLDINGS = 3
MAX_HOLDINGS = 10
MIN_LIVE_BARS = 20

DEFAULT_TARGET_HOLDINGS: Dict[SleeveType, Dict[Regime, int]] = {
    SleeveType.AGGRESSIVE: {
        Regime.BULL: 5,
        Regime.NEUTRAL: 5,
        Regime.BEAR: 3,
    },
    SleeveType.DEFENSIVE: {
        Regime.BULL: 3,
        Regime.NEUTRAL: 5,
        Regime.BEAR: 7,
    },
}

_SLEEVE_NOUNS = {
    SleeveType.AGGRESSIVE: "stocks",
    SleeveType.DEFENSIVE: "ETFs",
}


@dataclass(frozen=True)
class CandidateEvaluation:
    """Outcome of evaluating one candidate: a metric or an exclusion"""
    symbol: str
    metric: Optional[CandidateMetric] = None
    exclusion: Optional[ExclusionReason] = None


def clamp_holdings(count: int) -> int:
    return max(MIN_HOLDINGS, min(MAX_HOLDINGS, int(count)))


def resolve_target_holdings(
    sleeve: SleeveType,
    regime: Regime,
    requested: Optional[int] = None,
) -> int:
    """
    Target holding count: the requested value clamped to [3, 10], or the
    regime default for the sleeve when nothing was requested.
    """
    if requested is None:
        return DEFAULT_TARGET_HOLDINGS[sleeve][regime]
    return clamp_holdings(requested)


def evaluate_series(
    series: BarSeries,
    min_bars: int = MIN_LIVE_BARS,
    name: Optional[str] = None,
    category: Optional[str] = None,
) -> CandidateEvaluation:
    """
    Compute six-month momentum and 90-bar range risk for one series.

    Series shorter than `min_bars` and series with non-positive risk are
    excluded; the latter would break inverse-risk weighting.
    """
    bars = series.bars
    if len(bars) < min_bars:
        return CandidateEvaluation(series.symbol, exclusion=ExclusionReason.INSUFFICIENT_DATA)

    candidate_risk = risk(bars)
    if candidate_risk <= 0:
        return CandidateEvaluation(series.symbol, exclusion=ExclusionReason.NON_POSITIVE_RISK)

    metric = CandidateMetric(
        symbol=series.symbol,
        name=name or series.name or series.symbol,
        momentum=momentum(six_month_window(bars)),
        risk=candidate_risk,
        category=category,
        price=series.last_close,
    )
    return CandidateEvaluation(series.symbol, metric=metric)


def rank_by_momentum(candidates: Iterable[CandidateMetric]) -> List[CandidateMetric]:
    """Sort by momentum descending (stable for ties)"""
    return sorted(candidates, key=lambda c: c.momentum, reverse=True)


def top_symbols_by_momentum(candidates: Iterable[CandidateMetric], top_k: int) -> List[str]:
    return [c.symbol for c in rank_by_momentum(candidates)[:top_k]]


def fill_with_fallback(
    ranked: Sequence[CandidateMetric],
    target: int,
    fallback_pool: Sequence[CandidateMetric],
) -> Tuple[List[CandidateMetric], List[CandidateMetric]]:
    """
    Append fallback entries not already present until `target` is reached.

    Returns (combined, fallbacks_used). When the pool runs out the combined
    list is simply shorter than `target`.
    """
    combined = list(ranked)
    used: List[CandidateMetric] = []
    if len(combined) >= target:
        return combined, used

    present = {c.symbol for c in combined}
    for entry in fallback_pool:
        if len(combined) >= target:
            break
        if entry.symbol in present:
            continue
        combined.append(entry)
        used.append(entry)
        present.add(entry.symbol)
    return combined, used


def risk_inverse_weights(candidates: Sequence[CandidateMetric]) -> List[Tuple[CandidateMetric, float]]:
    """
    Pair each candidate with its weight in percent.

    All risks must be positive; evaluate_series guarantees this for live
    candidates and the fallback pools are static positives.
    """
    if not candidates:
        return []
    inverse = [1.0 / c.risk for c in candidates]
    total = sum(inverse)
    return [(c, inv / total * 100) for c, inv in zip(candidates, inverse)]


def fallback_reason(sleeve: SleeveType, live_count: int, fallback_count: int) -> str:
    noun = _SLEEVE_NOUNS[sleeve]
    return (
        f"Live data available for only {live_count} {noun}; "
        f"using {fallback_count} fallback {noun}."
    )


def build_selection(
    sleeve: SleeveType,
    candidates: Iterable[CandidateMetric],
    target: int,
    calculated_at: datetime,
    fallback_pool: Sequence[CandidateMetric] = (),
    regime: Optional[Regime] = None,
    excluded: Optional[Mapping[str, ExclusionReason]] = None,
) -> PortfolioSelection:
    """
    Rank -> fallback fill -> truncate -> weight -> order by weight.
    """
    ranked = rank_by_momentum(candidates)
    live_count = len(ranked)
    combined, used = fill_with_fallback(ranked, target, fallback_pool)
    selected = combined[:target]

    holdings = [
        PortfolioHolding(
            symbol=metric.symbol,
            name=metric.name,
            weight_percent=weight,
            momentum=metric.momentum,
            risk=metric.risk,
            category=metric.category,
            is_fallback=metric.is_fallback,
        )
        for metric, weight in risk_inverse_weights(selected)
    ]
    holdings.sort(key=lambda h: h.weight_percent, reverse=True)

    return PortfolioSelection(
        type=sleeve,
        holdings=tuple(holdings),
        calculated_at=calculated_at,
        target_holdings=target,
        regime=regime,
        using_fallback=bool(used),
        fallback_count=len(used),
        fallback_reason=fallback_reason(sleeve, live_count, len(used)) if used else None,
        excluded=dict(excluded or {}),
    )
