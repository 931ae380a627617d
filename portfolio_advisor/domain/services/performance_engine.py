"""
PERFORMANCE ENGINE
Monthly track record and summary statistics for a sleeve

RESPONSIBILITIES:
- Compound monthly returns from a base value of 100
- Track the running peak and the drawdown from it
- Summarize: total, annualized, max drawdown, Sharpe, win rate, average

RULES:
✅ Pure calculation
❌ No data fetching
"""

import calendar
import math
from typing import Iterable, List, Sequence, Tuple

from portfolio_advisor.domain.models import (
    MonthlyPerformance,
    PerformanceSummary,
    SleevePerformance,
    SleeveType,
)

BASE_VALUE = 100.0
ANNUAL_RISK_FREE_PERCENT = 4.0
MONTHS_PER_YEAR = 12


def month_label(month: str) -> str:
    """'2025-01' -> 'Jan 2025'"""
    year, number = month.split("-")
    return f"{calendar.month_abbr[int(number)]} {year}"


def monthly_performance(returns: Iterable[Tuple[str, float]]) -> List[MonthlyPerformance]:
    value = BASE_VALUE
    peak = BASE_VALUE
    rows = []
    for month, monthly_return in returns:
        value *= 1 + monthly_return / 100
        peak = max(peak, value)
        rows.append(
            MonthlyPerformance(
                month=month,
                label=month_label(month),
                return_percent=monthly_return,
                cumulative_return_percent=round((value - BASE_VALUE) / BASE_VALUE * 100, 2),
                drawdown_percent=round((value - peak) / peak * 100, 2),
                peak_value=round(peak, 2),
            )
        )
    return rows


def sharpe_ratio(returns: Sequence[float], annual_risk_free_percent: float = ANNUAL_RISK_FREE_PERCENT) -> float:
    """
    Annualized Sharpe ratio of monthly percent returns.

    Uses the population standard deviation of excess returns and scales
    by sqrt(12). Returns 0 when the excess returns do not vary.
    """
    if not returns:
        return 0.0
    monthly_risk_free = annual_risk_free_percent / MONTHS_PER_YEAR
    excess = [r - monthly_risk_free for r in returns]
    mean = sum(excess) / len(excess)
    std = math.sqrt(sum((r - mean) ** 2 for r in excess) / len(excess))
    if std == 0:
        return 0.0
    return mean / std * math.sqrt(MONTHS_PER_YEAR)


def summarize(months: Sequence[MonthlyPerformance]) -> PerformanceSummary:
    if not months:
        return PerformanceSummary()

    returns = [m.return_percent for m in months]
    total = months[-1].cumulative_return_percent
    annualized = (1 + total / 100) ** (MONTHS_PER_YEAR / len(months)) - 1
    wins = [r for r in returns if r > 0]

    return PerformanceSummary(
        total_return=round(total, 2),
        annualized_return=round(annualized * 100, 2),
        max_drawdown=round(min(m.drawdown_percent for m in months), 2),
        sharpe_ratio=round(sharpe_ratio(returns), 2),
        win_rate=round(len(wins) / len(returns) * 100, 1),
        avg_monthly_return=round(sum(returns) / len(returns), 2),
    )


def build_sleeve_performance(
    sleeve: SleeveType,
    name: str,
    returns: Iterable[Tuple[str, float]],
) -> SleevePerformance:
    months = monthly_performance(returns)
    return SleevePerformance(
        type=sleeve,
        name=name,
        months=tuple(months),
        summary=summarize(months),
    )
