"""Signal indicator calculations (moving average, momentum, range risk, volatility)."""

import math
from typing import Sequence

from portfolio_advisor.domain.models import PriceBar

SIX_MONTH_BARS = 126
RISK_WINDOW_BARS = 90
TRADING_DAYS_PER_YEAR = 252
QUARTERS_TO_ANNUAL = math.sqrt(12)


def moving_average(closes: Sequence[float], period: int) -> float:
    """
    Arithmetic mean of the last `period` closes.

    Returns 0 when fewer than `period` closes are available.
    """
    if period <= 0 or len(closes) < period:
        return 0.0
    window = closes[-period:]
    return sum(window) / period


def momentum(bars: Sequence[PriceBar]) -> float:
    """
    Simple return over the given window, as a decimal:
    (last adj close - first adj close) / first adj close

    Callers slice the window (about 126 bars for six months).
    """
    if len(bars) < 2:
        return 0.0
    start = bars[0].adj_close
    end = bars[-1].adj_close
    if start == 0:
        return 0.0
    return (end - start) / start


def risk(bars: Sequence[PriceBar]) -> float:
    """
    Annualized range proxy over the last 90 bars:

        (max(high) - min(low)) / last close * sqrt(12)

    Only the last 90 bars are used regardless of input length. This is a
    range measure, not a standard deviation.
    """
    if len(bars) < 2:
        return 0.0
    recent = bars[-RISK_WINDOW_BARS:]
    max_high = max(bar.high for bar in recent)
    min_low = min(bar.low for bar in recent)
    current = recent[-1].close
    if current == 0:
        return 0.0
    return (max_high - min_low) / current * QUARTERS_TO_ANNUAL


def legacy_volatility(bars: Sequence[PriceBar]) -> float:
    """
    Annualized volatility of daily simple returns, in percent.
    Kept for compatibility with older selections.
    """
    if len(bars) < 2:
        return 0.0

    returns = []
    for prev, curr in zip(bars[:-1], bars[1:]):
        if prev.adj_close > 0:
            returns.append((curr.adj_close - prev.adj_close) / prev.adj_close)

    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    return math.sqrt(variance * TRADING_DAYS_PER_YEAR) * 100


def six_month_window(bars: Sequence[PriceBar]) -> Sequence[PriceBar]:
    return bars[-SIX_MONTH_BARS:]
