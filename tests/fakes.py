"""Fakes and bar builders shared by the test suite"""

from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from portfolio_advisor.domain.models import BarSeries, PriceBar
from portfolio_advisor.infrastructure.market_data.types import SeriesFetch

STOCK_SYMBOLS = ["AAA", "BBB", "CCC", "DDD", "EEE", "FFF"]


# -------------------------------------------------------------------
# Bar helpers
# -------------------------------------------------------------------

def make_bars(
    closes: Sequence[float],
    start: date = date(2024, 1, 1),
    spread: float = 0.02,
) -> List[PriceBar]:
    return [
        PriceBar(
            date=start + timedelta(days=i),
            open=close,
            high=close * (1 + spread),
            low=close * (1 - spread),
            close=close,
            adj_close=close,
        )
        for i, close in enumerate(closes)
    ]


def make_series(
    symbol: str,
    closes: Sequence[float],
    start: date = date(2024, 1, 1),
    spread: float = 0.02,
    name: Optional[str] = None,
) -> BarSeries:
    return BarSeries.from_bars(symbol, make_bars(closes, start, spread), name=name)


def linear(first: float, last: float, count: int) -> List[float]:
    if count == 1:
        return [first]
    step = (last - first) / (count - 1)
    return [first + step * i for i in range(count)]


# -------------------------------------------------------------------
# Fakes
# -------------------------------------------------------------------

class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    """
    In-memory MarketDataGateway. Unknown symbols answer NO_DATA.

    `extra_days_after_end` makes fetch_series_between leak bars past the
    requested end, to check callers filter by date themselves.
    """

    def __init__(self):
        self.series: Dict[str, BarSeries] = {}
        self.errors: Dict[str, str] = {}
        self.raises: Dict[str, Exception] = {}
        self.calls: List[tuple] = []
        self.extra_days_after_end = 0

    def add(self, series: BarSeries) -> None:
        self.series[series.symbol] = series

    def fail(self, symbol: str, error: str = "provider down") -> None:
        self.errors[symbol] = error

    def _answer(self, symbol: str) -> SeriesFetch:
        if symbol in self.raises:
            raise self.raises[symbol]
        if symbol in self.errors:
            return SeriesFetch.failure(symbol, self.errors[symbol])
        series = self.series.get(symbol)
        if series is None:
            return SeriesFetch.no_data(symbol)
        return SeriesFetch.success(series)

    def call_count(self, symbol: str) -> int:
        return sum(1 for call in self.calls if call[1] == symbol)

    async def fetch_series(self, symbol: str, range_spec: str = "6mo", interval: str = "1d") -> SeriesFetch:
        self.calls.append(("series", symbol, range_spec))
        return self._answer(symbol)

    async def fetch_series_between(self, symbol: str, start: date, end: date, interval: str = "1d") -> SeriesFetch:
        self.calls.append(("between", symbol, start, end))
        fetch = self._answer(symbol)
        if not fetch.ok:
            return fetch
        last = end + timedelta(days=self.extra_days_after_end)
        bars = [bar for bar in fetch.series.bars if start <= bar.date < last]
        return SeriesFetch.success(BarSeries(symbol=symbol, name=fetch.series.name, bars=tuple(bars)))


def seed_bull_market(gateway: FakeGateway) -> None:
    """SPY trending up, calm VIX, positive curve, flat credit"""
    gateway.add(make_series("SPY", linear(400, 500, 250)))
    gateway.add(make_series("^VIX", [15.0] * 5))
    gateway.add(make_series("^TNX", [4.5] * 5))
    gateway.add(make_series("^IRX", [3.0] * 5))
    gateway.add(make_series("HYG", [80.0] * 25))
    gateway.add(make_series("LQD", [110.0] * 25))


def seed_bear_market(gateway: FakeGateway) -> None:
    """SPY trending down, VIX 35, inverted curve"""
    gateway.add(make_series("SPY", linear(500, 400, 250)))
    gateway.add(make_series("^VIX", [35.0] * 5))
    gateway.add(make_series("^TNX", [3.0] * 5))
    gateway.add(make_series("^IRX", [4.0] * 5))
    gateway.add(make_series("HYG", [80.0] * 25))
    gateway.add(make_series("LQD", [110.0] * 25))


def seed_stocks(gateway: FakeGateway, count: int = 140) -> None:
    """Six stocks with distinct momentum; AAA strongest, FFF weakest"""
    for idx, symbol in enumerate(STOCK_SYMBOLS):
        gateway.add(make_series(symbol, linear(100, 100 + 60 - idx * 10, count), spread=0.01 * (idx + 1)))
