from datetime import date

import pandas as pd
import pytest

from portfolio_advisor.infrastructure.market_data import yfinance_provider
from portfolio_advisor.infrastructure.market_data.types import FetchStatus
from portfolio_advisor.infrastructure.market_data.yfinance_provider import YFinanceProvider, frame_to_bars

NAN = float("nan")


def _frame(rows, with_adj=True):
    index = pd.DatetimeIndex([pd.Timestamp(r[0]) for r in rows])
    data = {
        "Open": [r[1] for r in rows],
        "High": [r[2] for r in rows],
        "Low": [r[3] for r in rows],
        "Close": [r[4] for r in rows],
        "Volume": [1000 for _ in rows],
    }
    if with_adj:
        data["Adj Close"] = [r[5] for r in rows]
    return pd.DataFrame(data, index=index)


class _FakeTicker:
    frame = None
    error = None
    calls = []

    def __init__(self, symbol):
        self.symbol = symbol

    def history(self, **kwargs):
        _FakeTicker.calls.append(kwargs)
        if _FakeTicker.error is not None:
            raise _FakeTicker.error
        return _FakeTicker.frame

    def get_info(self):
        return {"longName": f"{self.symbol} Holdings Inc."}


@pytest.fixture()
def fake_ticker(monkeypatch):
    _FakeTicker.frame = None
    _FakeTicker.error = None
    _FakeTicker.calls = []
    monkeypatch.setattr(yfinance_provider.yf, "Ticker", _FakeTicker)
    return _FakeTicker


def test_frame_to_bars_skips_missing_and_non_positive_closes():
    hist = _frame([
        ("2024-01-02", 10, 11, 9, 10, 9.5),
        ("2024-01-03", 10, 11, 9, NAN, NAN),
        ("2024-01-04", 10, 11, 9, 0, 0),
        ("2024-01-05", NAN, NAN, NAN, 12, NAN),
    ])

    bars = frame_to_bars(hist)

    assert [b.date for b in bars] == [date(2024, 1, 2), date(2024, 1, 5)]
    assert bars[0].adj_close == 9.5
    # missing OHLC and adj close fall back to the close
    assert (bars[1].open, bars[1].high, bars[1].low, bars[1].adj_close) == (12, 12, 12, 12)


def test_frame_to_bars_without_adj_close_column():
    bars = frame_to_bars(_frame([("2024-01-02", 10, 11, 9, 10, None)], with_adj=False))
    assert bars[0].adj_close == 10


@pytest.mark.asyncio
async def test_fetch_series_success(fake_ticker):
    fake_ticker.frame = _frame([
        ("2024-01-03", 10, 11, 9, 10.5, 10.5),
        ("2024-01-02", 10, 11, 9, 10, 10),
    ])
    provider = YFinanceProvider(fetch_names=True)

    fetch = await provider.fetch_series("ABC", "6mo", "1d")

    assert fetch.status == FetchStatus.OK
    assert fetch.series.name == "ABC Holdings Inc."
    assert [b.date for b in fetch.series.bars] == [date(2024, 1, 2), date(2024, 1, 3)]
    assert fake_ticker.calls[0] == {"auto_adjust": False, "period": "6mo", "interval": "1d"}


@pytest.mark.asyncio
async def test_fetch_series_between_passes_window(fake_ticker):
    fake_ticker.frame = _frame([("2024-01-02", 10, 11, 9, 10, 10)])
    provider = YFinanceProvider()

    await provider.fetch_series_between("ABC", date(2023, 4, 30), date(2024, 1, 31))

    assert fake_ticker.calls[0]["start"] == date(2023, 4, 30)
    assert fake_ticker.calls[0]["end"] == date(2024, 1, 31)


@pytest.mark.asyncio
async def test_empty_frame_is_no_data(fake_ticker):
    fake_ticker.frame = pd.DataFrame()
    fetch = await YFinanceProvider().fetch_series("GONE")
    assert fetch.status == FetchStatus.NO_DATA
    assert not fetch.ok


@pytest.mark.asyncio
async def test_provider_exception_is_provider_error(fake_ticker):
    fake_ticker.error = RuntimeError("rate limited")
    fetch = await YFinanceProvider().fetch_series("ABC")
    assert fetch.status == FetchStatus.PROVIDER_ERROR
    assert "rate limited" in fetch.error
    assert len(fake_ticker.calls) == 1


@pytest.mark.asyncio
async def test_retries_before_giving_up(fake_ticker):
    fake_ticker.error = RuntimeError("flaky")
    fetch = await YFinanceProvider(retries=1).fetch_series("ABC")
    assert fetch.status == FetchStatus.PROVIDER_ERROR
    assert len(fake_ticker.calls) == 2
