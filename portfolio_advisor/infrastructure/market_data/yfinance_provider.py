"""
YFinance Market Data Provider
Async-safe Yahoo Finance integration for US equities, ETFs and indices
"""

import asyncio
import logging
import math
import random
from datetime import date
from typing import Any, List, Optional

import pandas as pd
import yfinance as yf

from portfolio_advisor.domain.models import BarSeries, PriceBar
from portfolio_advisor.infrastructure.market_data.types import SeriesFetch

logger = logging.getLogger(__name__)


class YFinanceProvider:
    """
    Yahoo Finance data provider
    Async-safe via thread offloading

    Never raises for a symbol: failures come back as SeriesFetch statuses.
    """

    def __init__(self, retries: int = 0, fetch_names: bool = False):
        self.retries = retries
        self.fetch_names = fetch_names

    @classmethod
    def from_settings(cls, settings) -> "YFinanceProvider":
        return cls(retries=settings.FETCH_RETRIES, fetch_names=settings.FETCH_SECURITY_NAMES)

    # ------------------------------------------------------------------
    # INTERNAL HELPERS
    # ------------------------------------------------------------------

    async def _history(self, ticker: yf.Ticker, **kwargs) -> pd.DataFrame:
        """
        Async-safe wrapper around yfinance history()
        """
        return await asyncio.to_thread(ticker.history, **kwargs)

    async def _history_with_retry(self, ticker: yf.Ticker, **kwargs) -> pd.DataFrame:
        """
        Retry wrapper around history(); retries=0 means a single attempt.
        """
        last_exc: Optional[Exception] = None
        for attempt in range(self.retries + 1):
            try:
                return await self._history(ticker, **kwargs)
            except Exception as exc:
                last_exc = exc
                if attempt < self.retries:
                    await asyncio.sleep(0.4 * (2 ** attempt) + random.random() * 0.2)
        raise last_exc  # type: ignore[misc]

    async def _resolve_name(self, ticker: yf.Ticker, symbol: str) -> str:
        if not self.fetch_names:
            return symbol
        try:
            info = await asyncio.to_thread(ticker.get_info)
            return info.get("longName") or info.get("shortName") or symbol
        except Exception as exc:
            logger.debug(f"Name lookup failed for {symbol}: {exc}")
            return symbol

    async def _fetch(self, symbol: str, **history_kwargs) -> SeriesFetch:
        ticker = yf.Ticker(symbol)
        try:
            hist = await self._history_with_retry(ticker, auto_adjust=False, **history_kwargs)
        except Exception as exc:
            logger.error(f"Error fetching history for {symbol}: {exc}")
            return SeriesFetch.failure(symbol, str(exc))

        if hist is None or hist.empty or "Close" not in hist:
            logger.warning(f"No data found for symbol: {symbol}")
            return SeriesFetch.no_data(symbol)

        bars = frame_to_bars(hist)
        name = await self._resolve_name(ticker, symbol)
        return SeriesFetch.success(BarSeries.from_bars(symbol, bars, name=name))

    # ------------------------------------------------------------------
    # SERIES
    # ------------------------------------------------------------------

    async def fetch_series(
        self,
        symbol: str,
        range_spec: str = "6mo",
        interval: str = "1d",
    ) -> SeriesFetch:
        """Bars for a relative range such as "5d", "6mo" or "1y"."""
        return await self._fetch(symbol, period=range_spec, interval=interval)

    async def fetch_series_between(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = "1d",
    ) -> SeriesFetch:
        """Bars in [start, end); `end` is exclusive as in yfinance."""
        return await self._fetch(symbol, start=start, end=end, interval=interval)


def _float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def frame_to_bars(hist: pd.DataFrame) -> List[PriceBar]:
    """
    Convert a yfinance history frame to PriceBars.

    Rows without a usable close are skipped; a missing high/low/open falls
    back to the close and a missing "Adj Close" falls back to the close.
    """
    bars: List[PriceBar] = []
    has_adj = "Adj Close" in hist.columns
    for ts, row in hist.iterrows():
        close = _float(row.get("Close"))
        if close is None or close <= 0:
            continue
        adj_close = _float(row.get("Adj Close")) if has_adj else None
        volume = _float(row.get("Volume"))
        bars.append(
            PriceBar(
                date=pd.Timestamp(ts).date(),
                open=_float(row.get("Open")) or close,
                high=_float(row.get("High")) or close,
                low=_float(row.get("Low")) or close,
                close=close,
                adj_close=adj_close or close,
                volume=int(volume) if volume is not None else 0,
            )
        )
    return bars
