"""
Market data gateway protocol and fetch result types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Protocol

from portfolio_advisor.domain.models import BarSeries, ExclusionReason


class FetchStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class SeriesFetch:
    """
    Tagged result of one series request.

    OK carries a non-empty series. NO_DATA means the provider answered with
    nothing usable; PROVIDER_ERROR means the request itself failed.
    """
    symbol: str
    status: FetchStatus
    series: Optional[BarSeries] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.OK and self.series is not None

    @classmethod
    def success(cls, series: BarSeries) -> "SeriesFetch":
        if not series.bars:
            return cls.no_data(series.symbol)
        return cls(symbol=series.symbol, status=FetchStatus.OK, series=series)

    @classmethod
    def no_data(cls, symbol: str) -> "SeriesFetch":
        return cls(symbol=symbol, status=FetchStatus.NO_DATA)

    @classmethod
    def failure(cls, symbol: str, error: str) -> "SeriesFetch":
        return cls(symbol=symbol, status=FetchStatus.PROVIDER_ERROR, error=error)

    def exclusion(self) -> Optional[ExclusionReason]:
        if self.ok:
            return None
        if self.status == FetchStatus.PROVIDER_ERROR:
            return ExclusionReason.PROVIDER_ERROR
        return ExclusionReason.NO_DATA


class MarketDataGateway(Protocol):
    async def fetch_series(self, symbol: str, range_spec: str = "6mo", interval: str = "1d") -> SeriesFetch:
        ...

    async def fetch_series_between(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = "1d",
    ) -> SeriesFetch:
        ...
