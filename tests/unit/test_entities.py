from datetime import date, datetime, timezone

import pytest

from portfolio_advisor.domain.models import (
    Allocation,
    BarSeries,
    PortfolioHolding,
    PortfolioSelection,
    PriceBar,
    Regime,
    SleeveType,
)


def _bar(day: int, close: float) -> PriceBar:
    return PriceBar(date(2024, 1, day), close, close, close, close, close)


def test_bar_series_sorts_dedupes_and_drops_bad_closes():
    series = BarSeries.from_bars(
        "XYZ",
        [_bar(3, 30), _bar(1, 10), _bar(2, 0), _bar(1, 11), _bar(4, -5)],
    )

    assert [b.date.day for b in series.bars] == [1, 3]
    assert series.bars[0].close == 11
    assert series.name == "XYZ"
    assert series.last_close == 30


def test_bar_series_up_to_excludes_later_bars():
    series = BarSeries.from_bars("XYZ", [_bar(d, 10 + d) for d in range(1, 11)])
    cut = series.up_to(date(2024, 1, 5))

    assert len(cut) == 5
    assert cut.bars[-1].date == date(2024, 1, 5)
    assert len(series) == 10


def test_allocation_must_sum_to_100():
    assert Allocation(80, 20).to_dict() == {"aggressive": 80, "defensive": 20}
    with pytest.raises(ValueError):
        Allocation(70, 20)


def test_selection_to_dict():
    selection = PortfolioSelection(
        type=SleeveType.DEFENSIVE,
        holdings=(PortfolioHolding("SHY", "Short Treasuries ETF", 100.0, category="Short Treasuries"),),
        calculated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        target_holdings=3,
        regime=Regime.BEAR,
    )

    payload = selection.to_dict()
    assert payload["type"] == "defensive"
    assert payload["regime"] == "bear"
    assert payload["total_holdings"] == 1
    assert payload["holdings"][0]["weight"] == 100.0
    assert payload["holdings"][0]["category"] == "Short Treasuries"
    assert selection.total_weight == pytest.approx(100.0)
