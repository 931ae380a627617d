import pytest

from portfolio_advisor.domain.errors import PrimaryIndicatorUnavailable
from portfolio_advisor.domain.models import Regime, RefreshScope
from portfolio_advisor.services.indicator_service import INDICATORS_CACHE_KEY
from tests.fakes import seed_bear_market, seed_bull_market, seed_stocks


@pytest.mark.asyncio
async def test_analysis_bull_market_records_snapshot(advisor, gateway):
    seed_bull_market(gateway)

    analysis = await advisor.get_analysis()
    await advisor.history.drain()

    assert analysis.decision.regime == Regime.BULL
    assert analysis.decision.confidence_percent == 100.0
    assert analysis.allocation.aggressive_percent == 80
    rows = await advisor.signal_history()
    assert len(rows) == 1
    assert rows[0].regime.value == "bull"
    assert rows[0].allocation == {"aggressive": 80, "defensive": 20}


@pytest.mark.asyncio
async def test_analysis_bear_market(advisor, gateway):
    seed_bear_market(gateway)

    analysis = await advisor.get_analysis()

    assert analysis.decision.regime == Regime.BEAR
    assert analysis.decision.bear_active_count == 5
    assert analysis.allocation.defensive_percent == 80


@pytest.mark.asyncio
async def test_recommendations_follow_regime(advisor, gateway):
    seed_bear_market(gateway)
    seed_stocks(gateway)

    recommendations = await advisor.get_portfolio_recommendations()
    await advisor.history.drain()

    assert recommendations.regime == Regime.BEAR
    assert recommendations.aggressive.target_holdings == 3
    assert recommendations.defensive.target_holdings == 7
    latest = await advisor.latest_portfolios()
    assert latest["aggressive"].total_holdings == 3
    assert latest["defensive"].total_holdings == 7


@pytest.mark.asyncio
async def test_refresh_signals_keeps_portfolio_cache(advisor, gateway, cache):
    seed_bull_market(gateway)
    seed_stocks(gateway)
    await advisor.get_portfolio_recommendations()
    portfolio_keys = {k for k in cache.keys() if k.startswith(("portfolio", "universe"))}
    assert portfolio_keys

    before = cache.get(INDICATORS_CACHE_KEY)
    summary = await advisor.refresh(RefreshScope.SIGNALS)

    assert summary.success
    assert summary.regime == Regime.BULL
    assert summary.holdings_count is None
    assert cache.get(INDICATORS_CACHE_KEY) is not before
    assert portfolio_keys <= set(cache.keys())
    assert INDICATORS_CACHE_KEY in cache


@pytest.mark.asyncio
async def test_refresh_portfolio_reports_fallback(advisor, gateway):
    seed_bull_market(gateway)

    summary = await advisor.refresh(RefreshScope.PORTFOLIO, source="scheduled")
    await advisor.history.drain()

    assert summary.success
    assert summary.used_fallback
    assert summary.holdings_count == 8
    # aggressive: 5 fallbacks; defensive: SPY and LQD live plus SHY
    assert summary.fallback_count == 6
    assert "fallback" in summary.fallback_reason
    rows = await advisor.update_history()
    assert rows[0].source == "scheduled"
    assert rows[0].update_type.value == "portfolio"
    assert rows[0].holdings_count == 8


@pytest.mark.asyncio
async def test_failed_refresh_is_recorded_and_raised(advisor, gateway):
    with pytest.raises(PrimaryIndicatorUnavailable):
        await advisor.refresh(RefreshScope.SIGNALS)
    await advisor.history.drain()

    rows = await advisor.update_history()
    assert len(rows) == 1
    assert rows[0].success is False
    assert "SPY" in rows[0].error_message


@pytest.mark.asyncio
async def test_refresh_all_clears_cache(advisor, gateway, cache):
    seed_bull_market(gateway)
    seed_stocks(gateway)
    cache.set("unrelated", 1, 60)

    summary = await advisor.refresh(RefreshScope.ALL)

    assert summary.success
    assert "unrelated" not in cache
    assert summary.holdings_count == 8


def test_invalidate_by_scope(advisor, cache):
    for key in ("market:analysis", "signals:x", "portfolio:aggressive:bull:5", "universe:top:5", "stock:AAA"):
        cache.set(key, 1, 60)

    assert advisor.invalidate(RefreshScope.SIGNALS) == 2
    assert advisor.invalidate(RefreshScope.PORTFOLIO) == 2
    assert set(cache.keys()) == {"stock:AAA"}
    assert advisor.invalidate(RefreshScope.ALL) == 1
