from datetime import date, timedelta

import pytest

from tests.fakes import seed_bull_market, seed_stocks


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health_and_ready(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["advisor_ready"] is True

    resp = await client.get("/ready")
    assert resp.json() == {"status": "ready", "db_connected": True}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_market_analysis(client, gateway, advisor):
    seed_bull_market(gateway)

    resp = await client.get("/api/v1/market/analysis")
    assert resp.status_code == 200
    data = resp.json()
    assert data["regime"] == "bull"
    assert data["allocation"] == {"aggressive": 80.0, "defensive": 20.0}
    assert len(data["bull_signals"]) == 3
    assert len(data["bear_signals"]) == 5
    assert data["indicators"]["vix"] == 15.0

    await advisor.history.drain()
    resp = await client.get("/api/v1/market/history", params={"limit": 5})
    assert resp.status_code == 200
    history = resp.json()
    assert len(history) == 1
    assert history[0]["regime"] == "bull"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_market_analysis_without_benchmark_is_503(client):
    resp = await client.get("/api/v1/market/analysis")
    assert resp.status_code == 503
    assert "SPY" in resp.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_portfolio_recommendations_and_latest(client, gateway, advisor):
    seed_bull_market(gateway)
    seed_stocks(gateway)

    resp = await client.get("/api/v1/portfolio/recommendations", params={"diversification_count": 4})
    assert resp.status_code == 200
    data = resp.json()
    assert data["regime"] == "bull"
    assert data["aggressive"]["total_holdings"] == 4
    assert data["aggressive"]["using_fallback"] is False
    weights = [h["weight"] for h in data["aggressive"]["holdings"]]
    assert weights == sorted(weights, reverse=True)
    assert sum(weights) == pytest.approx(100.0, abs=0.1)

    await advisor.history.drain()
    resp = await client.get("/api/v1/portfolio/latest")
    assert resp.status_code == 200
    latest = resp.json()
    assert latest["aggressive"]["total_holdings"] == 4
    assert latest["defensive"]["type"] == "defensive"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_recommendations_reject_bad_count(client):
    resp = await client.get("/api/v1/portfolio/recommendations", params={"diversification_count": 0})
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_backtest_validation(client):
    future = (date.today() + timedelta(days=5)).isoformat()
    resp = await client.get("/api/v1/backtest", params={"date": future})
    assert resp.status_code == 400

    resp = await client.get("/api/v1/backtest", params={"date": "2024-13-45"})
    assert resp.status_code == 422

    resp = await client.get("/api/v1/backtest")
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_backtest_without_data_returns_empty(client):
    resp = await client.get("/api/v1/backtest", params={"date": "2024-01-31", "diversification_count": 1})
    assert resp.status_code == 200
    data = resp.json()
    assert data["date"] == "2024-01-31"
    assert data["diversification_count"] == 3
    assert data["holdings"] == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_backtest_dates(client):
    resp = await client.get("/api/v1/backtest/dates")
    assert resp.status_code == 200
    dates = resp.json()["dates"]
    assert len(dates) == 24
    assert dates == sorted(dates, reverse=True)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_performance(client):
    resp = await client.get("/api/v1/performance")
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"aggressive", "defensive"}

    aggressive = data["aggressive"]
    assert aggressive["type"] == "aggressive"
    assert aggressive["name"] == "Aggressive Holy Grail"
    assert len(aggressive["monthly_data"]) == 24
    assert aggressive["monthly_data"][0]["label"] == "Jan 2024"
    assert aggressive["monthly_data"][3]["drawdown"] == -3.2
    assert aggressive["summary"]["win_rate"] == 75.0
    assert data["defensive"]["summary"]["max_drawdown"] == -0.8


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_refresh_and_update_history(client, gateway, advisor):
    resp = await client.post("/api/v1/admin/refresh/bogus")
    assert resp.status_code == 422

    resp = await client.post("/api/v1/admin/refresh/signals")
    assert resp.status_code == 503

    seed_bull_market(gateway)
    resp = await client.post("/api/v1/admin/refresh/signals")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["regime"] == "bull"

    await advisor.history.drain()
    resp = await client.get("/api/v1/admin/update-history")
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["success"] for r in rows] == [True, False]
    assert rows[0]["update_type"] == "signals"
    assert rows[0]["source"] == "manual"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_cache_stats(client, gateway):
    seed_bull_market(gateway)
    await client.get("/api/v1/market/analysis")
    await client.get("/api/v1/market/analysis")

    resp = await client.get("/api/v1/admin/cache/stats")
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["size"] > 0
    assert stats["hits"] >= 1
