"""
Unit tests for RegimeClassifier
"""

from datetime import datetime, timezone

import pytest

from portfolio_advisor.domain.models import IndicatorSnapshot, Regime
from portfolio_advisor.domain.services.regime_classifier import ALLOCATION_TABLE, RegimeClassifier


def _snapshot(**overrides) -> IndicatorSnapshot:
    values = dict(
        spot_price=450.0,
        ma10=450.0,
        ma50=450.0,
        ma200=450.0,
        six_month_return_pct=0.0,
        vix=20.0,
        yield_curve_spread=0.0,
        credit_spread=3.0,
        captured_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return IndicatorSnapshot(**values)


@pytest.fixture()
def classifier():
    return RegimeClassifier()


def test_all_bull_signals_give_full_confidence(classifier):
    snapshot = _snapshot(spot_price=500, ma200=450, ma50=480, six_month_return_pct=8,
                         yield_curve_spread=1.5, credit_spread=0.5)

    decision = classifier.classify(snapshot)

    assert decision.regime == Regime.BULL
    assert decision.confidence_percent == pytest.approx(100.0)
    assert decision.bull_active_count == 3
    assert decision.bear_active_count == 0


def test_bear_scenario(classifier):
    snapshot = _snapshot(spot_price=400, ma200=450, ma50=440, six_month_return_pct=-15,
                         vix=35, yield_curve_spread=-1.0)

    decision = classifier.classify(snapshot)

    assert decision.regime == Regime.BEAR
    assert decision.bear_active_count == 5
    assert decision.confidence_percent == pytest.approx(100.0)


def test_bear_quorum_wins_over_bull_quorum(classifier):
    # price above MA200, positive curve and tight credit: 3 bull
    # negative momentum, death cross and VIX spike: 3 bear
    snapshot = _snapshot(spot_price=460, ma200=450, ma50=440, six_month_return_pct=-3,
                         vix=30, yield_curve_spread=1.0, credit_spread=0.5)

    decision = classifier.classify(snapshot)

    assert decision.bull_active_count == 3
    assert decision.bear_active_count == 3
    assert decision.regime == Regime.BEAR
    assert decision.confidence_percent == pytest.approx(60.0)


def test_weak_signals_are_neutral(classifier):
    snapshot = _snapshot(spot_price=455, ma200=450, ma50=460, six_month_return_pct=-2,
                         vix=26, yield_curve_spread=-0.2, credit_spread=2.5)

    decision = classifier.classify(snapshot)

    assert decision.bull_active_count == 1
    assert decision.bear_active_count == 2
    assert decision.regime == Regime.NEUTRAL
    assert decision.confidence_percent == 50.0


def test_two_of_three_bull_signals(classifier):
    snapshot = _snapshot(spot_price=460, ma200=450, ma50=455, six_month_return_pct=2,
                         yield_curve_spread=0.3, credit_spread=2.5)

    decision = classifier.classify(snapshot)

    assert decision.regime == Regime.BULL
    assert decision.confidence_percent == pytest.approx(200 / 3)


def test_signal_lists_are_complete(classifier):
    decision = classifier.classify(_snapshot())

    assert len(decision.bull_signals) == 3
    assert len(decision.bear_signals) == 5
    assert decision.to_dict()["bull_signals"][0]["name"] == "Price vs 200-day MA"


def test_allocation_table():
    assert RegimeClassifier.allocation_for(Regime.BULL).to_dict() == {"aggressive": 80, "defensive": 20}
    assert RegimeClassifier.allocation_for(Regime.BEAR).to_dict() == {"aggressive": 20, "defensive": 80}
    assert RegimeClassifier.allocation_for(Regime.NEUTRAL).to_dict() == {"aggressive": 50, "defensive": 50}
    for allocation in ALLOCATION_TABLE.values():
        assert allocation.aggressive_percent + allocation.defensive_percent == 100
