"""
REGIME CLASSIFIER
Dual-threshold signal voting over benchmark indicators

RESPONSIBILITIES:
- Evaluate 3 bull signals (high sensitivity)
- Evaluate 5 bear signals (high specificity)
- Resolve regime with fixed precedence: bear -> bull -> neutral
- Map regime to the aggressive/defensive allocation

RULES:
✅ Pure calculation
✅ Deterministic output
❌ No data fetching
"""

from typing import Dict, Tuple

from portfolio_advisor.domain.models import (
    Allocation,
    IndicatorSnapshot,
    Regime,
    RegimeDecision,
    Signal,
)

# -------------------------------------------------------------------
# Signal thresholds
# -------------------------------------------------------------------

CREDIT_SPREAD_LOW = 2.0
VIX_HIGH = 25.0
YIELD_CURVE_DEEP_INVERSION = -0.5

BEAR_QUORUM = 3
BULL_QUORUM = 2
NEUTRAL_CONFIDENCE = 50.0

# -------------------------------------------------------------------
# Allocation table (aggressive %, defensive %)
# -------------------------------------------------------------------

ALLOCATION_TABLE: Dict[Regime, Allocation] = {
    Regime.BULL: Allocation(aggressive_percent=80, defensive_percent=20),
    Regime.BEAR: Allocation(aggressive_percent=20, defensive_percent=80),
    Regime.NEUTRAL: Allocation(aggressive_percent=50, defensive_percent=50),
}


class RegimeClassifier:
    """
    Regime Classifier
    Turns an IndicatorSnapshot into a RegimeDecision
    """

    def classify(self, snapshot: IndicatorSnapshot) -> RegimeDecision:
        """
        Classify market regime

        Bear needs 3 of 5 signals and is checked first, so a bear quorum
        wins regardless of how many bull signals are active.
        """
        bull_signals = self._bull_signals(snapshot)
        bear_signals = self._bear_signals(snapshot)

        bull_count = sum(1 for s in bull_signals if s.active)
        bear_count = sum(1 for s in bear_signals if s.active)

        if bear_count >= BEAR_QUORUM:
            regime = Regime.BEAR
            confidence = bear_count / len(bear_signals) * 100
        elif bull_count >= BULL_QUORUM:
            regime = Regime.BULL
            confidence = bull_count / len(bull_signals) * 100
        else:
            regime = Regime.NEUTRAL
            confidence = NEUTRAL_CONFIDENCE

        return RegimeDecision(
            regime=regime,
            confidence_percent=confidence,
            bull_active_count=bull_count,
            bear_active_count=bear_count,
            bull_signals=bull_signals,
            bear_signals=bear_signals,
        )

    @staticmethod
    def allocation_for(regime: Regime) -> Allocation:
        return ALLOCATION_TABLE[regime]

    @staticmethod
    def _bull_signals(s: IndicatorSnapshot) -> Tuple[Signal, ...]:
        return (
            Signal(
                name="Price vs 200-day MA",
                active=s.spot_price > s.ma200,
                raw_value=s.spot_price - s.ma200,
                description="Benchmark is trading above its 200-day moving average",
                display_value=f"{s.spot_price:.2f} vs {s.ma200:.2f}",
            ),
            Signal(
                name="Yield curve",
                active=s.yield_curve_spread > 0,
                raw_value=s.yield_curve_spread,
                description="10-year yield is above the 3-month yield",
                display_value=f"{s.yield_curve_spread:.2f}%",
            ),
            Signal(
                name="Credit risk",
                active=s.credit_spread < CREDIT_SPREAD_LOW,
                raw_value=s.credit_spread,
                description="Credit spread is at a low level",
                display_value=f"{s.credit_spread:.2f}%",
            ),
        )

    @staticmethod
    def _bear_signals(s: IndicatorSnapshot) -> Tuple[Signal, ...]:
        return (
            Signal(
                name="Price vs 200-day MA",
                active=s.spot_price < s.ma200,
                raw_value=s.spot_price - s.ma200,
                description="Benchmark is trading below its 200-day moving average",
                display_value=f"{s.spot_price:.2f} vs {s.ma200:.2f}",
            ),
            Signal(
                name="Six-month momentum",
                active=s.six_month_return_pct < 0,
                raw_value=s.six_month_return_pct,
                description="Benchmark six-month return is negative",
                display_value=f"{s.six_month_return_pct:.2f}%",
            ),
            Signal(
                name="Moving-average crossover",
                active=s.ma50 < s.ma200,
                raw_value=s.ma50 - s.ma200,
                description="50-day MA is below the 200-day MA (death cross)",
                display_value=f"MA50: {s.ma50:.2f} vs MA200: {s.ma200:.2f}",
            ),
            Signal(
                name="VIX level",
                active=s.vix > VIX_HIGH,
                raw_value=s.vix,
                description=f"VIX is above {VIX_HIGH:g} (high volatility)",
                display_value=f"{s.vix:.2f}",
            ),
            Signal(
                name="Yield-curve inversion",
                active=s.yield_curve_spread < YIELD_CURVE_DEEP_INVERSION,
                raw_value=s.yield_curve_spread,
                description="Yield curve is deeply inverted",
                display_value=f"{s.yield_curve_spread:.2f}%",
            ),
        )
