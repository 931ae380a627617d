"""
FALLBACK CANDIDATES

Static momentum/risk estimates substituted when live data cannot fill a
sleeve to its target holding count. Entries are listed in priority order;
the selector takes them front to back, skipping symbols already present.

These values are estimates, not live metrics. Every holding built from one
is flagged `is_fallback` and the selection reports `using_fallback`.
"""

from typing import List

from portfolio_advisor.domain.models import CandidateMetric

# -------------------------------------------------------------------
# Aggressive sleeve: liquid large-cap growth names
# -------------------------------------------------------------------

AGGRESSIVE_FALLBACKS: List[CandidateMetric] = [
    CandidateMetric("NVDA", "NVIDIA Corporation", momentum=0.45, risk=0.62, is_fallback=True),
    CandidateMetric("META", "Meta Platforms, Inc.", momentum=0.30, risk=0.48, is_fallback=True),
    CandidateMetric("AMZN", "Amazon.com, Inc.", momentum=0.22, risk=0.42, is_fallback=True),
    CandidateMetric("GOOGL", "Alphabet Inc.", momentum=0.25, risk=0.45, is_fallback=True),
    CandidateMetric("MSFT", "Microsoft Corporation", momentum=0.15, risk=0.32, is_fallback=True),
    CandidateMetric("AAPL", "Apple Inc.", momentum=0.12, risk=0.35, is_fallback=True),
    CandidateMetric("AVGO", "Broadcom Inc.", momentum=0.40, risk=0.60, is_fallback=True),
    CandidateMetric("LLY", "Eli Lilly and Company", momentum=0.18, risk=0.40, is_fallback=True),
    CandidateMetric("JPM", "JPMorgan Chase & Co.", momentum=0.14, risk=0.30, is_fallback=True),
    CandidateMetric("COST", "Costco Wholesale Corporation", momentum=0.10, risk=0.28, is_fallback=True),
]

# -------------------------------------------------------------------
# Defensive sleeve: bond, gold and broad-market ETFs
# -------------------------------------------------------------------

DEFENSIVE_FALLBACKS: List[CandidateMetric] = [
    CandidateMetric("SHY", "iShares 1-3 Year Treasury", momentum=0.02, risk=0.04,
                    category="Short Treasuries", is_fallback=True),
    CandidateMetric("IEF", "iShares 7-10 Year Treasury", momentum=0.03, risk=0.12,
                    category="Intermediate Treasuries", is_fallback=True),
    CandidateMetric("AGG", "iShares Core US Aggregate Bond", momentum=0.03, risk=0.10,
                    category="Aggregate bonds", is_fallback=True),
    CandidateMetric("TIP", "iShares TIPS Bond", momentum=0.02, risk=0.09,
                    category="Inflation-protected bonds", is_fallback=True),
    CandidateMetric("GLD", "SPDR Gold Shares", momentum=0.10, risk=0.25,
                    category="Gold", is_fallback=True),
    CandidateMetric("LQD", "iShares Investment Grade Corporate", momentum=0.03, risk=0.14,
                    category="Investment-grade corporates", is_fallback=True),
    CandidateMetric("SPY", "SPDR S&P 500 ETF", momentum=0.08, risk=0.28,
                    category="S&P 500", is_fallback=True),
]
