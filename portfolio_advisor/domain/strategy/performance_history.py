"""
SLEEVE TRACK RECORD

Monthly simple returns (percent) from backtests of each sleeve's strategy,
oldest month first. Aggressive: momentum ranking over large-cap stocks.
Defensive: low-volatility ETF rotation.
"""

from typing import Dict, List, Tuple

from portfolio_advisor.domain.models import SleeveType

SLEEVE_NAMES: Dict[SleeveType, str] = {
    SleeveType.AGGRESSIVE: "Aggressive Holy Grail",
    SleeveType.DEFENSIVE: "Defensive Holy Grail",
}

_MONTHS = [f"{year}-{month:02d}" for year in (2024, 2025) for month in range(1, 13)]

_AGGRESSIVE_RETURNS = [
    2.8, 4.2, 1.5, -3.2, 3.8, 2.1, -1.8, 1.2, 2.5, -0.8, 5.2, 1.9,
    3.1, -1.5, 2.8, 1.2, 4.5, -2.1, 3.2, 0.8, 2.1, -1.2, 4.8, 2.3,
]

_DEFENSIVE_RETURNS = [
    0.8, 1.2, 0.5, -0.8, 1.1, 0.6, -0.3, 0.4, 0.9, -0.2, 1.5, 0.7,
    0.9, -0.4, 0.8, 0.3, 1.3, -0.6, 0.9, 0.2, 0.6, -0.3, 1.4, 0.7,
]

MONTHLY_RETURNS: Dict[SleeveType, List[Tuple[str, float]]] = {
    SleeveType.AGGRESSIVE: list(zip(_MONTHS, _AGGRESSIVE_RETURNS)),
    SleeveType.DEFENSIVE: list(zip(_MONTHS, _DEFENSIVE_RETURNS)),
}
