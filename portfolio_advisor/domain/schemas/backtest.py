from datetime import date
from typing import List

from pydantic import BaseModel


class BacktestHoldingSchema(BaseModel):
    symbol: str
    name: str
    weight: float
    momentum_pct: float
    risk: float
    price: float
    rank: int


class BacktestResponse(BaseModel):
    date: date
    holdings: List[BacktestHoldingSchema]
    total_holdings: int
    diversification_count: int
    evaluated_symbols: int
    excluded_count: int


class BacktestDatesResponse(BaseModel):
    dates: List[date]
