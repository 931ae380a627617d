from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel


class SignalSchema(BaseModel):
    name: str
    active: bool
    raw_value: float
    value: str
    description: str


class IndicatorSummarySchema(BaseModel):
    spot_price: float
    ma10: float
    ma50: float
    ma200: float
    six_month_return_pct: float
    vix: float
    yield_curve_spread: float
    credit_spread: float
    captured_at: datetime
    degraded_feeds: List[str]


class MarketAnalysisResponse(BaseModel):
    regime: str
    confidence: float
    bull_count: int
    bear_count: int
    bull_signals: List[SignalSchema]
    bear_signals: List[SignalSchema]
    allocation: Dict[str, float]
    indicators: IndicatorSummarySchema
    last_updated: datetime


class SignalHistoryResponse(BaseModel):
    id: int
    date: datetime
    regime: str
    confidence: float
    bull_count: int
    bear_count: int
    bull_signals: List[dict]
    bear_signals: List[dict]
    allocation: Dict[str, float]
