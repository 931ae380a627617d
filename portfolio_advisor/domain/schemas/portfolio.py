from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class HoldingSchema(BaseModel):
    symbol: str
    name: str
    weight: float
    momentum: Optional[float] = None
    risk: Optional[float] = None
    category: Optional[str] = None
    is_fallback: bool = False


class PortfolioSelectionSchema(BaseModel):
    type: str
    holdings: List[HoldingSchema]
    total_holdings: int
    target_holdings: int
    regime: Optional[str] = None
    calculated_at: datetime
    using_fallback: bool
    fallback_count: int
    fallback_reason: Optional[str] = None
    excluded: Dict[str, str]


class PortfolioRecommendationsResponse(BaseModel):
    regime: str
    allocation: Dict[str, float]
    aggressive: PortfolioSelectionSchema
    defensive: PortfolioSelectionSchema


class SavedPortfolioSchema(BaseModel):
    id: int
    date: datetime
    type: str
    regime: Optional[str] = None
    holdings: List[dict]
    total_holdings: int
    using_fallback: bool


class LatestPortfoliosResponse(BaseModel):
    aggressive: Optional[SavedPortfolioSchema] = None
    defensive: Optional[SavedPortfolioSchema] = None
