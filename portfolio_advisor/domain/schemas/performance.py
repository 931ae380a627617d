from typing import List, Literal

from pydantic import BaseModel


class MonthlyPerformanceSchema(BaseModel):
    month: str
    label: str
    # Percentages
    monthly_return: float
    cumulative_return: float
    drawdown: float
    peak: float


class PerformanceSummarySchema(BaseModel):
    total_return: float
    annualized_return: float
    max_drawdown: float
    sharpe_ratio: float
    win_rate: float
    avg_monthly_return: float


class SleevePerformanceSchema(BaseModel):
    type: Literal["aggressive", "defensive"]
    name: str
    monthly_data: List[MonthlyPerformanceSchema]
    summary: PerformanceSummarySchema


class PerformanceResponse(BaseModel):
    aggressive: SleevePerformanceSchema
    defensive: SleevePerformanceSchema
