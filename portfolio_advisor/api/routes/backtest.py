"""
Backtest routes
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_advisor.api.dependencies import get_advisor
from portfolio_advisor.domain.schemas.backtest import BacktestDatesResponse, BacktestResponse
from portfolio_advisor.services.advisor_service import AdvisorService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=BacktestResponse)
async def run_backtest(
    as_of: date = Query(..., alias="date"),
    diversification_count: int = Query(5, ge=1, le=50),
    advisor: AdvisorService = Depends(get_advisor),
):
    """
    Replay the aggressive selection as of a past date (YYYY-MM-DD)
    """
    try:
        result = await advisor.run_backtest(as_of, diversification_count)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return result.to_dict()


@router.get("/dates", response_model=BacktestDatesResponse)
async def get_backtest_dates(advisor: AdvisorService = Depends(get_advisor)):
    return {"dates": advisor.suggested_backtest_dates()}
