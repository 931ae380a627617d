"""
Market routes - regime analysis and signal history
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_advisor.api.dependencies import get_advisor
from portfolio_advisor.domain.errors import PrimaryIndicatorUnavailable
from portfolio_advisor.domain.schemas.market import MarketAnalysisResponse, SignalHistoryResponse
from portfolio_advisor.services.advisor_service import AdvisorService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/analysis", response_model=MarketAnalysisResponse)
async def get_market_analysis(advisor: AdvisorService = Depends(get_advisor)):
    """
    Current market regime, allocation and indicator summary
    """
    try:
        analysis = await advisor.get_analysis()
    except PrimaryIndicatorUnavailable as exc:
        logger.error(f"Market analysis failed: {exc}")
        raise HTTPException(status_code=503, detail=str(exc))
    return analysis.to_dict()


@router.get("/history", response_model=List[SignalHistoryResponse])
async def get_signal_history(
    limit: int = Query(30, ge=1, le=100),
    advisor: AdvisorService = Depends(get_advisor),
):
    rows = await advisor.signal_history(limit)
    return [SignalHistoryResponse.model_validate(row, from_attributes=True) for row in rows]
