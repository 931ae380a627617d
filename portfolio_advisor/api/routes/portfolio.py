"""
Portfolio routes - current recommendations and last saved selections
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_advisor.api.dependencies import get_advisor
from portfolio_advisor.domain.errors import PrimaryIndicatorUnavailable
from portfolio_advisor.domain.schemas.portfolio import (
    LatestPortfoliosResponse,
    PortfolioRecommendationsResponse,
    SavedPortfolioSchema,
)
from portfolio_advisor.services.advisor_service import AdvisorService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/recommendations", response_model=PortfolioRecommendationsResponse)
async def get_recommendations(
    diversification_count: Optional[int] = Query(None, ge=1, le=50),
    advisor: AdvisorService = Depends(get_advisor),
):
    """
    Aggressive and defensive selections for the current regime.
    The holding count is clamped to 3..10.
    """
    try:
        recommendations = await advisor.get_portfolio_recommendations(diversification_count)
    except PrimaryIndicatorUnavailable as exc:
        logger.error(f"Portfolio recommendations failed: {exc}")
        raise HTTPException(status_code=503, detail=str(exc))
    return recommendations.to_dict()


@router.get("/latest", response_model=LatestPortfoliosResponse)
async def get_latest(advisor: AdvisorService = Depends(get_advisor)):
    latest = await advisor.latest_portfolios()
    return {
        sleeve: SavedPortfolioSchema.model_validate(row, from_attributes=True) if row else None
        for sleeve, row in latest.items()
    }
