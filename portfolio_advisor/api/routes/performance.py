"""
Performance routes
"""

import logging

from fastapi import APIRouter, Depends

from portfolio_advisor.api.dependencies import get_advisor
from portfolio_advisor.domain.schemas.performance import PerformanceResponse
from portfolio_advisor.services.advisor_service import AdvisorService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=PerformanceResponse)
async def get_performance(advisor: AdvisorService = Depends(get_advisor)):
    """
    Monthly returns, drawdowns and summary statistics for both sleeves
    """
    performances = advisor.get_performance()
    return {p.type.value: p.to_dict() for p in performances}
