"""
Admin routes - forced refresh, cache diagnostics, update history
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_advisor.api.dependencies import get_advisor
from portfolio_advisor.domain.errors import PrimaryIndicatorUnavailable
from portfolio_advisor.domain.models import RefreshScope
from portfolio_advisor.domain.schemas.admin import CacheStatsResponse, RefreshResponse, UpdateHistoryResponse
from portfolio_advisor.services.advisor_service import AdvisorService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/refresh/{scope}", response_model=RefreshResponse)
async def refresh(scope: RefreshScope, advisor: AdvisorService = Depends(get_advisor)):
    """
    Invalidate cached data for `scope` (signals, portfolio, all) and recompute
    """
    try:
        summary = await advisor.refresh(scope)
    except PrimaryIndicatorUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return summary.to_dict()


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(advisor: AdvisorService = Depends(get_advisor)):
    return advisor.cache_stats().to_dict()


@router.get("/update-history", response_model=List[UpdateHistoryResponse])
async def update_history(
    limit: int = Query(20, ge=1, le=100),
    advisor: AdvisorService = Depends(get_advisor),
):
    rows = await advisor.update_history(limit)
    return [UpdateHistoryResponse.model_validate(row, from_attributes=True) for row in rows]
