"""
Data Update History Repository
Audit log of manual and scheduled refreshes
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_advisor.domain.models import RefreshSummary
from portfolio_advisor.infrastructure.db.models import DataUpdateHistoryModel, RegimeEnum, UpdateTypeEnum


class UpdateHistoryRepository:
    """Repository for data update history"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, summary: RefreshSummary) -> int:
        model = DataUpdateHistoryModel(
            update_type=UpdateTypeEnum(summary.scope.value),
            success=summary.success,
            used_fallback=summary.used_fallback,
            fallback_count=summary.fallback_count or None,
            fallback_reason=summary.fallback_reason,
            regime=RegimeEnum(summary.regime.value) if summary.regime else None,
            holdings_count=summary.holdings_count,
            source=summary.source,
            duration_ms=summary.duration_ms,
            error_message=summary.error_message,
            created_at=summary.completed_at.replace(tzinfo=None),
        )
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def get_recent(self, limit: int = 20) -> List[DataUpdateHistoryModel]:
        result = await self.session.execute(
            select(DataUpdateHistoryModel)
            .order_by(DataUpdateHistoryModel.created_at.desc(), DataUpdateHistoryModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
