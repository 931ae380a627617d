"""
Signal History Repository
Regime decisions recorded over time
"""

from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_advisor.domain.models import Allocation, RegimeDecision
from portfolio_advisor.infrastructure.db.models import RegimeEnum, SignalHistoryModel


class SignalHistoryRepository:
    """Repository for signal history snapshots"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, decision: RegimeDecision, allocation: Allocation, timestamp: datetime) -> int:
        model = SignalHistoryModel(
            date=timestamp.replace(tzinfo=None),
            regime=RegimeEnum(decision.regime.value),
            confidence=decision.confidence_percent,
            bull_count=decision.bull_active_count,
            bear_count=decision.bear_active_count,
            bull_signals=[s.to_dict() for s in decision.bull_signals],
            bear_signals=[s.to_dict() for s in decision.bear_signals],
            allocation=allocation.to_dict(),
        )
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def get_recent(self, limit: int = 30) -> List[SignalHistoryModel]:
        result = await self.session.execute(
            select(SignalHistoryModel)
            .order_by(SignalHistoryModel.date.desc(), SignalHistoryModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
