"""
Portfolio Recommendation Repository
Selected holdings per sleeve, newest last
"""

from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_advisor.domain.models import PortfolioSelection
from portfolio_advisor.infrastructure.db.models import (
    PortfolioRecommendationModel,
    RegimeEnum,
    SleeveTypeEnum,
)


class PortfolioRecommendationRepository:
    """Repository for portfolio recommendations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, selection: PortfolioSelection) -> int:
        model = PortfolioRecommendationModel(
            date=selection.calculated_at.replace(tzinfo=None),
            type=SleeveTypeEnum(selection.type.value),
            regime=RegimeEnum(selection.regime.value) if selection.regime else None,
            holdings=[h.to_dict() for h in selection.holdings],
            total_holdings=selection.total_holdings,
            using_fallback=selection.using_fallback,
        )
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def get_latest_for_type(self, sleeve: SleeveTypeEnum) -> Optional[PortfolioRecommendationModel]:
        result = await self.session.execute(
            select(PortfolioRecommendationModel)
            .where(PortfolioRecommendationModel.type == sleeve)
            .order_by(PortfolioRecommendationModel.date.desc(), PortfolioRecommendationModel.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def get_latest(self) -> Dict[str, Optional[PortfolioRecommendationModel]]:
        """Most recent recommendation for each sleeve"""
        return {
            sleeve.value: await self.get_latest_for_type(sleeve)
            for sleeve in SleeveTypeEnum
        }
