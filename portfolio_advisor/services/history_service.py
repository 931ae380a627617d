"""
History recorder.

Writes regime snapshots, portfolio selections and refresh outcomes in the
background. A failed write is logged and never reaches the caller.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Dict, List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_advisor.domain.models import (
    Allocation,
    PortfolioSelection,
    RefreshSummary,
    RegimeDecision,
)
from portfolio_advisor.infrastructure.db.models import (
    DataUpdateHistoryModel,
    PortfolioRecommendationModel,
    SignalHistoryModel,
)
from portfolio_advisor.infrastructure.db.repositories.portfolio_recommendation_repository import (
    PortfolioRecommendationRepository,
)
from portfolio_advisor.infrastructure.db.repositories.signal_history_repository import SignalHistoryRepository
from portfolio_advisor.infrastructure.db.repositories.update_history_repository import UpdateHistoryRepository

logger = logging.getLogger(__name__)


class HistoryRecorder:
    def __init__(self, session_factory: async_sessionmaker, enabled: bool = True):
        self._session_factory = session_factory
        self.enabled = enabled
        self._pending: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # FIRE-AND-FORGET WRITES
    # ------------------------------------------------------------------

    def save_signal_snapshot(self, decision: RegimeDecision, allocation: Allocation, timestamp: datetime) -> None:
        self._submit(
            "signal snapshot",
            lambda session: SignalHistoryRepository(session).create(decision, allocation, timestamp),
        )

    def save_portfolio_selection(self, selection: PortfolioSelection) -> None:
        self._submit(
            f"{selection.type.value} portfolio",
            lambda session: PortfolioRecommendationRepository(session).create(selection),
        )

    def save_update_history(self, summary: RefreshSummary) -> None:
        self._submit(
            f"{summary.scope.value} update history",
            lambda session: UpdateHistoryRepository(session).create(summary),
        )

    def _submit(self, label: str, write: Callable[[AsyncSession], Awaitable[int]]) -> None:
        if not self.enabled:
            return
        task = asyncio.create_task(self._write(label, write))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, label: str, write: Callable[[AsyncSession], Awaitable[int]]) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await write(session)
        except Exception:
            logger.exception(f"Failed to save {label}")

    async def drain(self) -> None:
        """Wait for every pending write (used on shutdown and in tests)"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------
    # READS
    # ------------------------------------------------------------------

    async def signal_history(self, limit: int = 30) -> List[SignalHistoryModel]:
        async with self._session_factory() as session:
            return await SignalHistoryRepository(session).get_recent(limit)

    async def latest_portfolios(self) -> Dict[str, Optional[PortfolioRecommendationModel]]:
        async with self._session_factory() as session:
            return await PortfolioRecommendationRepository(session).get_latest()

    async def update_history(self, limit: int = 20) -> List[DataUpdateHistoryModel]:
        async with self._session_factory() as session:
            return await UpdateHistoryRepository(session).get_recent(limit)
