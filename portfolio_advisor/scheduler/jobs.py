"""
SCHEDULER JOB DEFINITIONS

Jobs are thin wrappers that:
- Log execution
- Call AdvisorService.refresh with source="scheduled"

NO business logic is allowed here. The refresh itself records success or
failure in update history.
"""

import logging

from portfolio_advisor.domain.models import RefreshScope
from portfolio_advisor.services.advisor_service import AdvisorService

_logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# DAILY SIGNAL REFRESH
# -------------------------------------------------------------------

async def run_daily_signal_refresh_job(advisor: AdvisorService):
    _logger.info("📅 Running daily signal refresh job")
    try:
        summary = await advisor.refresh(RefreshScope.SIGNALS, source="scheduled")
        regime = summary.regime.value if summary.regime else "unknown"
        _logger.info(f"✅ Daily signal refresh done: regime={regime}")
    except Exception:
        _logger.exception("❌ Daily signal refresh job failed")


# -------------------------------------------------------------------
# MONTHLY PORTFOLIO REFRESH
# -------------------------------------------------------------------

async def run_monthly_portfolio_refresh_job(advisor: AdvisorService):
    _logger.info("📅 Running monthly portfolio refresh job")
    try:
        summary = await advisor.refresh(RefreshScope.PORTFOLIO, source="scheduled")
        _logger.info(
            f"✅ Monthly portfolio refresh done: {summary.holdings_count} holdings, "
            f"fallback={summary.used_fallback}"
        )
    except Exception:
        _logger.exception("❌ Monthly portfolio refresh job failed")
