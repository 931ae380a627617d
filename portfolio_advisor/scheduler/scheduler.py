"""
SCHEDULER BOOTSTRAP

Initializes and manages the APScheduler instance.
Scheduler is orchestration-only and contains no business logic.
"""

import logging
from typing import Tuple

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from portfolio_advisor.config import settings
from portfolio_advisor.scheduler.jobs import (
    run_daily_signal_refresh_job,
    run_monthly_portfolio_refresh_job,
)
from portfolio_advisor.services.advisor_service import AdvisorService

_logger = logging.getLogger(__name__)

_SCHEDULER: AsyncIOScheduler | None = None


def parse_time_of_day(value: str) -> Tuple[int, int]:
    """'HH:MM' -> (hour, minute)"""
    hour, minute = value.strip().split(":", 1)
    hour_i, minute_i = int(hour), int(minute)
    if not (0 <= hour_i < 24 and 0 <= minute_i < 60):
        raise ValueError(f"Invalid time of day: {value}")
    return hour_i, minute_i


def build_scheduler(advisor: AdvisorService, config=settings) -> AsyncIOScheduler:
    """
    Create a scheduler with all jobs registered (not started).
    """
    timezone = pytz.timezone(config.TIMEZONE)
    scheduler = AsyncIOScheduler(timezone=timezone)
    hour, minute = parse_time_of_day(config.DAILY_SIGNAL_REFRESH_TIME)

    # ------------------------------------------------------------
    # DAILY SIGNAL REFRESH
    # Every day @ DAILY_SIGNAL_REFRESH_TIME
    # ------------------------------------------------------------
    scheduler.add_job(
        run_daily_signal_refresh_job,
        trigger=CronTrigger(hour=hour, minute=minute, timezone=timezone),
        args=[advisor],
        id="daily_signal_refresh_job",
        replace_existing=True,
    )

    # ------------------------------------------------------------
    # MONTHLY PORTFOLIO REFRESH
    # MONTHLY_PORTFOLIO_REFRESH_DAY of each month, same time of day
    # ------------------------------------------------------------
    scheduler.add_job(
        run_monthly_portfolio_refresh_job,
        trigger=CronTrigger(day=config.MONTHLY_PORTFOLIO_REFRESH_DAY, hour=hour, minute=minute, timezone=timezone),
        args=[advisor],
        id="monthly_portfolio_refresh_job",
        replace_existing=True,
    )

    return scheduler


def start_scheduler(advisor: AdvisorService) -> AsyncIOScheduler:
    """
    Start the scheduler and register all jobs. Must be called from a running event loop.
    """
    global _SCHEDULER

    if _SCHEDULER is not None:
        return _SCHEDULER

    scheduler = build_scheduler(advisor)
    scheduler.start()
    _SCHEDULER = scheduler

    _logger.info("✅ Scheduler started with all jobs registered")
    return scheduler


def shutdown_scheduler():
    """
    Shutdown the scheduler safely.
    """
    global _SCHEDULER

    if _SCHEDULER:
        _SCHEDULER.shutdown(wait=False)
        _SCHEDULER = None
        _logger.info("🛑 Scheduler shut down")
