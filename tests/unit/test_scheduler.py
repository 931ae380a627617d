from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from portfolio_advisor.domain.models import RefreshScope
from portfolio_advisor.scheduler.jobs import run_daily_signal_refresh_job, run_monthly_portfolio_refresh_job
from portfolio_advisor.scheduler.scheduler import build_scheduler, parse_time_of_day

CONFIG = SimpleNamespace(
    TIMEZONE="Asia/Tokyo",
    DAILY_SIGNAL_REFRESH_TIME="07:30",
    MONTHLY_PORTFOLIO_REFRESH_DAY=1,
)


def test_parse_time_of_day():
    assert parse_time_of_day("07:30") == (7, 30)
    assert parse_time_of_day(" 23:05 ") == (23, 5)
    for bad in ("24:00", "7", "aa:bb", "12:60"):
        with pytest.raises(ValueError):
            parse_time_of_day(bad)


def test_build_scheduler_registers_jobs():
    scheduler = build_scheduler(advisor=object(), config=CONFIG)

    jobs = {job.id: job for job in scheduler.get_jobs()}
    assert set(jobs) == {"daily_signal_refresh_job", "monthly_portfolio_refresh_job"}
    assert str(scheduler.timezone) == "Asia/Tokyo"

    daily = {f.name: str(f) for f in jobs["daily_signal_refresh_job"].trigger.fields}
    assert daily["hour"] == "7"
    assert daily["minute"] == "30"
    monthly = {f.name: str(f) for f in jobs["monthly_portfolio_refresh_job"].trigger.fields}
    assert monthly["day"] == "1"


@pytest.mark.asyncio
async def test_jobs_refresh_with_scheduled_source():
    advisor = SimpleNamespace(refresh=AsyncMock())

    await run_daily_signal_refresh_job(advisor)
    await run_monthly_portfolio_refresh_job(advisor)

    advisor.refresh.assert_any_await(RefreshScope.SIGNALS, source="scheduled")
    advisor.refresh.assert_any_await(RefreshScope.PORTFOLIO, source="scheduled")


@pytest.mark.asyncio
async def test_job_failure_is_contained():
    advisor = SimpleNamespace(refresh=AsyncMock(side_effect=RuntimeError("boom")))

    await run_daily_signal_refresh_job(advisor)

    advisor.refresh.assert_awaited_once()
