"""Time utilities (UTC)."""

import calendar
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """
    Current time in UTC, returned as naive datetime for DB storage.
    """
    return utc_now().replace(tzinfo=None)


def month_end(year: int, month: int) -> date:
    """Last calendar day of the given month."""
    return date(year, month, calendar.monthrange(year, month)[1])


def previous_month_ends(today: date, months: int) -> list[date]:
    """
    Month-end dates of the `months` calendar months before `today`,
    newest first.
    """
    results: list[date] = []
    year, month = today.year, today.month
    for _ in range(months):
        month -= 1
        if month == 0:
            year -= 1
            month = 12
        results.append(month_end(year, month))
    return results
