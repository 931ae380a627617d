import logging
from datetime import datetime, timezone

import pytest

from portfolio_advisor.domain.models import RefreshScope, RefreshSummary, Regime
from portfolio_advisor.services.history_service import HistoryRecorder


def _summary(success=True):
    return RefreshSummary(
        scope=RefreshScope.SIGNALS,
        success=success,
        duration_ms=12,
        completed_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        regime=Regime.NEUTRAL,
    )


class _BrokenSession:
    async def __aenter__(self):
        raise ConnectionError("database unavailable")

    async def __aexit__(self, *exc):
        return False


@pytest.mark.asyncio
async def test_writes_are_background_tasks(history):
    history.save_update_history(_summary())
    assert history.pending == 1

    await history.drain()

    assert history.pending == 0
    rows = await history.update_history()
    assert len(rows) == 1
    assert rows[0].regime.value == "neutral"
    assert rows[0].duration_ms == 12


@pytest.mark.asyncio
async def test_failed_write_is_logged_not_raised(caplog):
    recorder = HistoryRecorder(lambda: _BrokenSession())

    with caplog.at_level(logging.ERROR):
        recorder.save_update_history(_summary(success=False))
        await recorder.drain()

    assert "Failed to save signals update history" in caplog.text


@pytest.mark.asyncio
async def test_disabled_recorder_writes_nothing(session_factory):
    recorder = HistoryRecorder(session_factory, enabled=False)

    recorder.save_update_history(_summary())

    assert recorder.pending == 0
    assert await recorder.update_history() == []
