"""Tests for scheduler tasks."""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from utils.helpers import now_utc


@pytest.mark.asyncio
async def test_log_cache_stats_does_not_purge(caches, clock):
    caches.tips.set("old", {"tips": []})
    clock.advance(3601)
    caches.tips.set("fresh", {"tips": []})

    from scheduler.tasks import log_cache_stats

    with patch("scheduler.tasks.logger") as mock_logger:
        await log_cache_stats(caches)

    message = mock_logger.info.call_args.args[0]
    assert "tips: 1 valid/1 expired" in message
    assert caches.tips.size() == 2


@pytest.mark.asyncio
async def test_log_cache_stats_survives_errors():
    broken = MagicMock()
    broken.stats.side_effect = RuntimeError("boom")

    from scheduler.tasks import log_cache_stats

    with patch("scheduler.tasks.logger") as mock_logger:
        await log_cache_stats(broken)

    mock_logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_heartbeat_written_and_fresh(tmp_path):
    heartbeat = tmp_path / "logs" / "scheduler_heartbeat"

    with patch("scheduler.tasks.HEARTBEAT_FILE", str(heartbeat)):
        from scheduler.tasks import check_heartbeat, scheduler_heartbeat

        await scheduler_heartbeat()
        assert heartbeat.exists()
        assert check_heartbeat() is False


def test_stale_heartbeat_detected(tmp_path):
    heartbeat = tmp_path / "scheduler_heartbeat"
    heartbeat.write_text((now_utc() - timedelta(hours=2)).isoformat())

    with patch("scheduler.tasks.HEARTBEAT_FILE", str(heartbeat)):
        from scheduler.tasks import check_heartbeat

        assert check_heartbeat() is True


def test_missing_heartbeat_is_not_stale(tmp_path):
    with patch("scheduler.tasks.HEARTBEAT_FILE", str(tmp_path / "nope")):
        from scheduler.tasks import check_heartbeat

        assert check_heartbeat() is False


def test_naive_heartbeat_read_as_utc(tmp_path):
    heartbeat = tmp_path / "scheduler_heartbeat"
    heartbeat.write_text((now_utc() - timedelta(hours=2)).replace(tzinfo=None).isoformat())

    with patch("scheduler.tasks.HEARTBEAT_FILE", str(heartbeat)):
        from scheduler.tasks import check_heartbeat

        assert check_heartbeat() is True
