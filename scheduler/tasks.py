"""Scheduler jobs: cache statistics and heartbeat."""

import os
from datetime import datetime, timedelta

from utils.cache import CacheRegistry
from utils.helpers import UTC, now_utc
from utils.logger import logger

HEARTBEAT_FILE = "logs/scheduler_heartbeat"
HEARTBEAT_STALE_AFTER = timedelta(minutes=60)


async def log_cache_stats(caches: CacheRegistry) -> None:
    """
    Log entry counts per advice cache.

    Read-only: expired entries are counted, not purged. They are dropped
    lazily on the next lookup or evicted by newer entries.
    """
    try:
        stats = caches.stats()
        summary = ", ".join(
            f"{category}: {s['valid']} valid/{s['expired']} expired"
            for category, s in stats.items()
        )
        logger.info(f"Cache stats: {summary}")
    except Exception as e:
        logger.error(f"Error in log_cache_stats: {e}", exc_info=True)


async def scheduler_heartbeat() -> None:
    """
    Write the current timestamp for liveness monitoring.

    Runs every 30 minutes; checked by check_heartbeat() on startup.
    """
    try:
        os.makedirs(os.path.dirname(HEARTBEAT_FILE), exist_ok=True)
        with open(HEARTBEAT_FILE, "w") as f:
            f.write(now_utc().isoformat())
        logger.debug("Scheduler heartbeat written")
    except Exception as e:
        logger.error(f"Error writing scheduler heartbeat: {e}")


def check_heartbeat() -> bool:
    """Warn if the last heartbeat is older than an hour. Returns True when stale."""
    if not os.path.exists(HEARTBEAT_FILE):
        return False

    try:
        with open(HEARTBEAT_FILE, "r") as f:
            last_beat = datetime.fromisoformat(f.read().strip())
    except (OSError, ValueError) as e:
        logger.error(f"Error reading heartbeat file: {e}")
        return False

    if last_beat.tzinfo is None:
        last_beat = last_beat.replace(tzinfo=UTC)

    if now_utc() - last_beat > HEARTBEAT_STALE_AFTER:
        logger.warning(
            f"Scheduler was stale! Last heartbeat: {last_beat.isoformat()}. "
            f"Possible scheduler outage detected."
        )
        return True
    return False
