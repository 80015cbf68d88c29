"""
Directory sync debounce decision.

The triggering layer stores the last-run timestamp (per organization) and
passes it in; nothing is kept in process.
"""

from datetime import datetime, timedelta
from typing import Optional

from crm_access.core.config import get_settings


def default_sync_interval() -> timedelta:
    """Sync spacing configured by `SYNC_INTERVAL_HOURS`."""
    return timedelta(hours=get_settings().sync_interval_hours)


def is_sync_due(
    last_run_at: Optional[datetime],
    now: datetime,
    interval: Optional[timedelta] = None,
) -> bool:
    """
    Decide whether a directory sync should run.

    Args:
        last_run_at: When the last sync started, or None if it never ran
        now: Current time (same timezone awareness as last_run_at)
        interval: Minimum spacing between syncs; defaults to settings

    Returns:
        True if a sync has never run or the interval has elapsed
    """
    if last_run_at is None:
        return True
    if interval is None:
        interval = default_sync_interval()
    return now - last_run_at >= interval
