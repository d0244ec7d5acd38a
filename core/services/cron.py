"""Scheduled maintenance hook."""

from core.log import get_logger
from core.periodic_task import PeriodicTask
from core.storage import KVStore

from .activity_log import ActivityLog

logger = get_logger(__name__)


class ScheduledHookTask(PeriodicTask):
    """Hourly hook: records that it ran and purges expired store entries."""

    name = "scheduled-hook"

    def __init__(self, store: KVStore | None, activity: ActivityLog) -> None:
        self.store = store
        self.activity = activity

    async def execute(self) -> None:
        await self.activity.log("cron", "Scheduled task executed")
        await self.activity.increment("cron_runs")
        if self.store is not None:
            purged = await self.store.purge_expired()
            if purged:
                logger.info(f"Purged {purged} expired entries")
