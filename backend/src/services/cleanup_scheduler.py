"""
Nightly database cleanup scheduler.

Runs the database cleanup in fix mode once a day so orphaned group
memberships, favorites, comments, permissions and secrets do not pile up
between manual runs.
"""

import asyncio
import logging
from typing import Optional
from datetime import timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore
from apscheduler.triggers.cron import CronTrigger  # type: ignore

from core.config import CLEANUP_SCHEDULE_HOUR
from core.constants import CLEANUP_MISFIRE_GRACE_SECONDS, CLEANUP_SCHEDULER_JOB_ID
from core.database import get_db_context
from services.cleanup_registry import CleanupRegistry
from services.cleanup_service import CleanupRunner, get_cleanup_locator, get_cleanup_registry
from services.cleanup_tables import CleanupTableLocator

logger = logging.getLogger(__name__)

# Global singleton instance
_cleanup_scheduler: Optional['CleanupScheduler'] = None


class CleanupScheduler:
    """
    Scheduler for the nightly database cleanup.

    Each run builds its own runner on a fresh database session to avoid
    stale session issues.
    """

    def __init__(
        self,
        registry: Optional[CleanupRegistry] = None,
        locator: Optional[CleanupTableLocator] = None,
        hour: int = CLEANUP_SCHEDULE_HOUR,
    ):
        self.registry = registry if registry is not None else CleanupRegistry()
        self.locator = locator
        self.hour = hour
        self.scheduler = AsyncIOScheduler(timezone=timezone.utc)
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    async def start_scheduler(self) -> None:
        """
        Start the background scheduler.

        This should be called during application startup.
        """
        if self._is_started:
            logger.warning("Cleanup scheduler is already started")
            return

        self.scheduler.add_job(  # type: ignore
            self._run_cleanup,
            CronTrigger(hour=self.hour, minute=0),
            id=CLEANUP_SCHEDULER_JOB_ID,
            name="Database cleanup (fix mode)",
            max_instances=1,  # Prevent overlapping runs
            replace_existing=True,
            misfire_grace_time=CLEANUP_MISFIRE_GRACE_SECONDS,
        )

        self.scheduler.start()
        self._is_started = True
        logger.info(f"Cleanup scheduler started (runs daily at {self.hour:02d}:00 UTC)")

    async def stop_scheduler(self) -> None:
        """
        Stop the background scheduler.

        This should be called during application shutdown.
        """
        if self._is_started:
            self.scheduler.shutdown(wait=True)
            self._is_started = False
            logger.info("Cleanup scheduler stopped")

    async def _run_cleanup(self) -> None:
        """Run the cleanup off the event loop so the API stays responsive."""
        logger.info("Starting scheduled database cleanup...")
        await asyncio.to_thread(self._execute_cleanup_logic)

    def _execute_cleanup_logic(self) -> None:
        """Execute the cleanup synchronously on a fresh session."""
        try:
            with get_db_context() as db:
                result = CleanupRunner(db, registry=self.registry, locator=self.locator).run(dry_run=False)
            for line in result.messages():
                logger.info(line)
        except Exception as e:
            # Don't re-raise - the scheduler must keep running
            logger.exception(f"Error during scheduled cleanup: {e}")


def get_cleanup_scheduler() -> CleanupScheduler:
    """
    Get the global cleanup scheduler instance.

    Returns:
        CleanupScheduler: The global scheduler instance
    """
    global _cleanup_scheduler
    if _cleanup_scheduler is None:
        _cleanup_scheduler = CleanupScheduler(
            registry=get_cleanup_registry(),
            locator=get_cleanup_locator(),
        )
    return _cleanup_scheduler


async def start_cleanup_scheduler() -> None:
    """Start the global cleanup scheduler."""
    scheduler = get_cleanup_scheduler()
    await scheduler.start_scheduler()


async def stop_cleanup_scheduler() -> None:
    """Stop the global cleanup scheduler."""
    global _cleanup_scheduler
    if _cleanup_scheduler:
        await _cleanup_scheduler.stop_scheduler()
