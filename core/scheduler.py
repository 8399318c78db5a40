import logging
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from datetime import datetime

from features.display.services.display_service import DisplayService
from core.cache import SUMMARY_CACHE_NAMESPACE, clear_cache
from core.config import settings

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "display_refresh"

class Scheduler:
    def __init__(self, display_service: DisplayService):
        self.scheduler = AsyncIOScheduler()
        self.display_service = display_service

    async def _refresh_display(self):
        """Regenerate the display, keeping the previous image on failure."""
        try:
            await self.display_service.refresh()
        except Exception as e:
            logger.error(f"Scheduled display refresh failed: {str(e)}")
            return
        await clear_cache(namespace=SUMMARY_CACHE_NAMESPACE)

    def start(self):
        """Start the scheduler with configured jobs."""
        logger.info("Starting scheduler")

        # Regenerate the display image at the configured interval
        self.scheduler.add_job(
            self._refresh_display,
            IntervalTrigger(minutes=settings.refresh_minutes),
            id=REFRESH_JOB_ID,
            name='display_refresh',
            max_instances=1,
            next_run_time=datetime.now()
        )

        self.scheduler.start()
        logger.info(f"Scheduler started, refreshing every {settings.refresh_minutes} minutes")

    def get_next_run_time(self, job_id: str = REFRESH_JOB_ID) -> Optional[str]:
        """Get the next run time for a scheduled job."""
        job = self.scheduler.get_job(job_id)
        if job and job.next_run_time:
            return job.next_run_time.isoformat()
        return None

    def shutdown(self):
        """Shutdown the scheduler."""
        if self.scheduler.running:
            logger.info("Shutting down scheduler")
            self.scheduler.shutdown()
            logger.info("Scheduler shutdown complete")
