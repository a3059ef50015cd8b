"""
Background scheduler service for periodic tasks.

This service runs background tasks on a schedule within the FastAPI application,
eliminating the need for external cron jobs.
"""

import asyncio
from typing import Optional

from app.services.guest_pool import GuestPoolService, guest_pool_service
from app.utils import logger
from app.utils.constants import GUEST_SWEEP_INTERVAL_SECONDS
from app.utils.sentry_utils import capture_exception


class SchedulerService:
    """
    Background scheduler that runs periodic tasks.

    Currently handles:
    - Guest maintenance: expire old guest accounts, then refill the guest pool

    The first tick fires immediately on start, then every ``sweep_interval``
    seconds whether or not the previous sweep has finished. A tick that finds a
    sweep still running is skipped. Stopping cancels the timer but lets an
    in-flight sweep run to completion.
    """

    def __init__(
        self,
        guest_pool: Optional[GuestPoolService] = None,
        sweep_interval: float = GUEST_SWEEP_INTERVAL_SECONDS,
    ):
        self.guest_pool = guest_pool or guest_pool_service
        self.sweep_interval = sweep_interval
        self._task: Optional[asyncio.Task] = None
        self._sweep_task: Optional[asyncio.Task] = None
        self._running = False
        self.tick_count = 0
        self.skipped_ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background scheduler."""
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._run_scheduler())
        logger.info(
            f"Background scheduler started (sweep_interval={self.sweep_interval}s)"
        )

    async def stop(self):
        """Stop the background scheduler, waiting for an in-flight sweep."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._sweep_task and not self._sweep_task.done():
            logger.info("Waiting for in-flight guest maintenance to finish...")
            await asyncio.gather(self._sweep_task, return_exceptions=True)
        self._sweep_task = None
        logger.info("Background scheduler stopped")

    async def _run_scheduler(self):
        """Main scheduler loop."""
        while self._running:
            self._tick()

            # Wait for next tick
            try:
                await asyncio.sleep(self.sweep_interval)
            except asyncio.CancelledError:
                break

    def _tick(self):
        """Launch a guest maintenance sweep unless one is still running."""
        self.tick_count += 1

        if self._sweep_task and not self._sweep_task.done():
            self.skipped_ticks += 1
            logger.debug("Scheduler: guest maintenance still running, skipping tick")
            return

        # Separate task so cancelling the timer never interrupts a sweep
        self._sweep_task = asyncio.create_task(self._run_guest_maintenance())

    async def _run_guest_maintenance(self):
        try:
            ran = await self.guest_pool.run_maintenance_sweep_once()
            if ran:
                logger.debug("Scheduler: guest maintenance sweep finished")
        except Exception as e:
            logger.error(f"Scheduler error in guest maintenance: {e}", exc_info=True)
            capture_exception(e)


# Global scheduler instance
scheduler_service = SchedulerService()
