"""In-process scheduler for database maintenance"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

import structlog

from app.maintenance.service import DatabaseMaintenance

logger = structlog.get_logger()

HEALTH_CHECK_INTERVAL = 4 * 60 * 60
POLL_INTERVAL = 60
SUNDAY = 0


def sunday_first_weekday(moment: datetime) -> int:
    """Day of week with Sunday as 0"""
    return (moment.weekday() + 1) % 7


def is_cleanup_due(moment: datetime, hour: int) -> bool:
    return moment.hour == hour and moment.minute == 0


def is_archive_due(moment: datetime, hour: int) -> bool:
    return sunday_first_weekday(moment) == SUNDAY and moment.hour == hour and moment.minute == 0


class MaintenanceScheduler:
    """
    Owns the recurring maintenance timers.

    - health check every ``health_interval`` seconds, plus once at start
    - daily cleanup when the local clock reads ``cleanup_hour``:00
    - weekly archiving on Sunday at ``archive_hour``:00

    The daily and weekly jobs poll the clock every ``poll_interval``
    seconds. There is no record of the last run, so a restart inside the
    trigger minute can run a job twice.
    """

    def __init__(
        self,
        maintenance: DatabaseMaintenance,
        cleanup_hour: int = 3,
        archive_hour: int = 4,
        health_interval: float = HEALTH_CHECK_INTERVAL,
        poll_interval: float = POLL_INTERVAL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.maintenance = maintenance
        self.cleanup_hour = cleanup_hour
        self.archive_hour = archive_hour
        self.health_interval = health_interval
        self.poll_interval = poll_interval
        self.clock = clock or datetime.now
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def start(self) -> None:
        """Start the timers; must be called from a running event loop"""
        if self._tasks:
            return

        self._tasks = [
            asyncio.create_task(
                self._run_job("health_check", self.maintenance.monitor_health),
                name="maintenance-initial-health-check",
            ),
            asyncio.create_task(
                self._every(self.health_interval, "health_check", self.maintenance.monitor_health),
                name="maintenance-health-check",
            ),
            asyncio.create_task(
                self._poll(
                    lambda now: is_cleanup_due(now, self.cleanup_hour),
                    "cleanup",
                    self.maintenance.cleanup_old_reservations,
                ),
                name="maintenance-cleanup",
            ),
            asyncio.create_task(
                self._poll(
                    lambda now: is_archive_due(now, self.archive_hour),
                    "archive",
                    self.maintenance.archive_reservations,
                ),
                name="maintenance-archive",
            ),
        ]
        logger.info(
            "Database maintenance tasks scheduled",
            cleanup_hour=self.cleanup_hour,
            archive_hour=self.archive_hour,
        )

    async def stop(self) -> None:
        """Cancel every timer and wait for them to finish"""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if tasks:
            logger.info("Database maintenance tasks stopped")

    async def _run_job(self, name: str, job: Callable[[], Awaitable]) -> None:
        try:
            await job()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Maintenance job failed", job=name, error=str(e))

    async def _every(self, interval: float, name: str, job: Callable[[], Awaitable]) -> None:
        while True:
            await asyncio.sleep(interval)
            await self._run_job(name, job)

    async def _poll(
        self,
        is_due: Callable[[datetime], bool],
        name: str,
        job: Callable[[], Awaitable],
    ) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            if is_due(self.clock()):
                logger.info("Running scheduled maintenance", job=name)
                await self._run_job(name, job)
