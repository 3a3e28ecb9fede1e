"""Database maintenance operations with alerting"""

from datetime import datetime
from typing import Optional

import structlog

from app.maintenance import capacity, retention
from app.maintenance.results import Notification, TaskResult
from app.models.reservation import ReservationStore
from app.notifications.manager import NotificationManager
from app.schemas.maintenance import CapacityStats, HealthReport

logger = structlog.get_logger()


class DatabaseMaintenance:
    """
    Runs retention and capacity checks against the store and delivers
    the alerts they produce. No method raises.
    """

    def __init__(self, store: ReservationStore, notifier: NotificationManager):
        self.store = store
        self.notifier = notifier

    async def _deliver(self, notification: Optional[Notification]) -> None:
        if notification is not None:
            await self.notifier.notify(
                notification.subject,
                notification.message,
                notification.is_error,
            )

    async def cleanup_old_reservations(self, now: Optional[datetime] = None) -> TaskResult:
        result = await retention.cleanup_old_reservations(self.store, now)
        await self._deliver(result.notification)
        return result

    async def archive_reservations(self, now: Optional[datetime] = None) -> TaskResult:
        result = await retention.archive_reservations(self.store, now)
        await self._deliver(result.notification)
        return result

    async def get_stats(self) -> Optional[CapacityStats]:
        return await capacity.get_stats(self.store)

    async def monitor_health(self) -> Optional[HealthReport]:
        """
        Check storage usage and alert on the highest threshold crossed.
        Above the emergency threshold, cleanup and archiving run before returning.
        """
        try:
            stats = await self.get_stats()
            if stats is None:
                return None

            alerts = capacity.classify_usage(stats.storage_used)
            logger.info(
                "Database health checked",
                storage_mb=stats.storage_mb,
                usage_percentage=stats.usage_percentage,
                **alerts.model_dump(),
            )

            await self._deliver(capacity.capacity_notification(stats, alerts))
            if alerts.emergency:
                await self.cleanup_old_reservations()
                await self.archive_reservations()

            return HealthReport(**stats.model_dump(), alerts=alerts)
        except Exception as e:
            logger.error("Error monitoring database health", error=str(e))
            await self._deliver(Notification(
                "Monitoring Error",
                f"Error during health monitoring: {e}",
                is_error=True,
            ))
            return None
