"""Background maintenance tasks for the Celery worker"""

import asyncio
import structlog
from pymongo import AsyncMongoClient

from app.jobs.celery_app import celery_app
from app.config import settings

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


async def _with_maintenance(operation):
    """Run ``operation`` with a maintenance service on a task-scoped client.

    Each task gets its own event loop, so the client cannot be shared
    between task runs.
    """
    from app.maintenance import DatabaseMaintenance
    from app.models.reservation import ReservationStore
    from app.notifications import get_notification_manager

    client = AsyncMongoClient(settings.mongodb_uri)
    try:
        maintenance = DatabaseMaintenance(
            ReservationStore(client[settings.mongodb_db_name]),
            get_notification_manager(),
        )
        return await operation(maintenance)
    finally:
        await client.close()


@celery_app.task(name="monitor_database_health")
def monitor_database_health():
    """Check storage usage and alert on crossed thresholds"""
    logger.info("Monitoring database health")

    async def _monitor(maintenance):
        report = await maintenance.monitor_health()
        return report.model_dump(by_alias=True) if report else None

    return run_async(_with_maintenance(_monitor))


@celery_app.task(name="cleanup_old_reservations")
def cleanup_old_reservations():
    """Delete expired completed and abandoned pending reservations"""
    logger.info("Cleaning up old reservations")

    async def _cleanup(maintenance):
        result = await maintenance.cleanup_old_reservations()
        return result.count

    return run_async(_with_maintenance(_cleanup))


@celery_app.task(name="archive_old_reservations")
def archive_old_reservations():
    """Move reservations older than 60 days to the archive collection"""
    logger.info("Archiving old reservations")

    async def _archive(maintenance):
        result = await maintenance.archive_reservations()
        return result.count

    return run_async(_with_maintenance(_archive))
