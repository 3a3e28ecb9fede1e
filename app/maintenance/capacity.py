"""Storage usage against the 512 MB free-tier quota"""

from typing import Any, Dict, Optional

import structlog

from app.maintenance.results import Notification
from app.models.reservation import ReservationStore
from app.schemas.maintenance import CapacityAlerts, CapacityStats

logger = structlog.get_logger()

BYTES_PER_MB = 1024 * 1024
STORAGE_QUOTA_MB = 512

WARNING_THRESHOLD_MB = 350  # about 68% of the quota
CRITICAL_THRESHOLD_MB = 400  # about 78%
EMERGENCY_THRESHOLD_MB = 450  # about 88%


def stats_from_db_stats(raw: Dict[str, Any]) -> CapacityStats:
    """Convert ``dbStats`` byte counters to a megabyte snapshot"""
    storage_mb = raw.get("storageSize", 0) / BYTES_PER_MB
    return CapacityStats(
        size_mb=f"{raw.get('dataSize', 0) / BYTES_PER_MB:.2f}",
        storage_mb=f"{storage_mb:.2f}",
        index_size_mb=f"{raw.get('indexSize', 0) / BYTES_PER_MB:.2f}",
        free_storage_mb=f"{STORAGE_QUOTA_MB - storage_mb:.2f}",
        usage_percentage=f"{storage_mb / STORAGE_QUOTA_MB * 100:.1f}",
    )


async def get_stats(store: ReservationStore) -> Optional[CapacityStats]:
    """Current storage snapshot, or None when the server can't be read"""
    try:
        raw = await store.db_stats()
    except Exception as e:
        logger.error("Error getting database stats", error=str(e))
        return None
    return stats_from_db_stats(raw)


def classify_usage(storage_mb: float) -> CapacityAlerts:
    return CapacityAlerts(
        warning=storage_mb > WARNING_THRESHOLD_MB,
        critical=storage_mb > CRITICAL_THRESHOLD_MB,
        emergency=storage_mb > EMERGENCY_THRESHOLD_MB,
    )


def usage_report(stats: CapacityStats) -> str:
    return (
        "Database Storage Alert\n"
        "\n"
        f"Current Usage: {stats.storage_mb}MB of {STORAGE_QUOTA_MB}MB\n"
        f"Usage Percentage: {stats.usage_percentage}%\n"
        f"Free Space: {stats.free_storage_mb}MB\n"
        f"Index Size: {stats.index_size_mb}MB\n"
        "\n"
        "Automatic Cleanup:\n"
        "- Daily cleanup of reservations older than 30 days\n"
        "- Weekly archiving of data older than 60 days\n"
        "- Immediate cleanup of abandoned pending reservations (24h+)\n"
    )


def capacity_notification(stats: CapacityStats, alerts: CapacityAlerts) -> Optional[Notification]:
    """Alert for the highest threshold crossed, if any"""
    report = usage_report(stats)
    if alerts.emergency:
        return Notification(
            "EMERGENCY: Database Near Capacity",
            f"{report}\nURGENT: Database is nearing free tier limit. Emergency cleanup initiated.",
            is_error=True,
        )
    if alerts.critical:
        return Notification(
            "CRITICAL: High Database Usage",
            f"{report}\nAction Required: Please review and clean up unnecessary data.",
            is_error=True,
        )
    if alerts.warning:
        return Notification(
            "WARNING: Database Usage Alert",
            f"{report}\nConsider cleaning up old data to prevent reaching limits.",
            is_error=False,
        )
    return None
