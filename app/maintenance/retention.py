"""Age-based cleanup and archival of reservations.

Three rules apply, all with a strict ``createdAt < cutoff`` comparison:

- confirmed and cancelled reservations are deleted after 30 days;
- pending reservations are treated as abandoned and deleted after 24 hours;
- any reservation older than 60 days is copied to the archive collection
  and removed from ``reservations``.

The archive copy and the delete are two separate writes. A crash in
between leaves the record in both collections.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import structlog

from app.database import utcnow
from app.maintenance.results import Notification, TaskResult
from app.models.reservation import RESERVATIONS_COLLECTION, ReservationStore

logger = structlog.get_logger()

COMPLETED_RETENTION = timedelta(days=30)
PENDING_RETENTION = timedelta(hours=24)
ARCHIVE_AFTER = timedelta(days=60)

COMPLETED_STATUSES = ("confirmed", "cancelled")
PENDING_STATUSES = ("pending",)

ARCHIVE_REASON = "age"


async def delete_expired_completed(store: ReservationStore, now: Optional[datetime] = None) -> int:
    """Delete confirmed/cancelled reservations past the 30-day window"""
    now = now or utcnow()
    return await store.delete_created_before(now - COMPLETED_RETENTION, COMPLETED_STATUSES)


async def cleanup_old_reservations(store: ReservationStore, now: Optional[datetime] = None) -> TaskResult:
    """Apply both deletion rules; store errors become a failure result"""
    now = now or utcnow()
    try:
        completed = await delete_expired_completed(store, now)
        abandoned = await store.delete_created_before(now - PENDING_RETENTION, PENDING_STATUSES)
    except Exception as e:
        logger.error("Error during cleanup", error=str(e))
        return TaskResult(
            count=0,
            error=str(e),
            notification=Notification(
                "Cleanup Failed",
                f"Error during cleanup: {e}",
                is_error=True,
            ),
        )

    total = completed + abandoned
    logger.info("Cleanup finished", completed=completed, abandoned=abandoned)

    notification = None
    if total > 0:
        notification = Notification(
            "Cleanup Completed",
            f"Cleaned up {completed} old reservations and {abandoned} "
            f"abandoned pending reservations.",
        )
    return TaskResult(count=total, notification=notification)


def build_archive_documents(documents: List[Dict[str, Any]], archived_at: datetime) -> List[Dict[str, Any]]:
    """Copy reservations with archive provenance fields added"""
    return [
        {
            **document,
            "archivedAt": archived_at,
            "archiveReason": ARCHIVE_REASON,
            "originalCollection": RESERVATIONS_COLLECTION,
        }
        for document in documents
    ]


async def archive_reservations(store: ReservationStore, now: Optional[datetime] = None) -> TaskResult:
    """Move reservations older than 60 days into the archive collection"""
    now = now or utcnow()
    try:
        documents = await store.find_created_before(now - ARCHIVE_AFTER)
        if not documents:
            return TaskResult(count=0)

        inserted = await store.insert_archives(build_archive_documents(documents, now))
        if inserted < len(documents):
            logger.warning("Archive copies already present", skipped=len(documents) - inserted)
        await store.delete_ids([document["_id"] for document in documents])
    except Exception as e:
        logger.error("Error during archiving", error=str(e))
        return TaskResult(
            count=0,
            error=str(e),
            notification=Notification(
                "Archiving Failed",
                f"Error during archiving: {e}",
                is_error=True,
            ),
        )

    logger.info("Archiving finished", archived=len(documents))
    return TaskResult(
        count=len(documents),
        notification=Notification(
            "Archiving Completed",
            f"Archived {len(documents)} old reservations successfully.",
        ),
    )
