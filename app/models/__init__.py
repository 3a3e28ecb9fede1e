"""Database models"""

from app.models.reservation import (
    ReservationStore,
    RESERVATIONS_COLLECTION,
    ARCHIVE_COLLECTION,
)

__all__ = [
    "ReservationStore",
    "RESERVATIONS_COLLECTION",
    "ARCHIVE_COLLECTION",
]
