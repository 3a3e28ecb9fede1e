"""Pydantic schemas for request/response validation"""

from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    MessageResponse,
    DeleteOldResponse,
)
from app.schemas.maintenance import (
    CapacityStats,
    CapacityAlerts,
    HealthReport,
)

__all__ = [
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "MessageResponse",
    "DeleteOldResponse",
    "CapacityStats",
    "CapacityAlerts",
    "HealthReport",
]
