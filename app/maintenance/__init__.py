"""Database maintenance: retention, capacity monitoring and scheduling"""

from app.maintenance.results import Notification, TaskResult
from app.maintenance.service import DatabaseMaintenance
from app.maintenance.scheduler import MaintenanceScheduler

__all__ = [
    "Notification",
    "TaskResult",
    "DatabaseMaintenance",
    "MaintenanceScheduler",
]
