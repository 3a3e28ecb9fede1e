"""Celery application configuration"""

from celery import Celery
from celery.schedules import crontab

from app.config import settings

# Create Celery app
celery_app = Celery(
    "xndoughs",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "app.jobs.tasks",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    # Crontab hours are read on the worker host's local clock, as in the in-process scheduler
    enable_utc=False,
    task_track_started=True,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Same cadence as the in-process scheduler; run one or the other
    beat_schedule={
        "monitor-database-health": {
            "task": "monitor_database_health",
            "schedule": 4 * 60 * 60.0,
        },
        "cleanup-old-reservations": {
            "task": "cleanup_old_reservations",
            "schedule": crontab(hour=settings.cleanup_hour, minute=0),
        },
        "archive-old-reservations": {
            "task": "archive_old_reservations",
            "schedule": crontab(hour=settings.archive_hour, minute=0, day_of_week=0),
        },
    },
)
