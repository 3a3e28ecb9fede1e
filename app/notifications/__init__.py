"""Administrative alerting"""

from app.notifications.manager import NotificationManager, get_notification_manager

__all__ = ["NotificationManager", "get_notification_manager"]
