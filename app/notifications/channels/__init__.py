"""Notification channel implementations"""

from app.notifications.channels.base import BaseNotificationChannel
from app.notifications.channels.email import EmailChannel
from app.notifications.channels.discord import DiscordWebhookChannel

__all__ = [
    "BaseNotificationChannel",
    "EmailChannel",
    "DiscordWebhookChannel",
]
