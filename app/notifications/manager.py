"""Alert fan-out to every notification channel"""

import asyncio
from typing import Optional

import structlog

from app.notifications.channels.base import BaseNotificationChannel
from app.notifications.channels.email import EmailChannel
from app.notifications.channels.discord import DiscordWebhookChannel

logger = structlog.get_logger()


class NotificationManager:
    """
    Sends each alert to email and Discord concurrently.
    Delivery failures are logged by the channels and never reach the caller.
    """

    def __init__(
        self,
        email_channel: Optional[BaseNotificationChannel] = None,
        discord_channel: Optional[BaseNotificationChannel] = None,
    ):
        self.email_channel = email_channel or EmailChannel()
        self.discord_channel = discord_channel or DiscordWebhookChannel()

    async def send_email(self, subject: str, message: str) -> bool:
        return await self.email_channel.send(subject, message)

    async def send_discord_webhook(self, title: str, message: str, is_error: bool = False) -> bool:
        return await self.discord_channel.send(title, message, is_error)

    async def notify(self, subject: str, message: str, is_error: bool = False) -> None:
        """Dispatch to both channels and wait for both to finish"""
        results = await asyncio.gather(
            self.send_email(subject, message),
            self.send_discord_webhook(subject, message, is_error),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("Notification dispatch failed", subject=subject, error=str(result))


def get_notification_manager() -> NotificationManager:
    """Factory function to create a notification manager from settings"""
    return NotificationManager()
