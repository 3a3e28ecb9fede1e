"""Discord webhook alerts"""

from datetime import datetime, timezone

import httpx

from app.config import settings
from app.notifications.channels.base import BaseNotificationChannel

ERROR_COLOR = 15158332  # red
INFO_COLOR = 3066993  # green


def build_embed_payload(title: str, message: str, is_error: bool = False) -> dict:
    """Webhook body carrying a single embed"""
    return {
        "embeds": [
            {
                "title": title,
                "description": message,
                "color": ERROR_COLOR if is_error else INFO_COLOR,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ]
    }


class DiscordWebhookChannel(BaseNotificationChannel):
    """Posts alerts as embeds to a Discord webhook"""

    name = "discord"

    def __init__(self, webhook_url: str = None, timeout: float = 10.0):
        self.webhook_url = webhook_url if webhook_url is not None else settings.discord_webhook_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    async def _send(self, subject: str, message: str, is_error: bool) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.webhook_url,
                json=build_embed_payload(subject, message, is_error),
            )
            response.raise_for_status()
