"""Base notification channel interface"""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger()


class BaseNotificationChannel(ABC):
    """Abstract base class for alert delivery channels.

    ``send`` never raises: delivery failures are logged and reported
    through the boolean return value only.
    """

    name = "base"

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the channel has everything it needs to deliver"""

    @abstractmethod
    async def _send(self, subject: str, message: str, is_error: bool) -> None:
        """Deliver one alert; raise on failure"""

    async def send(self, subject: str, message: str, is_error: bool = False) -> bool:
        """Deliver an alert, returning True when it was accepted"""
        if not self.is_configured():
            logger.debug("Notification channel not configured", channel=self.name)
            return False

        try:
            await self._send(subject, message, is_error)
        except Exception as e:
            logger.error(
                "Failed to send notification",
                channel=self.name,
                subject=subject,
                error=str(e),
            )
            return False

        logger.info("Notification sent", channel=self.name, subject=subject)
        return True
