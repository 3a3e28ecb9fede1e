"""Email alerts over an SMTP relay"""

import asyncio
import html
import smtplib
import ssl
from email.message import EmailMessage

import structlog

from app.config import settings
from app.notifications.channels.base import BaseNotificationChannel

logger = structlog.get_logger()

SUBJECT_PREFIX = "XNDoughs Alert:"


def render_alert_html(subject: str, message: str) -> str:
    """Branded HTML body for an alert email"""
    body = html.escape(message.strip()).replace("\n", "<br>")
    return f"""
<div style="font-family: Arial, sans-serif; padding: 20px;">
  <h2 style="color: #e11d48;">XNDoughs Database Alert</h2>
  <div style="background-color: #f3f4f6; padding: 15px; border-radius: 5px;">
    <p><strong>{html.escape(subject)}</strong></p>
    <p>{body}</p>
  </div>
  <p style="color: #6b7280; font-size: 0.875rem; margin-top: 20px;">
    This is an automated message from your XNDoughs Database Management System
  </p>
</div>
"""


class EmailChannel(BaseNotificationChannel):
    """Sends alerts to the administrative address"""

    name = "email"

    def __init__(
        self,
        username: str = None,
        password: str = None,
        recipient: str = None,
        host: str = None,
        port: int = None,
        timeout: float = 30.0,
    ):
        self.username = username if username is not None else settings.email_user
        self.password = password if password is not None else settings.email_password
        self.recipient = recipient if recipient is not None else settings.admin_email
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.timeout = timeout

    def is_configured(self) -> bool:
        if not (self.username and self.password and self.recipient):
            logger.warning("Skipping alert email: email credentials or admin address not set")
            return False
        return True

    def build_message(self, subject: str, message: str) -> EmailMessage:
        email = EmailMessage()
        email["Subject"] = f"{SUBJECT_PREFIX} {subject}"
        email["From"] = self.username
        email["To"] = self.recipient
        email.set_content(f"{subject}\n\n{message.strip()}")
        email.add_alternative(render_alert_html(subject, message), subtype="html")
        return email

    async def _send(self, subject: str, message: str, is_error: bool) -> None:
        email = self.build_message(subject, message)
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._send_smtp, email)

    def _send_smtp(self, email: EmailMessage) -> None:
        context = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls(context=context)
            server.login(self.username, self.password)
            server.send_message(email)
