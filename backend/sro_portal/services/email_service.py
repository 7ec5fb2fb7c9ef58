"""Outgoing email over SMTP.

Notifications about appointments are delivered in the background after the
response is sent; a failed delivery is logged and never fails the request
that triggered it. ``POST /api/send-email`` sends directly and reports
failures to the caller.
"""
import logging
import re
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Iterable, Optional

import aiosmtplib

from sro_portal.config import settings

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"<[^>]*>")


class EmailDeliveryError(Exception):
    pass


@dataclass(frozen=True)
class Notification:
    to: str
    subject: str
    html: str
    text: Optional[str] = None


def strip_tags(html: str) -> str:
    return TAG_RE.sub("", html)


class EmailService:
    def __init__(
        self,
        host: str = settings.SMTP_HOST,
        port: int = settings.SMTP_PORT,
        user: str = settings.SMTP_USER,
        password: str = settings.SMTP_PASSWORD,
        from_email: str = settings.EMAIL_FROM,
        from_name: str = settings.EMAIL_FROM_NAME,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_email = from_email or user
        self.from_name = from_name

    @property
    def is_configured(self) -> bool:
        return bool(self.user and self.password)

    def build_message(self, notification: Notification) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = notification.to
        message["Subject"] = notification.subject
        message["Message-ID"] = make_msgid()
        message.attach(MIMEText(notification.text or strip_tags(notification.html), "plain"))
        message.attach(MIMEText(notification.html, "html"))
        return message

    async def send(self, notification: Notification) -> str:
        """Send one email and return its Message-ID."""
        if not self.is_configured:
            raise EmailDeliveryError("Email service not configured")
        message = self.build_message(notification)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.user,
                password=self.password,
                start_tls=True,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(str(exc)) from exc
        logger.info("Sent email to %s: %s", notification.to, notification.subject)
        return message["Message-ID"]

    async def deliver(self, notifications: Iterable[Notification]) -> int:
        """Best-effort delivery; returns how many were sent."""
        notifications = [n for n in notifications if n.to]
        if not notifications:
            return 0
        if not self.is_configured:
            logger.warning("Email service not configured, skipping %d notification(s)", len(notifications))
            return 0
        sent = 0
        for notification in notifications:
            try:
                await self.send(notification)
                sent += 1
            except EmailDeliveryError as exc:
                logger.error("Failed to send email to %s: %s", notification.to, exc)
        return sent


email_service = EmailService()


def get_email_service() -> EmailService:
    return email_service
