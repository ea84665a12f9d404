import logging
import smtplib
from email.message import EmailMessage
from functools import lru_cache
from typing import Optional

from src.config import settings
from src.exceptions import NotificationError

logger = logging.getLogger(__name__)


class SMTPMailer:
    """Submits single messages to the configured SMTP relay.

    One connection per message; no retry. Any transport failure is raised
    as NotificationError for the dispatcher to swallow.
    """

    def __init__(
        self,
        host: Optional[str],
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        use_ssl: bool = True,
        timeout: float = 10.0
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_ssl = use_ssl
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender)

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        if not self.is_configured:
            raise NotificationError("Mail relay is not configured")
        if not to:
            raise NotificationError("Missing recipient address")

        try:
            message = self.build_message(to, subject, html)
        except ValueError as e:
            raise NotificationError(f"Invalid message headers: {e}", cause=e) from e

        try:
            if self.use_ssl:
                client = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with client:
                if not self.use_ssl:
                    client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery to {to} failed: {e}", cause=e) from e

        logger.debug("Sent '%s' to %s", subject, to)


@lru_cache()
def get_mailer() -> SMTPMailer:
    """Process-wide mailer built once from settings"""
    return SMTPMailer(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASS,
        sender=settings.mail_from,
        use_ssl=settings.SMTP_USE_SSL,
        timeout=settings.SMTP_TIMEOUT
    )
