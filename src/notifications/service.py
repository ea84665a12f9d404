import logging
from typing import Any, Mapping, Optional

from fastapi import Depends

from src.config import settings
from src.exceptions import NotificationError
from src.notifications.mailer import SMTPMailer, get_mailer
from src.notifications import template_service

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Formats and sends transactional emails.

    Sending is best-effort: a single attempt per call, and a failed send is
    logged and reported as ``False`` (or nothing) instead of raising.
    """

    def __init__(self, mailer: SMTPMailer, admin_email: Optional[str] = None):
        self.mailer = mailer
        self.admin_email = admin_email if admin_email is not None else settings.ADMIN_EMAIL

    def send_booking_confirmation(self, booking: Any) -> bool:
        """Email the booking confirmation to the lead contact"""
        try:
            self.mailer.send(
                to=booking.lead_email,
                subject=template_service.booking_confirmation_subject(booking),
                html=template_service.render_booking_confirmation(booking)
            )
        except NotificationError as e:
            logger.error("Email error for booking %s: %s", booking.booking_reference, e.message)
            return False
        except Exception:
            logger.exception("Unexpected email error for booking %s", booking.booking_reference)
            return False
        return True

    def send_admin_alert(self, kind: str, payload: Mapping[str, Any]) -> None:
        """Notify the admin mailbox about a new enquiry of the given kind"""
        if kind not in template_service.ADMIN_ALERTS:
            logger.error("Unknown admin alert kind: %s", kind)
            return
        if not self.admin_email:
            logger.warning("ADMIN_EMAIL is not set, skipping %s alert", kind)
            return

        try:
            self.mailer.send(
                to=self.admin_email,
                subject=template_service.admin_alert_subject(kind, payload),
                html=template_service.render_admin_alert(kind, payload)
            )
        except NotificationError as e:
            logger.error("Admin alert %s failed: %s", kind, e.message)
        except Exception:
            logger.exception("Unexpected error sending admin alert %s", kind)


def get_notification_dispatcher(mailer: SMTPMailer = Depends(get_mailer)) -> NotificationDispatcher:
    return NotificationDispatcher(mailer)
