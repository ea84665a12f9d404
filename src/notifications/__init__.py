"""
Notifications Module

Transactional email for the ANGONI Adventure API:

- mailer.py: SMTP relay client (one connection, one attempt per message)
- template_service.py: Jinja2 rendering of the HTML templates in templates/
- service.py: NotificationDispatcher, the best-effort sender used by routers
"""

from .mailer import SMTPMailer, get_mailer
from .service import NotificationDispatcher, get_notification_dispatcher

__all__ = [
    "SMTPMailer",
    "get_mailer",
    "NotificationDispatcher",
    "get_notification_dispatcher"
]
