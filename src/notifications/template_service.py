"""
Email template rendering for transactional and admin notifications.

Templates live in ``templates/`` next to this module and are rendered by a
Jinja2 environment with autoescaping on; booking and enquiry fields are
caller-supplied.
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from jinja2 import Environment, FileSystemLoader

BRAND_NAME = "ANGONI Adventure"
BRAND_TAGLINE = "Luxury Made Affordable"
CONTACT_PHONE = "+255 784 282 123"
CONTACT_EMAIL = "info@angoniadventure.com"

TEMPLATE_DIR = Path(__file__).parent / "templates"


def currency(value: Union[Decimal, float, int, None]) -> str:
    """Format an amount as dollars"""
    if value is None:
        return ""
    return f"${Decimal(str(value)):,.2f}"


env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["currency"] = currency


def get_common_context() -> Dict[str, Any]:
    return {
        "brand_name": BRAND_NAME,
        "brand_tagline": BRAND_TAGLINE,
        "contact_phone": CONTACT_PHONE,
        "contact_email": CONTACT_EMAIL,
        "current_year": datetime.now().year,
    }


def render_template(template_name: str, **context: Any) -> str:
    full_context = get_common_context()
    full_context.update(context)
    return env.get_template(template_name).render(**full_context)


def booking_confirmation_subject(booking: Any) -> str:
    return f"Booking Confirmation - {booking.booking_reference}"


def render_booking_confirmation(booking: Any) -> str:
    """Render the customer-facing confirmation email for a persisted booking"""
    return render_template("booking_confirmation.html", booking=booking)


# kind -> (subject, heading, [(label, payload key), ...])
ADMIN_ALERTS: Dict[str, Tuple[str, str, List[Tuple[str, str]]]] = {
    "plan_trip": (
        "New Plan My Trip Request",
        "New Trip Planning Request",
        [
            ("Name", "full_name"),
            ("Email", "email"),
            ("Phone", "phone"),
            ("Destination", "destination"),
            ("Start date", "start_date"),
            ("End date", "end_date"),
            ("Travelers", "travelers"),
            ("Budget", "budget"),
            ("Message", "message"),
        ],
    ),
    "contact": (
        "New Contact Message: {subject}",
        "New Contact Message",
        [
            ("Name", "name"),
            ("Email", "email"),
            ("Phone", "phone"),
            ("Subject", "subject"),
            ("Message", "message"),
        ],
    ),
}


def admin_alert_subject(kind: str, payload: Mapping[str, Any]) -> str:
    template = ADMIN_ALERTS[kind][0]
    # Plain-text header: collapse whitespace so no line breaks reach it
    subject = " ".join(str(payload.get("subject") or "").split())
    return template.format(subject=subject)


def render_admin_alert(kind: str, payload: Mapping[str, Any]) -> str:
    """Render an admin alert listing the known fields of ``payload``"""
    _, heading, fields = ADMIN_ALERTS[kind]
    rows = [(label, payload.get(key)) for label, key in fields]
    return render_template("admin_alert.html", heading=heading, rows=rows)
