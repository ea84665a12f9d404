import random
import re
from datetime import datetime, timezone
from typing import Optional

from src.config import settings

REFERENCE_PATTERN = re.compile(r"^[A-Z]+-\d{4}-\d{4}$")

_system_random = random.SystemRandom()


def generate_booking_reference(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    prefix: Optional[str] = None
) -> str:
    """Generate a human-readable booking reference, e.g. ``ANG-2025-0042``.

    The suffix is a uniform draw over 0..9999, so references are not unique
    on their own; the bookings table carries a unique index and the booking
    service regenerates on collision.
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or _system_random
    prefix = prefix or settings.BOOKING_REFERENCE_PREFIX
    number = rng.randint(0, 9999)
    return f"{prefix}-{now.year:04d}-{number:04d}"


def is_booking_reference(value: str) -> bool:
    return bool(value) and REFERENCE_PATTERN.fullmatch(value) is not None
