"""
Booking Module

Booking creation and lookup for ANGONI Adventure packages, vehicles and
shuttles.

Key Components:
- reference.py: human-readable booking references (ANG-<year>-<NNNN>)
- booking_service.py: create, list, fetch and update bookings
- router.py: FastAPI endpoints under /api/bookings
- schemas.py: Pydantic models for booking requests and responses

Creating a booking persists it with the caller's IP address and user agent,
then sends a confirmation email and records a ``booking_created`` usage
event. Both side effects are best-effort; only the insert decides whether
the request succeeds.
"""

from .router import router
from .booking_service import BookingService
from .reference import generate_booking_reference, is_booking_reference
from .schemas import (
    BookingType, BookingStatus, BookingCreate, BookingUpdate, BookingOut
)

__all__ = [
    "router",
    "BookingService",
    "generate_booking_reference",
    "is_booking_reference",
    "BookingType",
    "BookingStatus",
    "BookingCreate",
    "BookingUpdate",
    "BookingOut"
]
