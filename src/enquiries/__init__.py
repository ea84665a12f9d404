"""
Enquiries Module

Customer enquiries that are not bookings: plan-my-trip requests, newsletter
subscriptions and contact messages. Trip requests and contact messages
alert the admin mailbox on a best-effort basis.
"""

from .router import router
from .service import EnquiryService

__all__ = ["router", "EnquiryService"]
