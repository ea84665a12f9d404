from typing import List, Optional
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import func, distinct
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.admin.schemas import DashboardStats
from src.exceptions import PersistenceError
from src.models import AnalyticsEvent, Booking, Vehicle

PAID = "paid"
AVAILABLE = "available"
DEFAULT_WINDOW_DAYS = 30

def round_currency(amount) -> int:
    """Round to the nearest whole unit, halves away from zero"""
    if amount is None:
        return 0
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

class AggregationService:
    """Read-only admin metrics derived from bookings, vehicles and usage events"""

    def __init__(self, db: Session):
        self.db = db

    def compute_dashboard_stats(self) -> DashboardStats:
        """Compute the admin dashboard snapshot.

        Revenue and distinct customers are aggregated by the store, so no
        booking rows are transferred.
        """
        try:
            total_bookings = self.db.query(func.count(Booking.id)).scalar() or 0

            total_revenue = self.db.query(func.sum(Booking.total_amount)).filter(
                Booking.payment_status == PAID
            ).scalar()

            total_customers = self.db.query(func.count(distinct(Booking.lead_email))).scalar() or 0

            active_vehicles = self.db.query(func.count(Vehicle.id)).filter(
                Vehicle.status == AVAILABLE
            ).scalar() or 0
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

        return DashboardStats(
            totalBookings=total_bookings,
            totalRevenue=round_currency(total_revenue),
            totalCustomers=total_customers,
            activeVehicles=active_vehicles
        )

    def compute_analytics(
        self,
        event_type: Optional[str] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
        now: Optional[datetime] = None
    ) -> List[AnalyticsEvent]:
        """Replay usage events from the last ``window_days`` days, newest first.

        The window start is inclusive.
        """
        now = now or datetime.now(timezone.utc)
        from_date = now - timedelta(days=window_days)

        query = self.db.query(AnalyticsEvent).filter(AnalyticsEvent.created_at >= from_date)

        if event_type:
            query = query.filter(AnalyticsEvent.event_type == event_type)

        query = query.order_by(AnalyticsEvent.created_at.desc(), AnalyticsEvent.id.desc())

        try:
            return query.all()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e
