import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.analytics.context import RequestContext
from src.analytics.recorder import UsageEventRecorder
from src.bookings.reference import generate_booking_reference, is_booking_reference
from src.bookings.schemas import BookingCreate, BookingOut, BookingStatus, BookingUpdate
from src.config import settings
from src.exceptions import NotFoundError, PersistenceError
from src.models import Booking
from src.notifications.service import NotificationDispatcher

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND = "Booking not found"


class BookingService:
    """Service for creating and querying tour, vehicle and shuttle bookings"""

    def __init__(
        self,
        db: Session,
        notifier: Optional[NotificationDispatcher] = None,
        recorder: Optional[UsageEventRecorder] = None,
        max_reference_attempts: Optional[int] = None
    ):
        self.db = db
        self.notifier = notifier
        self.recorder = recorder
        self.max_reference_attempts = max(1, max_reference_attempts or settings.BOOKING_REFERENCE_MAX_ATTEMPTS)

    def create_booking(self, request: BookingCreate, context: RequestContext) -> BookingOut:
        """Create a booking, then send its confirmation and record the event.

        Only the insert decides the outcome: a store failure raises
        PersistenceError, while notification and event recording are
        best-effort and never undo a stored booking. The returned snapshot
        is taken inside the insert transaction, so nothing after the commit
        reads the row back.
        """
        booking = self._insert_with_unique_reference(request, context)
        logger.info("Booking %s created (%s)", booking.booking_reference, booking.booking_type)

        if self.notifier is not None:
            sent = self.notifier.send_booking_confirmation(booking)
            if not sent:
                logger.warning("Confirmation email for %s was not sent", booking.booking_reference)

        if self.recorder is not None:
            self.recorder.record("booking_created", {
                "booking_reference": booking.booking_reference,
                "booking_type": booking.booking_type,
                "total_amount": booking.total_amount
            }, context)

        return booking

    def get_bookings(
        self,
        status: Optional[str] = None,
        booking_type: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Booking]:
        """List bookings, newest first"""
        query = self.db.query(Booking)

        if status:
            query = query.filter(Booking.status == status)

        if booking_type:
            query = query.filter(Booking.booking_type == booking_type)

        query = query.order_by(Booking.created_at.desc(), Booking.id.desc())

        if limit:
            query = query.limit(limit)

        try:
            return query.all()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

    def get_booking_by_reference(self, booking_reference: str) -> Booking:
        """Get booking by reference number"""
        if not is_booking_reference(booking_reference):
            raise NotFoundError(BOOKING_NOT_FOUND)

        try:
            booking = self.db.query(Booking).filter(
                Booking.booking_reference == booking_reference
            ).first()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

        if not booking:
            raise NotFoundError(BOOKING_NOT_FOUND)

        return booking

    def update_booking(self, booking_id: int, update_data: BookingUpdate) -> Booking:
        """Apply externally-driven changes (status, payment, trip details)"""
        try:
            booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

        if not booking:
            raise NotFoundError(BOOKING_NOT_FOUND)

        changes = update_data.dict(exclude_unset=True)
        for field, value in changes.items():
            if isinstance(value, BookingStatus):
                value = value.value
            setattr(booking, field, value)

        try:
            self.db.commit()
            self.db.refresh(booking)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(str(e), cause=e) from e

        return booking

    def _build_booking(self, request: BookingCreate, context: RequestContext, reference: str) -> Booking:
        data = request.dict()
        data["booking_type"] = request.booking_type.value
        return Booking(
            **data,
            booking_reference=reference,
            status=BookingStatus.PENDING.value,
            ip_address=context.user_ip,
            user_agent=context.user_agent
        )

    def _insert_with_unique_reference(self, request: BookingCreate, context: RequestContext) -> BookingOut:
        for attempt in range(1, self.max_reference_attempts + 1):
            reference = generate_booking_reference()
            booking = self._build_booking(request, context, reference)
            try:
                self.db.add(booking)
                self.db.flush()
                snapshot = BookingOut.from_orm(booking)
                self.db.commit()
                return snapshot
            except IntegrityError as e:
                self.db.rollback()
                if not self._reference_exists(reference):
                    raise PersistenceError(str(e.orig), cause=e) from e
                logger.warning(
                    "Booking reference collision on %s (attempt %d/%d)",
                    reference, attempt, self.max_reference_attempts
                )
            except SQLAlchemyError as e:
                self.db.rollback()
                raise PersistenceError(str(e), cause=e) from e

        raise PersistenceError(
            f"Could not allocate a unique booking reference after {self.max_reference_attempts} attempts"
        )

    def _reference_exists(self, reference: str) -> bool:
        try:
            return self.db.query(Booking.id).filter(Booking.booking_reference == reference).first() is not None
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e
