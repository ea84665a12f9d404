from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from src.database import get_db
from src.analytics.context import RequestContext, get_request_context
from src.analytics.recorder import UsageEventRecorder, get_usage_recorder
from src.bookings.booking_service import BookingService
from src.bookings.schemas import (
    BookingCreate, BookingUpdate, BookingOut, BookingCreatedResponse,
    BookingResponse, BookingListResponse
)
from src.exceptions import NotFoundError, PersistenceError
from src.notifications.service import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

# Booking Management Endpoints
@router.post("", response_model=BookingCreatedResponse)
def create_booking(
    request: BookingCreate,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
    recorder: UsageEventRecorder = Depends(get_usage_recorder)
):
    """Create a booking and send its confirmation email"""

    booking_service = BookingService(db, notifier=notifier, recorder=recorder)

    try:
        booking = booking_service.create_booking(request, context)
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return BookingCreatedResponse(booking=booking)

@router.get("", response_model=BookingListResponse)
def list_bookings(
    booking_status: Optional[str] = Query(None, alias="status", description="Filter by booking status"),
    booking_type: Optional[str] = Query(None, description="Filter by booking type"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum results"),
    db: Session = Depends(get_db)
):
    """List bookings, newest first"""

    booking_service = BookingService(db)

    try:
        bookings = booking_service.get_bookings(
            status=booking_status,
            booking_type=booking_type,
            limit=limit
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return BookingListResponse(bookings=[BookingOut.from_orm(b) for b in bookings])

@router.get("/{booking_reference}", response_model=BookingResponse)
def get_booking_by_reference(
    booking_reference: str,
    db: Session = Depends(get_db)
):
    """Get booking by reference number"""

    booking_service = BookingService(db)

    try:
        booking = booking_service.get_booking_by_reference(booking_reference)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return BookingResponse(booking=BookingOut.from_orm(booking))

@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: int,
    update_data: BookingUpdate,
    db: Session = Depends(get_db)
):
    """Update status, payment and trip details of a booking"""

    booking_service = BookingService(db)

    try:
        booking = booking_service.update_booking(booking_id, update_data)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )

    return BookingResponse(booking=BookingOut.from_orm(booking))
