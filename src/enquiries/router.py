from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.database import get_db
from src.analytics.context import RequestContext, get_request_context
from src.analytics.recorder import UsageEventRecorder, get_usage_recorder
from src.enquiries.schemas import (
    PlanTripCreate, PlanTripRequest, PlanTripResponse, PlanTripListResponse,
    NewsletterSubscribe, ContactCreate, MessageResponse
)
from src.enquiries.service import EnquiryService
from src.exceptions import DuplicateError, PersistenceError
from src.notifications.service import NotificationDispatcher, get_notification_dispatcher

router = APIRouter()

# Plan My Trip Endpoints
@router.post("/plan-trip", response_model=PlanTripResponse)
def create_trip_request(
    trip: PlanTripCreate,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
    recorder: UsageEventRecorder = Depends(get_usage_recorder)
):
    """File a trip planning request and alert the admin mailbox"""
    try:
        request = EnquiryService.create_trip_request(db, trip)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    response = PlanTripResponse(request=PlanTripRequest.from_orm(request))

    notifier.send_admin_alert("plan_trip", trip.dict())
    recorder.record("plan_trip_request", {"email": trip.email}, context)

    return response

@router.get("/plan-trip", response_model=PlanTripListResponse)
def get_trip_requests(db: Session = Depends(get_db)):
    """Get all trip planning requests"""
    try:
        requests = EnquiryService.get_trip_requests(db)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return PlanTripListResponse(requests=[PlanTripRequest.from_orm(r) for r in requests])

# Newsletter Endpoints
@router.post("/newsletter/subscribe", response_model=MessageResponse)
def subscribe_newsletter(
    subscription: NewsletterSubscribe,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
    recorder: UsageEventRecorder = Depends(get_usage_recorder)
):
    """Subscribe an email address to the newsletter"""
    try:
        EnquiryService.subscribe(db, subscription)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    recorder.record("newsletter_subscribe", {"email": subscription.email}, context)

    return MessageResponse(message="Subscribed successfully")

# Contact Endpoints
@router.post("/contact", response_model=MessageResponse)
def submit_contact_message(
    contact: ContactCreate,
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """Store a contact message and alert the admin mailbox"""
    try:
        EnquiryService.create_contact_message(db, contact)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    notifier.send_admin_alert("contact", contact.dict())

    return MessageResponse(message="Message sent successfully")
