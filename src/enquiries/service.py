from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List

from src.exceptions import DuplicateError, PersistenceError
from src.models import PlanMyTripRequest, NewsletterSubscriber, ContactMessage
from src.enquiries.schemas import PlanTripCreate, NewsletterSubscribe, ContactCreate

ALREADY_SUBSCRIBED = "Email already subscribed"

class EnquiryService:
    @staticmethod
    def create_trip_request(db: Session, trip: PlanTripCreate) -> PlanMyTripRequest:
        """Store a plan-my-trip request"""
        return EnquiryService._insert(db, PlanMyTripRequest(**trip.dict()))

    @staticmethod
    def get_trip_requests(db: Session) -> List[PlanMyTripRequest]:
        """Get all trip requests, newest first"""
        try:
            return db.query(PlanMyTripRequest).order_by(
                PlanMyTripRequest.created_at.desc(), PlanMyTripRequest.id.desc()
            ).all()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

    @staticmethod
    def subscribe(db: Session, subscription: NewsletterSubscribe) -> NewsletterSubscriber:
        """Add a newsletter subscriber; a known email raises DuplicateError"""
        subscriber = NewsletterSubscriber(email=subscription.email.lower())
        try:
            db.add(subscriber)
            db.commit()
            db.refresh(subscriber)
        except IntegrityError as e:
            db.rollback()
            raise DuplicateError(ALREADY_SUBSCRIBED, cause=e) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e), cause=e) from e
        return subscriber

    @staticmethod
    def create_contact_message(db: Session, contact: ContactCreate) -> ContactMessage:
        """Store a contact form message"""
        return EnquiryService._insert(db, ContactMessage(**contact.dict()))

    @staticmethod
    def _insert(db: Session, record):
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e), cause=e) from e
        return record
