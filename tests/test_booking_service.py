from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.analytics.context import RequestContext
from src.analytics.recorder import UsageEventRecorder
from src.bookings import booking_service as booking_service_module
from src.bookings.booking_service import BookingService
from src.bookings.schemas import BookingCreate, BookingUpdate
from src.exceptions import NotFoundError, PersistenceError
from src.models import AnalyticsEvent, Booking

CONTEXT = RequestContext(
    page_url="https://angoniadventure.com/book",
    user_ip="198.51.100.7",
    user_agent="Mozilla/5.0 (X11; Linux x86_64)",
    session_id="sess-1",
)


def _request(**overrides):
    data = dict(
        booking_type="vehicle",
        lead_first_name="Juma",
        lead_last_name="Kweka",
        lead_email="juma@example.com",
        total_amount=Decimal("480.00"),
    )
    data.update(overrides)
    return BookingCreate(**data)


def _references(monkeypatch, *values):
    sequence = iter(values)
    monkeypatch.setattr(booking_service_module, "generate_booking_reference", lambda: next(sequence))


def test_create_booking_persists_with_provenance(db_session, dispatcher, mailer):
    service = BookingService(db_session, notifier=dispatcher, recorder=UsageEventRecorder(db_session))

    booking = service.create_booking(_request(), CONTEXT)

    stored = db_session.query(Booking).filter(Booking.id == booking.id).one()
    assert stored.booking_reference == booking.booking_reference
    assert stored.ip_address == "198.51.100.7"
    assert stored.user_agent == "Mozilla/5.0 (X11; Linux x86_64)"
    assert stored.status == "pending"
    assert stored.payment_status == "pending"
    assert stored.total_amount == Decimal("480.00")
    assert mailer.sent[0]["to"] == "juma@example.com"


def test_caller_cannot_supply_provenance_or_reference(db_session):
    request = BookingCreate(
        booking_type="shuttle",
        lead_first_name="Juma",
        lead_last_name="Kweka",
        lead_email="juma@example.com",
        total_amount="30",
        ip_address="10.0.0.1",
        user_agent="spoofed",
        booking_reference="ANG-1999-0000",
        status="confirmed",
    )

    booking = BookingService(db_session).create_booking(request, CONTEXT)

    assert booking.ip_address == "198.51.100.7"
    assert booking.user_agent == "Mozilla/5.0 (X11; Linux x86_64)"
    assert booking.booking_reference != "ANG-1999-0000"
    assert booking.status == "pending"


def test_create_booking_records_usage_event(db_session):
    service = BookingService(db_session, recorder=UsageEventRecorder(db_session))

    booking = service.create_booking(_request(), CONTEXT)

    event = db_session.query(AnalyticsEvent).one()
    assert event.event_type == "booking_created"
    assert event.event_data == {
        "booking_reference": booking.booking_reference,
        "booking_type": "vehicle",
        "total_amount": 480,
    }
    assert event.user_ip == "198.51.100.7"
    assert event.session_id == "sess-1"


def test_notification_failure_keeps_booking(db_session, dispatcher, mailer):
    mailer.fail = True
    service = BookingService(db_session, notifier=dispatcher, recorder=UsageEventRecorder(db_session))

    booking = service.create_booking(_request(), CONTEXT)

    assert booking.id is not None
    assert db_session.query(Booking).count() == 1
    assert db_session.query(AnalyticsEvent).count() == 1


def test_recording_failure_keeps_booking(db_session, dispatcher):
    broken = MagicMock()
    broken.commit.side_effect = OperationalError("INSERT INTO analytics", {}, Exception("down"))
    service = BookingService(db_session, notifier=dispatcher, recorder=UsageEventRecorder(broken))

    booking = service.create_booking(_request(), CONTEXT)

    assert db_session.query(Booking).filter(Booking.id == booking.id).count() == 1


def test_event_write_failure_on_shared_session_keeps_booking(db_session, dispatcher, store_outage):
    service = BookingService(db_session, notifier=dispatcher, recorder=UsageEventRecorder(db_session))
    store_outage.from_statement("INSERT INTO analytics")

    booking = service.create_booking(_request(), CONTEXT)

    assert booking.id is not None
    assert booking.ip_address == "198.51.100.7"
    assert booking.created_at is not None

    store_outage.restore()
    assert db_session.query(Booking).filter(Booking.id == booking.id).count() == 1
    assert db_session.query(AnalyticsEvent).count() == 0


def test_read_failure_after_commit_is_not_an_insert_failure(db_session, store_outage):
    service = BookingService(db_session, recorder=UsageEventRecorder(db_session))
    store_outage.after_next_commit()

    booking = service.create_booking(_request(), CONTEXT)

    assert booking.booking_reference.startswith("ANG-")
    assert booking.total_amount == Decimal("480.00")

    store_outage.restore()
    assert db_session.query(Booking).one().booking_reference == booking.booking_reference


def test_store_failure_raises_persistence_error_and_skips_side_effects():
    db = MagicMock()
    db.flush.side_effect = OperationalError("INSERT INTO bookings", {}, Exception("connection reset"))
    notifier = MagicMock()
    recorder = MagicMock()

    with pytest.raises(PersistenceError):
        BookingService(db, notifier=notifier, recorder=recorder).create_booking(_request(), CONTEXT)

    db.rollback.assert_called_once()
    notifier.send_booking_confirmation.assert_not_called()
    recorder.record.assert_not_called()


def test_reference_collision_regenerates(db_session, monkeypatch):
    _references(monkeypatch, "ANG-2026-0001", "ANG-2026-0001", "ANG-2026-0002")
    service = BookingService(db_session)

    first = service.create_booking(_request(), CONTEXT)
    second = service.create_booking(_request(lead_email="other@example.com"), CONTEXT)

    assert first.booking_reference == "ANG-2026-0001"
    assert second.booking_reference == "ANG-2026-0002"
    assert db_session.query(Booking).count() == 2


def test_reference_collisions_are_bounded(db_session, monkeypatch):
    _references(monkeypatch, *(["ANG-2026-0001"] * 4))
    service = BookingService(db_session, max_reference_attempts=3)
    service.create_booking(_request(), CONTEXT)

    with pytest.raises(PersistenceError):
        service.create_booking(_request(), CONTEXT)

    assert db_session.query(Booking).count() == 1


def test_get_booking_by_reference(db_session, make_booking):
    created = make_booking()

    found = BookingService(db_session).get_booking_by_reference(created.booking_reference)

    assert found.id == created.id


def test_get_booking_by_unknown_reference_raises_not_found(db_session):
    with pytest.raises(NotFoundError) as exc_info:
        BookingService(db_session).get_booking_by_reference("ANG-2026-9999")

    assert exc_info.value.message == "Booking not found"


def test_malformed_reference_is_not_found_without_querying():
    db = MagicMock()

    with pytest.raises(NotFoundError):
        BookingService(db).get_booking_by_reference("DROP TABLE bookings")

    db.query.assert_not_called()


def test_get_bookings_filters_and_limits(db_session, make_booking):
    make_booking(status="pending", booking_type="package")
    make_booking(status="confirmed", booking_type="vehicle")
    newest = make_booking(status="confirmed", booking_type="package")
    service = BookingService(db_session)

    assert [b.id for b in service.get_bookings()][0] == newest.id
    assert len(service.get_bookings(status="confirmed")) == 2
    assert len(service.get_bookings(booking_type="package")) == 2
    assert len(service.get_bookings(status="confirmed", booking_type="vehicle")) == 1
    assert len(service.get_bookings(limit=1)) == 1


def test_update_booking_changes_external_fields(db_session, make_booking):
    booking = make_booking()

    updated = BookingService(db_session).update_booking(
        booking.id, BookingUpdate(status="confirmed", payment_status="paid")
    )

    assert updated.status == "confirmed"
    assert updated.payment_status == "paid"
    assert updated.booking_reference == booking.booking_reference


def test_update_unknown_booking_raises_not_found(db_session):
    with pytest.raises(NotFoundError):
        BookingService(db_session).update_booking(404, BookingUpdate(status="cancelled"))
