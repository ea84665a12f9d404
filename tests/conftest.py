import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import Base, get_db
from src.exceptions import NotificationError
from src.main import app
from src.models import Booking, Vehicle
from src.notifications.service import NotificationDispatcher, get_notification_dispatcher

ADMIN_EMAIL = "admin@angoni.test"


class StoreOutage:
    """Makes the engine fail statements, as if the database went away"""

    def __init__(self, engine) -> None:
        self.engine = engine
        self.down = False
        self.fail_prefix = None
        self.after_commit = False
        event.listen(engine, "before_cursor_execute", self._before_execute)
        event.listen(engine, "commit", self._on_commit)

    def from_statement(self, prefix: str) -> None:
        """Fail the first statement starting with ``prefix`` and all that follow"""
        self.fail_prefix = prefix.upper()

    def after_next_commit(self) -> None:
        self.after_commit = True

    def restore(self) -> None:
        self.down = False
        self.fail_prefix = None
        self.after_commit = False

    def remove(self) -> None:
        event.remove(self.engine, "before_cursor_execute", self._before_execute)
        event.remove(self.engine, "commit", self._on_commit)

    def _on_commit(self, conn) -> None:
        if self.after_commit:
            self.down = True

    def _before_execute(self, conn, cursor, statement, parameters, context, executemany):
        if self.fail_prefix and statement.lstrip().upper().startswith(self.fail_prefix):
            self.down = True
        if self.down:
            raise OperationalError(statement, parameters, Exception("store unreachable"))


class FakeMailer:
    def __init__(self) -> None:
        self.sent: List[dict] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise NotificationError("relay unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store_outage(engine):
    outage = StoreOutage(engine)
    yield outage
    outage.remove()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def dispatcher(mailer):
    return NotificationDispatcher(mailer, admin_email=ADMIN_EMAIL)


@pytest.fixture
def client(db_session, dispatcher):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def booking_payload():
    return {
        "booking_type": "package",
        "item_id": 7,
        "lead_first_name": "Amina",
        "lead_last_name": "Mushi",
        "lead_email": "amina@example.com",
        "lead_phone": "+255 700 000 001",
        "start_date": "2026-11-02",
        "end_date": "2026-11-05",
        "adults": 2,
        "children": 1,
        "total_amount": "1250.00",
    }


@pytest.fixture
def make_booking(db_session):
    counter = {"n": 0}

    def _make(payment_status="pending", total_amount="100.00", lead_email="a@x.com", **overrides):
        counter["n"] += 1
        booking = Booking(
            booking_reference=f"ANG-2026-{counter['n']:04d}",
            booking_type=overrides.pop("booking_type", "package"),
            lead_first_name="Test",
            lead_last_name="Customer",
            lead_email=lead_email,
            total_amount=Decimal(total_amount),
            payment_status=payment_status,
            status=overrides.pop("status", "pending"),
            **overrides
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking

    return _make


@pytest.fixture
def make_vehicle(db_session):
    def _make(name="Land Cruiser", status="available", **overrides):
        vehicle = Vehicle(
            name=name,
            type=overrides.pop("type", "4x4"),
            price_per_day=Decimal(overrides.pop("price_per_day", "250.00")),
            status=status,
            **overrides
        )
        db_session.add(vehicle)
        db_session.commit()
        db_session.refresh(vehicle)
        return vehicle

    return _make
