from datetime import datetime, timezone

from sqlalchemy import Column, Integer, BigInteger, String, Boolean, DateTime, Date, Text, Numeric, JSON
from sqlalchemy.sql import func
from src.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# Catalog
# ================================
class SafariPackage(Base):
    __tablename__ = "safari_packages"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    type = Column(String(50), index=True)
    destination = Column(String(255), index=True)
    price = Column(Numeric(12, 2), nullable=False)
    duration_days = Column(Integer)
    image_url = Column(String(500))
    featured = Column(Boolean, default=False, index=True)
    status = Column(String(50), default="active", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), index=True)
    description = Column(Text)
    seats = Column(Integer)
    price_per_day = Column(Numeric(12, 2), nullable=False)
    image_url = Column(String(500))
    featured = Column(Boolean, default=False, index=True)
    status = Column(String(50), default="available", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class ShuttleRoute(Base):
    __tablename__ = "shuttle_routes"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    origin = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    departure_times = Column(JSON)
    status = Column(String(50), default="active", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Destination(Base):
    __tablename__ = "destinations"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    region = Column(String(255))
    description = Column(Text)
    image_url = Column(String(500))
    featured = Column(Boolean, default=False, index=True)
    status = Column(String(50), default="active", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    # fetch server-generated columns during the INSERT flush
    __mapper_args__ = {"eager_defaults": True}

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    booking_reference = Column(String(20), unique=True, nullable=False, index=True)
    booking_type = Column(String(20), nullable=False, index=True)
    item_id = Column(BigInteger)
    lead_first_name = Column(String(100), nullable=False)
    lead_last_name = Column(String(100), nullable=False)
    lead_email = Column(String(255), nullable=False, index=True)
    lead_phone = Column(String(50))
    country = Column(String(100))
    start_date = Column(Date)
    end_date = Column(Date)
    adults = Column(Integer, default=1)
    children = Column(Integer, default=0)
    special_requests = Column(Text)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(3), default="USD")
    payment_status = Column(String(50), default="pending", index=True)
    payment_method = Column(String(50))
    status = Column(String(50), default="pending", index=True)
    ip_address = Column(String(64))
    user_agent = Column(String(500))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ================================
# Enquiries
# ================================
class PlanMyTripRequest(Base):
    __tablename__ = "plan_my_trip"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    destination = Column(String(255))
    start_date = Column(Date)
    end_date = Column(Date)
    travelers = Column(Integer)
    budget = Column(String(100))
    interests = Column(JSON)
    message = Column(Text)
    status = Column(String(50), default="new")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

class NewsletterSubscriber(Base):
    __tablename__ = "newsletter_subscribers"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    subject = Column(String(255))
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# ================================
# Usage analytics
# ================================
class AnalyticsEvent(Base):
    __tablename__ = "analytics"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    event_type = Column(String(100), nullable=False, index=True)
    event_data = Column(JSON)
    page_url = Column(String(1000), default="")
    user_ip = Column(String(64), default="")
    user_agent = Column(String(500), default="")
    session_id = Column(String(255), default="")
    # Python-side stamp, same text format as bound datetimes on SQLite
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), index=True)
