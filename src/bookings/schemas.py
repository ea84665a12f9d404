from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

class BookingType(str, Enum):
    """Booking type enumeration"""
    PACKAGE = "package"
    VEHICLE = "vehicle"
    SHUTTLE = "shuttle"
    CUSTOM = "custom"

class BookingStatus(str, Enum):
    """Lifecycle states an admin may set on a booking"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

# Booking Request Models
class BookingCreate(BaseModel):
    """Customer-supplied booking fields.

    Provenance (ip_address, user_agent), booking_reference and status are
    not accepted from the caller; unknown fields are dropped.
    """
    booking_type: BookingType
    item_id: Optional[int] = None
    lead_first_name: str = Field(..., min_length=1, max_length=100)
    lead_last_name: str = Field(..., min_length=1, max_length=100)
    lead_email: EmailStr
    lead_phone: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    adults: int = Field(1, ge=0)
    children: int = Field(0, ge=0)
    special_requests: Optional[str] = None
    total_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)
    payment_status: str = Field("pending", max_length=50)
    payment_method: Optional[str] = Field(None, max_length=50)

    @validator('end_date')
    def validate_dates(cls, v, values):
        start = values.get('start_date')
        if v and start and v < start:
            raise ValueError('end_date must not be before start_date')
        return v

    class Config:
        extra = "ignore"

class BookingUpdate(BaseModel):
    """Externally-driven booking changes (admin update path)"""
    status: Optional[BookingStatus] = None
    payment_status: Optional[str] = Field(None, max_length=50)
    payment_method: Optional[str] = Field(None, max_length=50)
    lead_phone: Optional[str] = Field(None, max_length=50)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    adults: Optional[int] = Field(None, ge=0)
    children: Optional[int] = Field(None, ge=0)
    special_requests: Optional[str] = None
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

    class Config:
        extra = "ignore"

# Booking Response Models
class BookingOut(BaseModel):
    """Persisted booking as returned to clients"""
    id: int
    booking_reference: str
    booking_type: str
    item_id: Optional[int] = None
    lead_first_name: str
    lead_last_name: str
    lead_email: str
    lead_phone: Optional[str] = None
    country: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    adults: Optional[int] = None
    children: Optional[int] = None
    special_requests: Optional[str] = None
    total_amount: Decimal
    currency: Optional[str] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BookingCreatedResponse(BaseModel):
    success: bool = True
    booking: BookingOut
    message: str = "Booking created successfully"

class BookingResponse(BaseModel):
    success: bool = True
    booking: BookingOut

class BookingListResponse(BaseModel):
    success: bool = True
    bookings: List[BookingOut]
