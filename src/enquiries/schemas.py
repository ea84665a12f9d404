from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional, List
from datetime import datetime, date

class PlanTripCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    destination: Optional[str] = Field(None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    travelers: Optional[int] = Field(None, ge=1)
    budget: Optional[str] = Field(None, max_length=100)
    interests: Optional[List[str]] = None
    message: Optional[str] = None

    @validator('end_date')
    def validate_dates(cls, v, values):
        start = values.get('start_date')
        if v and start and v < start:
            raise ValueError('end_date must not be before start_date')
        return v

class PlanTripRequest(PlanTripCreate):
    id: int
    email: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PlanTripResponse(BaseModel):
    success: bool = True
    request: PlanTripRequest

class PlanTripListResponse(BaseModel):
    success: bool = True
    requests: List[PlanTripRequest]

class NewsletterSubscribe(BaseModel):
    email: EmailStr

class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1)

class MessageResponse(BaseModel):
    success: bool = True
    message: str
