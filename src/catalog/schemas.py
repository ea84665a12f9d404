from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

# Safari packages
class PackageBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, max_length=50)
    destination: Optional[str] = Field(None, max_length=255)
    price: Decimal = Field(..., ge=0)
    duration_days: Optional[int] = Field(None, ge=1)
    image_url: Optional[str] = None
    featured: bool = False
    status: str = "active"

class PackageCreate(PackageBase):
    pass

class PackageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, max_length=50)
    destination: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    duration_days: Optional[int] = Field(None, ge=1)
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[str] = None

class Package(PackageBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Vehicles
class VehicleBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    seats: Optional[int] = Field(None, ge=1)
    price_per_day: Decimal = Field(..., ge=0)
    image_url: Optional[str] = None
    featured: bool = False
    status: str = "available"

class VehicleCreate(VehicleBase):
    pass

class VehicleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    seats: Optional[int] = Field(None, ge=1)
    price_per_day: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[str] = None

class Vehicle(VehicleBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Shuttles and destinations
class ShuttleRoute(BaseModel):
    id: int
    name: str
    origin: str
    destination: str
    price: Decimal
    departure_times: Optional[List[str]] = None
    status: Optional[str] = None

    class Config:
        from_attributes = True

class Destination(BaseModel):
    id: int
    name: str
    region: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = False

    class Config:
        from_attributes = True

# Search filters
class CatalogSearch(BaseModel):
    type: Optional[str] = None
    destination: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    featured: Optional[bool] = None

# Response envelopes
class PackageListResponse(BaseModel):
    success: bool = True
    packages: List[Package]

class PackageResponse(BaseModel):
    success: bool = True
    package: Package

class VehicleListResponse(BaseModel):
    success: bool = True
    vehicles: List[Vehicle]

class VehicleResponse(BaseModel):
    success: bool = True
    vehicle: Vehicle

class ShuttleListResponse(BaseModel):
    success: bool = True
    shuttles: List[ShuttleRoute]

class DestinationListResponse(BaseModel):
    success: bool = True
    destinations: List[Destination]

class MessageResponse(BaseModel):
    success: bool = True
    message: str
