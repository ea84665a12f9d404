from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from decimal import Decimal

from src.database import get_db
from src.analytics.context import RequestContext, get_request_context
from src.analytics.recorder import UsageEventRecorder, get_usage_recorder
from src.catalog.schemas import (
    CatalogSearch, Package, PackageCreate, PackageUpdate, PackageListResponse,
    PackageResponse, Vehicle, VehicleCreate, VehicleUpdate, VehicleListResponse,
    VehicleResponse, ShuttleRoute, ShuttleListResponse, Destination,
    DestinationListResponse, MessageResponse
)
from src.catalog.service import CatalogService
from src.exceptions import NotFoundError, PersistenceError

router = APIRouter()

def _raise_http(error: Exception):
    if isinstance(error, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)

# Safari Package Endpoints
@router.get("/packages", response_model=PackageListResponse)
def get_packages(
    type: Optional[str] = Query(None, description="Filter by package type"),
    destination: Optional[str] = Query(None, description="Filter by destination"),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price"),
    featured: Optional[bool] = Query(None, description="Only featured packages"),
    context: RequestContext = Depends(get_request_context),
    recorder: UsageEventRecorder = Depends(get_usage_recorder),
    db: Session = Depends(get_db)
):
    """Get active safari packages with optional filters"""
    search = CatalogSearch(
        type=type,
        destination=destination,
        min_price=min_price,
        max_price=max_price,
        featured=featured
    )

    try:
        packages = CatalogService.get_packages(db, search=search)
    except PersistenceError as e:
        _raise_http(e)

    response = PackageListResponse(packages=[Package.from_orm(p) for p in packages])

    recorder.record("packages_viewed", {
        "count": len(packages),
        "filters": search.dict(exclude_none=True)
    }, context)

    return response

@router.get("/packages/{package_id}", response_model=PackageResponse)
def get_package(
    package_id: int,
    context: RequestContext = Depends(get_request_context),
    recorder: UsageEventRecorder = Depends(get_usage_recorder),
    db: Session = Depends(get_db)
):
    """Get a single safari package"""
    try:
        package = CatalogService.get_package(db, package_id)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)

    response = PackageResponse(package=Package.from_orm(package))

    recorder.record("package_viewed", {"package_id": package_id, "title": package.title}, context)

    return response

@router.post("/packages", response_model=PackageResponse)
def create_package(package: PackageCreate, db: Session = Depends(get_db)):
    """Create a safari package"""
    try:
        created = CatalogService.create_package(db, package)
    except PersistenceError as e:
        _raise_http(e)
    return PackageResponse(package=Package.from_orm(created))

@router.put("/packages/{package_id}", response_model=PackageResponse)
def update_package(package_id: int, package_update: PackageUpdate, db: Session = Depends(get_db)):
    """Update a safari package"""
    try:
        updated = CatalogService.update_package(db, package_id, package_update)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)
    return PackageResponse(package=Package.from_orm(updated))

@router.delete("/packages/{package_id}", response_model=MessageResponse)
def delete_package(package_id: int, db: Session = Depends(get_db)):
    """Delete a safari package"""
    try:
        CatalogService.delete_package(db, package_id)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)
    return MessageResponse(message="Package deleted successfully")

# Vehicle Endpoints
@router.get("/vehicles", response_model=VehicleListResponse)
def get_vehicles(
    type: Optional[str] = Query(None, description="Filter by vehicle type"),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price per day"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price per day"),
    featured: Optional[bool] = Query(None, description="Only featured vehicles"),
    context: RequestContext = Depends(get_request_context),
    recorder: UsageEventRecorder = Depends(get_usage_recorder),
    db: Session = Depends(get_db)
):
    """Get available vehicles with optional filters"""
    search = CatalogSearch(type=type, min_price=min_price, max_price=max_price, featured=featured)

    try:
        vehicles = CatalogService.get_vehicles(db, search=search)
    except PersistenceError as e:
        _raise_http(e)

    response = VehicleListResponse(vehicles=[Vehicle.from_orm(v) for v in vehicles])

    recorder.record("vehicles_viewed", {
        "count": len(vehicles),
        "filters": search.dict(exclude_none=True)
    }, context)

    return response

@router.get("/vehicles/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(
    vehicle_id: int,
    context: RequestContext = Depends(get_request_context),
    recorder: UsageEventRecorder = Depends(get_usage_recorder),
    db: Session = Depends(get_db)
):
    """Get a single vehicle"""
    try:
        vehicle = CatalogService.get_vehicle(db, vehicle_id)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)

    response = VehicleResponse(vehicle=Vehicle.from_orm(vehicle))

    recorder.record("vehicle_viewed", {"vehicle_id": vehicle_id}, context)

    return response

@router.post("/vehicles", response_model=VehicleResponse)
def create_vehicle(vehicle: VehicleCreate, db: Session = Depends(get_db)):
    """Create a vehicle"""
    try:
        created = CatalogService.create_vehicle(db, vehicle)
    except PersistenceError as e:
        _raise_http(e)
    return VehicleResponse(vehicle=Vehicle.from_orm(created))

@router.put("/vehicles/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(vehicle_id: int, vehicle_update: VehicleUpdate, db: Session = Depends(get_db)):
    """Update a vehicle"""
    try:
        updated = CatalogService.update_vehicle(db, vehicle_id, vehicle_update)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)
    return VehicleResponse(vehicle=Vehicle.from_orm(updated))

@router.delete("/vehicles/{vehicle_id}", response_model=MessageResponse)
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    """Delete a vehicle"""
    try:
        CatalogService.delete_vehicle(db, vehicle_id)
    except (NotFoundError, PersistenceError) as e:
        _raise_http(e)
    return MessageResponse(message="Vehicle deleted successfully")

# Shuttle Endpoints
@router.get("/shuttles", response_model=ShuttleListResponse)
def get_shuttles(
    context: RequestContext = Depends(get_request_context),
    recorder: UsageEventRecorder = Depends(get_usage_recorder),
    db: Session = Depends(get_db)
):
    """Get active shuttle routes"""
    try:
        shuttles = CatalogService.get_shuttles(db)
    except PersistenceError as e:
        _raise_http(e)

    response = ShuttleListResponse(shuttles=[ShuttleRoute.from_orm(s) for s in shuttles])

    recorder.record("shuttles_viewed", {"count": len(shuttles)}, context)

    return response

# Destination Endpoints
@router.get("/destinations", response_model=DestinationListResponse)
def get_destinations(
    featured: Optional[bool] = Query(None, description="Only featured destinations"),
    db: Session = Depends(get_db)
):
    """Get active destinations"""
    try:
        destinations = CatalogService.get_destinations(db, featured=featured)
    except PersistenceError as e:
        _raise_http(e)

    return DestinationListResponse(destinations=[Destination.from_orm(d) for d in destinations])
