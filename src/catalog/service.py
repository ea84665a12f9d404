from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Type

from src.database import Base
from src.exceptions import NotFoundError, PersistenceError
from src.models import SafariPackage, Vehicle, ShuttleRoute, Destination
from src.catalog.schemas import (
    CatalogSearch, PackageCreate, PackageUpdate, VehicleCreate, VehicleUpdate
)

PACKAGE_NOT_FOUND = "Package not found"
VEHICLE_NOT_FOUND = "Vehicle not found"

class CatalogService:
    # Safari packages
    @staticmethod
    def get_packages(db: Session, search: Optional[CatalogSearch] = None) -> List[SafariPackage]:
        """Get active packages, newest first"""
        query = db.query(SafariPackage).filter(SafariPackage.status == "active")

        if search:
            if search.type:
                query = query.filter(SafariPackage.type == search.type)
            if search.destination:
                query = query.filter(SafariPackage.destination == search.destination)
            if search.min_price is not None:
                query = query.filter(SafariPackage.price >= search.min_price)
            if search.max_price is not None:
                query = query.filter(SafariPackage.price <= search.max_price)
            if search.featured:
                query = query.filter(SafariPackage.featured == True)  # noqa: E712

        query = query.order_by(SafariPackage.created_at.desc(), SafariPackage.id.desc())
        return CatalogService._all(query)

    @staticmethod
    def get_package(db: Session, package_id: int) -> SafariPackage:
        return CatalogService._get(db, SafariPackage, package_id, PACKAGE_NOT_FOUND)

    @staticmethod
    def create_package(db: Session, package: PackageCreate) -> SafariPackage:
        return CatalogService._create(db, SafariPackage(**package.dict()))

    @staticmethod
    def update_package(db: Session, package_id: int, package_update: PackageUpdate) -> SafariPackage:
        return CatalogService._update(db, SafariPackage, package_id, package_update.dict(exclude_unset=True), PACKAGE_NOT_FOUND)

    @staticmethod
    def delete_package(db: Session, package_id: int) -> None:
        CatalogService._delete(db, SafariPackage, package_id, PACKAGE_NOT_FOUND)

    # Vehicles
    @staticmethod
    def get_vehicles(db: Session, search: Optional[CatalogSearch] = None) -> List[Vehicle]:
        """Get available vehicles, newest first"""
        query = db.query(Vehicle).filter(Vehicle.status == "available")

        if search:
            if search.type:
                query = query.filter(Vehicle.type == search.type)
            if search.min_price is not None:
                query = query.filter(Vehicle.price_per_day >= search.min_price)
            if search.max_price is not None:
                query = query.filter(Vehicle.price_per_day <= search.max_price)
            if search.featured:
                query = query.filter(Vehicle.featured == True)  # noqa: E712

        query = query.order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
        return CatalogService._all(query)

    @staticmethod
    def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
        return CatalogService._get(db, Vehicle, vehicle_id, VEHICLE_NOT_FOUND)

    @staticmethod
    def create_vehicle(db: Session, vehicle: VehicleCreate) -> Vehicle:
        return CatalogService._create(db, Vehicle(**vehicle.dict()))

    @staticmethod
    def update_vehicle(db: Session, vehicle_id: int, vehicle_update: VehicleUpdate) -> Vehicle:
        return CatalogService._update(db, Vehicle, vehicle_id, vehicle_update.dict(exclude_unset=True), VEHICLE_NOT_FOUND)

    @staticmethod
    def delete_vehicle(db: Session, vehicle_id: int) -> None:
        CatalogService._delete(db, Vehicle, vehicle_id, VEHICLE_NOT_FOUND)

    # Shuttles and destinations
    @staticmethod
    def get_shuttles(db: Session) -> List[ShuttleRoute]:
        """Get active shuttle routes ordered by name"""
        query = db.query(ShuttleRoute).filter(ShuttleRoute.status == "active").order_by(ShuttleRoute.name)
        return CatalogService._all(query)

    @staticmethod
    def get_destinations(db: Session, featured: Optional[bool] = None) -> List[Destination]:
        """Get active destinations"""
        query = db.query(Destination).filter(Destination.status == "active")
        if featured:
            query = query.filter(Destination.featured == True)  # noqa: E712
        return CatalogService._all(query.order_by(Destination.name))

    # Store helpers
    @staticmethod
    def _all(query) -> list:
        try:
            return query.all()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e

    @staticmethod
    def _get(db: Session, model: Type[Base], record_id: int, not_found: str):
        try:
            record = db.query(model).filter(model.id == record_id).first()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e), cause=e) from e
        if not record:
            raise NotFoundError(not_found)
        return record

    @staticmethod
    def _create(db: Session, record):
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e), cause=e) from e
        return record

    @staticmethod
    def _update(db: Session, model: Type[Base], record_id: int, update_data: dict, not_found: str):
        record = CatalogService._get(db, model, record_id, not_found)
        for field, value in update_data.items():
            setattr(record, field, value)
        try:
            db.commit()
            db.refresh(record)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e), cause=e) from e
        return record

    @staticmethod
    def _delete(db: Session, model: Type[Base], record_id: int, not_found: str) -> None:
        record = CatalogService._get(db, model, record_id, not_found)
        try:
            db.delete(record)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(str(e), cause=e) from e
