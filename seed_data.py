#!/usr/bin/env python3

from decimal import Decimal

from src.database import SessionLocal, init_db
from src.models import SafariPackage, Vehicle, ShuttleRoute, Destination

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for ANGONI Adventure...")

        # Clear existing catalog data
        print("Clearing existing catalog...")
        db.query(SafariPackage).delete()
        db.query(Vehicle).delete()
        db.query(ShuttleRoute).delete()
        db.query(Destination).delete()

        # 1. Destinations
        print("Creating destinations...")
        destinations = [
            Destination(name="Serengeti National Park", region="Mara", featured=True,
                        description="Endless plains and the Great Migration"),
            Destination(name="Ngorongoro Crater", region="Arusha", featured=True,
                        description="The world's largest intact volcanic caldera"),
            Destination(name="Tarangire National Park", region="Manyara",
                        description="Baobabs and large elephant herds"),
            Destination(name="Zanzibar", region="Zanzibar", featured=True,
                        description="Spice island beaches and Stone Town"),
        ]
        db.add_all(destinations)

        # 2. Safari packages
        print("Creating safari packages...")
        packages = [
            SafariPackage(title="3-Day Serengeti Explorer", type="safari", destination="Serengeti National Park",
                          price=Decimal("1250.00"), duration_days=3, featured=True),
            SafariPackage(title="Ngorongoro Day Trip", type="day-trip", destination="Ngorongoro Crater",
                          price=Decimal("420.00"), duration_days=1),
            SafariPackage(title="7-Day Northern Circuit", type="safari", destination="Serengeti National Park",
                          price=Decimal("3150.00"), duration_days=7, featured=True),
            SafariPackage(title="Zanzibar Beach Escape", type="beach", destination="Zanzibar",
                          price=Decimal("890.00"), duration_days=4),
        ]
        db.add_all(packages)

        # 3. Vehicles
        print("Creating vehicles...")
        vehicles = [
            Vehicle(name="Toyota Land Cruiser Safari", type="4x4", seats=7,
                    price_per_day=Decimal("250.00"), featured=True),
            Vehicle(name="Toyota Alphard", type="van", seats=7, price_per_day=Decimal("120.00")),
            Vehicle(name="Toyota Coaster", type="bus", seats=25, price_per_day=Decimal("300.00")),
        ]
        db.add_all(vehicles)

        # 4. Shuttle routes
        print("Creating shuttle routes...")
        shuttles = [
            ShuttleRoute(name="Arusha - Moshi", origin="Arusha", destination="Moshi",
                         price=Decimal("15.00"), departure_times=["08:00", "14:00"]),
            ShuttleRoute(name="Kilimanjaro Airport - Arusha", origin="JRO", destination="Arusha",
                         price=Decimal("25.00"), departure_times=["09:30", "16:30", "21:00"]),
        ]
        db.add_all(shuttles)

        db.commit()
        print("✅ Successfully created seed data for ANGONI Adventure!")
        print(f"Created:")
        print(f"  - {len(destinations)} destinations")
        print(f"  - {len(packages)} safari packages")
        print(f"  - {len(vehicles)} vehicles")
        print(f"  - {len(shuttles)} shuttle routes")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
