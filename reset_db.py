# reset_db.py
"""
Database reset utility - drops all tables and recreates them fresh.

Usage:
    python reset_db.py           # Reset only
    python reset_db.py --seed    # Reset + demo account with sample data
"""
import argparse
from datetime import date, timedelta

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from config.database import to_sync_url
from core.security import get_password_hash
from db_base import Base
from db_models.asset import Asset
from db_models.maintenance_record import MaintenanceRecord
from db_models.user import User

DEMO_EMAIL = "demo@maintenance-demo.com"
DEMO_PASSWORD = "Demo1234"


def _display_url(url: str) -> str:
    return url.split("@")[1] if "@" in url else url


def reset_database(engine) -> bool:
    """Drop all tables and recreate them."""
    print("=" * 60)
    print("DATABASE RESET UTILITY")
    print("=" * 60)
    print(f"\nConnecting to: {_display_url(str(engine.url))}")

    try:
        tables = inspect(engine).get_table_names()
        if tables:
            print(f"\nFound {len(tables)} tables: {', '.join(tables)}")
        else:
            print("\nNo existing tables found.")

        print("\nDropping all tables...")
        Base.metadata.drop_all(bind=engine)

        print("\n" + "-" * 60)
        print("Creating fresh tables from SQLAlchemy models...")
        print("-" * 60)
        Base.metadata.create_all(bind=engine)

        inspector = inspect(engine)
        new_tables = sorted(inspector.get_table_names())
        print(f"\nCreated {len(new_tables)} tables:")
        for table in new_tables:
            print(f"\n  {table}:")
            for column in inspector.get_columns(table):
                print(f"    - {column['name']}: {column['type']}")

        print("\n" + "=" * 60)
        print("DATABASE RESET COMPLETE!")
        print("=" * 60)
        return True

    except SQLAlchemyError as e:
        print(f"\nERROR: {e}")
        return False


def seed_data(engine) -> None:
    """Create a demo account owning two assets with a mix of record states."""
    print("\n" + "=" * 60)
    print("SEEDING DATABASE WITH DEMO DATA...")
    print("=" * 60 + "\n")

    today = date.today()
    with Session(engine) as session:
        user = User(
            name="Demo User",
            email=DEMO_EMAIL,
            hashed_password=get_password_hash(DEMO_PASSWORD),
        )
        forklift = Asset(owner=user, name="Forklift", description="Warehouse forklift")
        compressor = Asset(owner=user, name="Air compressor")

        session.add_all([
            user,
            forklift,
            compressor,
            MaintenanceRecord(asset=forklift, service="Oil change", expected_at=today - timedelta(days=3)),
            MaintenanceRecord(asset=forklift, service="Brake inspection", expected_at=today + timedelta(days=5)),
            MaintenanceRecord(
                asset=forklift,
                service="Tire replacement",
                expected_at=today - timedelta(days=60),
                performed_at=today - timedelta(days=58),
                done=True,
            ),
            MaintenanceRecord(
                asset=compressor,
                service="Filter replacement",
                expected_at=today + timedelta(days=30),
                condition_next_maintenance="Every 500 operating hours",
            ),
        ])
        session.commit()

    print(f"Demo login: {DEMO_EMAIL} / {DEMO_PASSWORD}")


def main():
    parser = argparse.ArgumentParser(
        description="Reset database - drop all tables and recreate fresh"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also seed a demo account after reset"
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Only seed data (skip table reset)"
    )

    args = parser.parse_args()
    engine = create_engine(to_sync_url(settings.DATABASE_URL))

    try:
        if args.seed_only:
            seed_data(engine)
            return

        success = reset_database(engine)

        if success and args.seed:
            seed_data(engine)
        elif success:
            print("\nTo seed demo data, run:")
            print("  python reset_db.py --seed")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
