# api/maintenance/queries.py
"""
SQLAlchemy query builders for maintenance record operations.
"""
from sqlalchemy import select

from db_models.maintenance_record import MaintenanceRecord


def select_record_by_id(record_id: int):
    """Select a maintenance record by its ID."""
    return select(MaintenanceRecord).where(MaintenanceRecord.id == record_id)


def select_records_for_asset(asset_id: int):
    """Select an asset's records, newest first."""
    return (
        select(MaintenanceRecord)
        .where(MaintenanceRecord.asset_id == asset_id)
        .order_by(MaintenanceRecord.created_at.desc(), MaintenanceRecord.id.desc())
    )


def select_records_for_assets(asset_ids: list[int]):
    """Select records for several assets at once, newest first within the set."""
    return (
        select(MaintenanceRecord)
        .where(MaintenanceRecord.asset_id.in_(asset_ids))
        .order_by(MaintenanceRecord.created_at.desc(), MaintenanceRecord.id.desc())
    )
