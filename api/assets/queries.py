# api/assets/queries.py
"""
SQLAlchemy query builders for asset operations.
"""
from sqlalchemy import select, delete

from db_models.asset import Asset
from db_models.maintenance_record import MaintenanceRecord


def select_asset_by_id(asset_id: int):
    """Select an asset by its ID (no owner filter; the guard decides access)."""
    return select(Asset).where(Asset.id == asset_id)


def select_assets_for_owner(user_id: int):
    """Select every asset owned by a user, newest first."""
    return (
        select(Asset)
        .where(Asset.user_id == user_id)
        .order_by(Asset.created_at.desc(), Asset.id.desc())
    )


def delete_maintenance_for_asset(asset_id: int):
    """Delete every maintenance record attached to an asset."""
    return delete(MaintenanceRecord).where(MaintenanceRecord.asset_id == asset_id)
