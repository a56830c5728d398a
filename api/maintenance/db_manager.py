# api/maintenance/db_manager.py
"""
Business logic for maintenance records.

Records are reachable only through an asset the requester owns; the
ownership guard runs before any read or write.
"""
import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.maintenance_record import MaintenanceRecord
from core.ownership import ensure_asset_access, ensure_maintenance_access
from . import queries

logger = logging.getLogger(__name__)

_DENIED = "You do not have permission to manage maintenance records for this asset"

# Columns a client may set; asset_id is fixed at creation
EDITABLE_FIELDS = (
    "service",
    "expected_at",
    "performed_at",
    "description",
    "done",
    "condition_next_maintenance",
    "date_next_maintenance",
)


async def create_record(
    db: AsyncSession,
    requester_id: int,
    asset_id: int,
    fields: dict,
) -> MaintenanceRecord:
    """
    Log a maintenance record against one of the requester's assets.

    Raises:
        NotFoundError: If the asset doesn't exist
        ForbiddenError: If the asset belongs to someone else
    """
    await ensure_asset_access(
        db,
        requester_id,
        asset_id,
        missing_message="Associated asset not found",
        denied_message=_DENIED,
    )

    record = MaintenanceRecord(
        asset_id=asset_id,
        **{name: fields.get(name) for name in EDITABLE_FIELDS},
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.info("Maintenance record %s created on asset %s", record.id, asset_id)
    return record


async def list_records_for_asset(
    db: AsyncSession,
    requester_id: int,
    asset_id: int,
) -> list[MaintenanceRecord]:
    """Return every record of an asset the requester owns, newest first."""
    await ensure_asset_access(
        db,
        requester_id,
        asset_id,
        missing_message="Associated asset not found",
        denied_message=_DENIED,
    )
    result = await db.execute(queries.select_records_for_asset(asset_id))
    return list(result.scalars().all())


async def get_record(db: AsyncSession, requester_id: int, record_id: int) -> MaintenanceRecord:
    """Get one record, resolving ownership through its asset."""
    return await ensure_maintenance_access(db, requester_id, record_id)


async def update_record(
    db: AsyncSession,
    requester_id: int,
    record_id: int,
    changes: dict,
) -> MaintenanceRecord:
    """
    Apply a partial update.

    ``changes`` holds only the fields the client sent; a ``None`` value
    clears that column.
    """
    record = await ensure_maintenance_access(db, requester_id, record_id)

    for name in EDITABLE_FIELDS:
        if name in changes:
            setattr(record, name, changes[name])
    record.updated_at = func.now()

    await db.commit()
    await db.refresh(record)
    return record


async def delete_record(db: AsyncSession, requester_id: int, record_id: int) -> None:
    record = await ensure_maintenance_access(db, requester_id, record_id)
    await db.delete(record)
    await db.commit()
    logger.info("Maintenance record %s deleted by user %s", record_id, requester_id)
