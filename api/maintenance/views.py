# api/maintenance/views.py
"""
Maintenance record endpoints.

Two routers: records nested under their asset (list / create) and
records addressed directly by ID (get / update / delete).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, RowId
from .models import MaintenanceCreate, MaintenanceUpdate, MaintenanceRead
from . import db_manager

asset_maintenance_router = APIRouter(prefix="/ativos", tags=["maintenance"])
router = APIRouter(prefix="/manutencoes", tags=["maintenance"])


@asset_maintenance_router.get(
    "/{asset_id}/manutencoes",
    response_model=list[MaintenanceRead],
    summary="List maintenance records of an asset",
)
async def list_records_endpoint(
    asset_id: RowId,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[MaintenanceRead]:
    """
    List an asset's maintenance records, newest first, each with its
    current status (overdue / upcoming / scheduled / completed).
    """
    records = await db_manager.list_records_for_asset(db, current_user.id, asset_id)
    return [MaintenanceRead.from_record(r) for r in records]


@asset_maintenance_router.post(
    "/{asset_id}/manutencoes",
    response_model=MaintenanceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log a maintenance record",
)
async def create_record_endpoint(
    asset_id: RowId,
    payload: MaintenanceCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceRead:
    record = await db_manager.create_record(db, current_user.id, asset_id, payload.model_dump())
    return MaintenanceRead.from_record(record)


@router.get(
    "/{maintenance_id}",
    response_model=MaintenanceRead,
    summary="Get maintenance record by ID",
)
async def get_record_endpoint(
    maintenance_id: RowId,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceRead:
    record = await db_manager.get_record(db, current_user.id, maintenance_id)
    return MaintenanceRead.from_record(record)


@router.put(
    "/{maintenance_id}",
    response_model=MaintenanceRead,
    summary="Update maintenance record",
)
async def update_record_endpoint(
    maintenance_id: RowId,
    payload: MaintenanceUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceRead:
    """Partially update a record. Send ``null`` to clear an optional field."""
    record = await db_manager.update_record(db, current_user.id, maintenance_id, payload.changes())
    return MaintenanceRead.from_record(record)


@router.delete(
    "/{maintenance_id}",
    summary="Delete maintenance record",
)
async def delete_record_endpoint(
    maintenance_id: RowId,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    await db_manager.delete_record(db, current_user.id, maintenance_id)
    return {"message": "Maintenance record deleted successfully"}
