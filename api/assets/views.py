# api/assets/views.py
"""
Asset endpoints. Every route is scoped to the authenticated owner.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, RowId
from .models import AssetCreate, AssetUpdate, AssetRead
from . import db_manager

router = APIRouter(prefix="/ativos", tags=["assets"])


@router.get(
    "",
    response_model=list[AssetRead],
    summary="List my assets",
)
async def list_assets_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[AssetRead]:
    """List every asset owned by the current user, newest first."""
    assets = await db_manager.list_assets_for_owner(db, current_user.id)
    return [AssetRead.model_validate(a) for a in assets]


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    asset = await db_manager.create_asset(
        db,
        owner_id=current_user.id,
        name=payload.name,
        description=payload.description,
    )
    return AssetRead.model_validate(asset)


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: RowId,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """Get one of the current user's assets. 403 if it belongs to someone else."""
    asset = await db_manager.get_asset(db, current_user.id, asset_id)
    return AssetRead.model_validate(asset)


@router.put(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Update asset",
)
async def update_asset_endpoint(
    asset_id: RowId,
    payload: AssetUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Partially update name and/or description.
    Send ``"description": null`` to clear the description.
    """
    asset = await db_manager.update_asset(db, current_user.id, asset_id, payload.changes())
    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    summary="Delete asset",
)
async def delete_asset_endpoint(
    asset_id: RowId,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    """Delete an asset and all of its maintenance records."""
    await db_manager.delete_asset(db, current_user.id, asset_id)
    return {"message": "Asset deleted successfully"}
