# api/assets/db_manager.py
"""
Business logic for asset management.

Every operation that targets a single asset goes through the ownership
guard before the store is touched.
"""
import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from core.ownership import ensure_asset_access
from . import queries

logger = logging.getLogger(__name__)


async def create_asset(
    db: AsyncSession,
    owner_id: int,
    name: str,
    description: str | None = None,
) -> Asset:
    """Create an asset owned by ``owner_id``."""
    asset = Asset(user_id=owner_id, name=name, description=description)
    db.add(asset)
    await db.commit()
    await db.refresh(asset)
    logger.info("Asset %s created for user %s", asset.id, owner_id)
    return asset


async def list_assets_for_owner(db: AsyncSession, owner_id: int) -> list[Asset]:
    """Return the requester's assets. Scoped by the query, no guard needed."""
    result = await db.execute(queries.select_assets_for_owner(owner_id))
    return list(result.scalars().all())


async def get_asset(db: AsyncSession, requester_id: int, asset_id: int) -> Asset:
    """
    Get an asset the requester owns.

    Raises:
        NotFoundError: If the asset doesn't exist
        ForbiddenError: If it belongs to someone else
    """
    return await ensure_asset_access(db, requester_id, asset_id)


async def update_asset(
    db: AsyncSession,
    requester_id: int,
    asset_id: int,
    changes: dict,
) -> Asset:
    """
    Apply a partial update (name and/or description).

    An empty ``changes`` still bumps ``updated_at``.
    """
    asset = await ensure_asset_access(
        db,
        requester_id,
        asset_id,
        denied_message="You do not have permission to update this asset",
    )

    if "name" in changes:
        asset.name = changes["name"]
    if "description" in changes:
        asset.description = changes["description"]
    asset.updated_at = func.now()

    await db.commit()
    await db.refresh(asset)
    return asset


async def delete_asset(db: AsyncSession, requester_id: int, asset_id: int) -> None:
    """Delete an asset together with all of its maintenance records."""
    asset = await ensure_asset_access(
        db,
        requester_id,
        asset_id,
        denied_message="You do not have permission to delete this asset",
    )

    await db.execute(queries.delete_maintenance_for_asset(asset.id))
    await db.delete(asset)
    await db.commit()
    logger.info("Asset %s deleted by user %s", asset_id, requester_id)
