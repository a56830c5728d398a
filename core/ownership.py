# core/ownership.py
"""
Ownership guard.

Only an asset's owner may read or change the asset or any of its
maintenance records. Access to a record is always decided through the
asset it points at; records carry no owner of their own.

``authorize_*`` return an ``Access`` value. ``ensure_*`` are what the
db_manager modules call: they load the target, run the check and raise
``NotFoundError`` / ``ForbiddenError`` so the request stops there.
"""
import logging
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from db_models.maintenance_record import MaintenanceRecord
from core.errors import ForbiddenError, NotFoundError
from api.assets import queries as asset_queries
from api.maintenance import queries as maintenance_queries

logger = logging.getLogger(__name__)


class Access(str, Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"


def authorize_asset(requester_id: int, asset: Asset) -> Access:
    """ALLOW iff the requester owns the asset."""
    if asset.user_id == requester_id:
        return Access.ALLOW
    return Access.DENY


async def _load_asset(db: AsyncSession, asset_id: int, missing_message: str) -> Asset:
    result = await db.execute(asset_queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise NotFoundError(missing_message)
    return asset


async def authorize_maintenance(db: AsyncSession, requester_id: int, asset_id: int) -> Access:
    """
    Decide access to the maintenance records of ``asset_id``.

    Raises:
        NotFoundError: If the asset doesn't exist
    """
    asset = await _load_asset(db, asset_id, "Associated asset not found")
    return authorize_asset(requester_id, asset)


async def ensure_asset_access(
    db: AsyncSession,
    requester_id: int,
    asset_id: int,
    *,
    missing_message: str = "Asset not found",
    denied_message: str = "You do not have permission to access this asset",
) -> Asset:
    """Load an asset the requester owns, or raise."""
    asset = await _load_asset(db, asset_id, missing_message)
    if authorize_asset(requester_id, asset) is Access.DENY:
        logger.warning(
            "Ownership denied: user %s on asset %s (owner %s)",
            requester_id, asset.id, asset.user_id,
        )
        raise ForbiddenError(denied_message)
    return asset


async def ensure_maintenance_access(
    db: AsyncSession,
    requester_id: int,
    record_id: int,
) -> MaintenanceRecord:
    """Load a maintenance record whose asset the requester owns, or raise."""
    result = await db.execute(maintenance_queries.select_record_by_id(record_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFoundError("Maintenance record not found")

    await ensure_asset_access(
        db,
        requester_id,
        record.asset_id,
        missing_message="Associated asset not found",
        denied_message="You do not have permission to manage maintenance records for this asset",
    )
    return record
