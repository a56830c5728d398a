# api/dashboard/db_manager.py
"""
Business logic for the maintenance dashboard.

The dashboard lists a user's assets that still have pending (not done)
maintenance, each annotated with its most urgent pending date.
"""
import logging
from collections import defaultdict
from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import StoreFailure
from db_models.maintenance_record import MaintenanceRecord
from api.assets import queries as asset_queries
from api.maintenance import queries as maintenance_queries
from api.maintenance.models import MaintenanceRead
from api.maintenance.status import StatusCode
from .models import DashboardAsset, DashboardCounts, SortMode

logger = logging.getLogger(__name__)


def is_pending(record: MaintenanceRecord) -> bool:
    """Anything not explicitly done (including done=NULL) is pending."""
    return record.done is not True


def most_relevant_date(pending: list[MaintenanceRecord]) -> date | None:
    """
    Earliest expected_at among pending records.

    Undated records are ignored; the first of equal dates wins.
    """
    dated = [r.expected_at for r in pending if r.expected_at is not None]
    if not dated:
        return None
    return min(dated)


async def build_dashboard(
    db: AsyncSession,
    user_id: int,
    now: datetime | None = None,
) -> list[DashboardAsset]:
    """
    Collect the user's assets that have at least one pending record.

    All reads happen up front; a store failure aborts the whole build.

    Raises:
        StoreFailure: If any read fails
    """
    now = now or datetime.now()

    try:
        result = await db.execute(asset_queries.select_assets_for_owner(user_id))
        assets = list(result.scalars().all())

        records: list[MaintenanceRecord] = []
        if assets:
            stmt = maintenance_queries.select_records_for_assets([a.id for a in assets])
            result = await db.execute(stmt)
            records = list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Dashboard reads failed for user %s", user_id)
        raise StoreFailure("Failed to load dashboard") from exc

    records_by_asset: dict[int, list[MaintenanceRecord]] = defaultdict(list)
    for record in records:
        records_by_asset[record.asset_id].append(record)

    entries = []
    for asset in assets:
        maintenances = records_by_asset.get(asset.id, [])
        pending = [r for r in maintenances if is_pending(r)]
        if not pending:
            continue

        serialized = [MaintenanceRead.from_record(r, now) for r in maintenances]
        pending_urgencies = [m.status.urgency for m in serialized if m.done is not True]

        entries.append(
            DashboardAsset(
                id=asset.id,
                user_id=asset.user_id,
                name=asset.name,
                description=asset.description,
                created_at=asset.created_at,
                updated_at=asset.updated_at,
                maintenances=serialized,
                most_relevant_maintenance_date=most_relevant_date(pending),
                pending_count=len(pending),
                highest_urgency=max(pending_urgencies, key=lambda u: u.rank),
            )
        )

    logger.debug("Dashboard for user %s: %d of %d assets pending", user_id, len(entries), len(assets))
    return entries


def sort_dashboard(entries: list[DashboardAsset], mode: SortMode = SortMode.URGENCY) -> list[DashboardAsset]:
    """
    Order dashboard entries.

    urgency: earliest most_relevant_maintenance_date first, undated last.
    name_asc / name_desc: case-insensitive by asset name.
    Ties keep their input order.
    """
    if mode is SortMode.NAME_ASC:
        return sorted(entries, key=lambda e: e.name.casefold())
    if mode is SortMode.NAME_DESC:
        return sorted(entries, key=lambda e: e.name.casefold(), reverse=True)
    return sorted(
        entries,
        key=lambda e: (
            e.most_relevant_maintenance_date is None,
            e.most_relevant_maintenance_date or date.min,
        ),
    )


def count_dashboard(entries: list[DashboardAsset]) -> DashboardCounts:
    """Totals of pending, overdue and upcoming records across the entries."""
    counts = DashboardCounts(assets=len(entries))
    for entry in entries:
        counts.pending += entry.pending_count
        for maintenance in entry.maintenances:
            if maintenance.status.status is StatusCode.OVERDUE:
                counts.overdue += 1
            elif maintenance.status.status is StatusCode.UPCOMING:
                counts.upcoming += 1
    return counts
