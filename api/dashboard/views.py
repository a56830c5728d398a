# api/dashboard/views.py
"""
Maintenance dashboard endpoint.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import DashboardResponse, SortMode
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Assets with pending maintenance",
)
async def get_dashboard_endpoint(
    current_user: CurrentUser,
    sort: SortMode = Query(SortMode.URGENCY, description="urgency, name_asc or name_desc"),
    db: AsyncSession = Depends(get_session),
) -> DashboardResponse:
    """
    List the current user's assets that still have pending maintenance.

    Each asset carries its full maintenance history with statuses and the
    earliest expected date among its pending records.
    """
    now = datetime.now()
    entries = await db_manager.build_dashboard(db, current_user.id, now)
    entries = db_manager.sort_dashboard(entries, sort)

    return DashboardResponse(
        sort=sort,
        generated_at=now,
        counts=db_manager.count_dashboard(entries),
        assets=entries,
    )
