# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel

from api.maintenance.models import MaintenanceRead
from api.maintenance.status import Urgency


class SortMode(str, Enum):
    URGENCY = "urgency"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


class DashboardAsset(BaseModel):
    """An asset with at least one pending maintenance record."""
    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    # Full history, not just the pending records
    maintenances: list[MaintenanceRead]

    # Earliest expected_at among pending records; None if none is dated
    most_relevant_maintenance_date: date | None = None
    pending_count: int
    highest_urgency: Urgency


class DashboardCounts(BaseModel):
    """Totals across every asset shown on the dashboard."""
    assets: int = 0
    pending: int = 0
    overdue: int = 0
    upcoming: int = 0


class DashboardResponse(BaseModel):
    sort: SortMode
    generated_at: datetime
    counts: DashboardCounts
    assets: list[DashboardAsset]
