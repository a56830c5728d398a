# api/maintenance/models.py
"""
Pydantic models for maintenance record endpoints.

Dates cross the API as ISO calendar dates (YYYY-MM-DD).
"""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .status import MaintenanceStatus, classify


class MaintenanceCreate(BaseModel):
    """Request to log a maintenance record against an asset."""
    service: str = Field(..., min_length=1, max_length=255)
    expected_at: date | None = None
    performed_at: date | None = None
    description: str | None = None
    done: bool | None = None
    condition_next_maintenance: str | None = Field(None, max_length=255)
    date_next_maintenance: date | None = None

    @field_validator("service")
    @classmethod
    def strip_service(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Service name is required")
        return value


class MaintenanceUpdate(BaseModel):
    """
    Partial update.

    Omitted fields are left alone; an explicit ``null`` clears a nullable
    field. ``service`` can be changed but never cleared.
    """
    service: str | None = Field(None, min_length=1, max_length=255)
    expected_at: date | None = None
    performed_at: date | None = None
    description: str | None = None
    done: bool | None = None
    condition_next_maintenance: str | None = Field(None, max_length=255)
    date_next_maintenance: date | None = None

    @field_validator("service")
    @classmethod
    def strip_service(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Service name cannot be null")
        value = value.strip()
        if not value:
            raise ValueError("Service name is required")
        return value

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class MaintenanceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    service: str
    expected_at: date | None = None
    performed_at: date | None = None
    description: str | None = None
    done: bool | None = None
    condition_next_maintenance: str | None = None
    date_next_maintenance: date | None = None
    created_at: datetime
    updated_at: datetime

    # Derived at read time, never stored
    status: MaintenanceStatus

    @classmethod
    def from_record(cls, record, now: datetime | None = None) -> "MaintenanceRead":
        """Serialize an ORM record and attach its status as of ``now``."""
        return cls(
            id=record.id,
            asset_id=record.asset_id,
            service=record.service,
            expected_at=record.expected_at,
            performed_at=record.performed_at,
            description=record.description,
            done=record.done,
            condition_next_maintenance=record.condition_next_maintenance,
            date_next_maintenance=record.date_next_maintenance,
            created_at=record.created_at,
            updated_at=record.updated_at,
            status=classify(record.expected_at, record.done, now),
        )
