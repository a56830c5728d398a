# api/assets/models.py
"""
Pydantic models for asset endpoints.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetCreate(BaseModel):
    """Request to register a new asset. The owner is always the requester."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class AssetUpdate(BaseModel):
    """
    Partial update.

    Omitted fields are left alone. ``description: null`` clears the
    description; ``name: null`` is rejected because a name is required.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Asset name cannot be null")
        return value

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class AssetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
