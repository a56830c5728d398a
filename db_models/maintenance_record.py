# db_models/maintenance_record.py
"""
Maintenance record model.

A record belongs to exactly one asset. Ownership is resolved through
`asset.user_id`; the record never stores its owner.
"""
from datetime import date, datetime

from sqlalchemy import ForeignKey, String, Text, Boolean, Date, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    service: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Calendar dates, serialized as YYYY-MM-DD
    expected_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    performed_at: Mapped[date | None] = mapped_column(Date, nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # NULL means "not recorded"; only True counts as completed
    done: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Recurrence hints for the next service
    condition_next_maintenance: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    date_next_maintenance: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    asset: Mapped["Asset"] = relationship(
        "Asset",
        back_populates="maintenance_records",
    )
