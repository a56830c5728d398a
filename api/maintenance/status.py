# api/maintenance/status.py
"""
Maintenance status classification.

Derives a display status, an urgency tier and a severity tag from a
record's expected date and completion flag. Pure: the same
``(expected_at, done, now)`` always gives the same result.

Overdue is an instant comparison (a bare date means midnight local time),
while the seven-day "upcoming" window compares calendar dates only. A
record due later today is therefore upcoming with 0 days left, but a
record dated today becomes overdue as soon as midnight has passed.
"""
import math
from datetime import date, datetime, time, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict

UPCOMING_WINDOW_DAYS = 7


class StatusCode(str, Enum):
    COMPLETED = "COMPLETED"
    INVALID = "INVALID"
    OVERDUE = "OVERDUE"
    UPCOMING = "UPCOMING"
    SCHEDULED = "SCHEDULED"


class Urgency(str, Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]


_URGENCY_RANK = {
    Urgency.NONE: 0,
    Urgency.LOW: 1,
    Urgency.MEDIUM: 2,
    Urgency.HIGH: 3,
}


class MaintenanceStatus(BaseModel):
    """Classifier output, embedded in maintenance responses."""
    model_config = ConfigDict(frozen=True)

    status: StatusCode
    urgency: Urgency
    label: str
    severity: str
    is_urgent: bool
    days_until: int | None = None


def _parse_expected(value) -> datetime | None:
    """Turn a date, datetime or ISO string into a datetime; None if unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _local(moment: datetime) -> datetime:
    """Naive local wall-clock time. Naive inputs are already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def classify(expected_at, done: bool | None, now: datetime | None = None) -> MaintenanceStatus:
    """
    Classify one maintenance record.

    Args:
        expected_at: date, datetime, ISO-8601 string or None
        done: completion flag; only ``True`` counts as completed
        now: reference instant, defaults to the current local time
    """
    if done is True:
        return MaintenanceStatus(
            status=StatusCode.COMPLETED,
            urgency=Urgency.NONE,
            label="Completed",
            severity="success",
            is_urgent=False,
        )

    expected = _parse_expected(expected_at)
    if expected is None:
        return MaintenanceStatus(
            status=StatusCode.INVALID,
            urgency=Urgency.NONE,
            label="Invalid date",
            severity="disabled",
            is_urgent=False,
        )

    expected = _local(expected)
    now = _local(now if now is not None else datetime.now())

    if expected < now:
        return MaintenanceStatus(
            status=StatusCode.OVERDUE,
            urgency=Urgency.HIGH,
            label="Overdue",
            severity="error",
            is_urgent=True,
        )

    diff = datetime.combine(expected.date(), time.min) - datetime.combine(now.date(), time.min)
    diff_days = math.ceil(diff / timedelta(days=1))

    if diff_days <= UPCOMING_WINDOW_DAYS:
        return MaintenanceStatus(
            status=StatusCode.UPCOMING,
            urgency=Urgency.MEDIUM,
            label=f"Upcoming ({diff_days}d)",
            severity="warning",
            is_urgent=True,
            days_until=diff_days,
        )

    return MaintenanceStatus(
        status=StatusCode.SCHEDULED,
        urgency=Urgency.LOW,
        label="Scheduled",
        severity="info",
        is_urgent=False,
    )
