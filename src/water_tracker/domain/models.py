"""Domain models for the water tracker."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DEFAULT_BASE_GOAL_LITERS = 110
DEFAULT_REDUCTION_PERCENT = 0


@dataclass(frozen=True)
class ProfileRecord:
    """Represents a user profile stored in the database."""

    id: UUID
    username: str
    email: str
    password_hash: str
    base_goal_liters: int = DEFAULT_BASE_GOAL_LITERS
    reduction_percent: int = DEFAULT_REDUCTION_PERCENT
    daily_budget_gallons: float | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class StoredLogEntry:
    """A persisted activity log row."""

    log_id: UUID
    activity_id: int
    name: str
    gallons: float
    logged_at: datetime
