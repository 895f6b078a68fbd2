"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from water_tracker.domain.models import (
    DEFAULT_BASE_GOAL_LITERS,
    DEFAULT_REDUCTION_PERCENT,
    ProfileRecord,
)
from water_tracker.services.users import ProfileRepository

_PROFILE_COLUMNS = (
    "profile_id, profile_username, profile_email, profile_password_hash, "
    "profile_base_goal_liters, profile_reduction_percent, "
    "profile_daily_budget_gallons, profile_created_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_by_email(self, email: str) -> ProfileRecord | None:
        """Return the profile for an email, if present."""
        response = (
            self.client.table("profile")
            .select(_PROFILE_COLUMNS)
            .eq("profile_email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def email_exists(self, email: str) -> bool:
        """Return True when a profile row uses the email."""
        response = (
            self.client.table("profile")
            .select("profile_id")
            .eq("profile_email", email)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_profile(
        self, username: str, email: str, password_hash: str
    ) -> ProfileRecord:
        """Insert a profile row and return it."""
        response = (
            self.client.table("profile")
            .insert(
                {
                    "profile_username": username,
                    "profile_email": email,
                    "profile_password_hash": password_hash,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> ProfileRecord:
    created_raw = row.get("profile_created_at")
    budget_raw = row.get("profile_daily_budget_gallons")
    base_goal = row.get("profile_base_goal_liters")
    reduction = row.get("profile_reduction_percent")
    return ProfileRecord(
        id=UUID(str(row["profile_id"])),
        username=str(row.get("profile_username", "")),
        email=str(row.get("profile_email", "")),
        password_hash=str(row.get("profile_password_hash", "")),
        base_goal_liters=(
            int(base_goal) if base_goal is not None else DEFAULT_BASE_GOAL_LITERS
        ),
        reduction_percent=(
            int(reduction) if reduction is not None else DEFAULT_REDUCTION_PERCENT
        ),
        daily_budget_gallons=float(budget_raw) if budget_raw is not None else None,
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
