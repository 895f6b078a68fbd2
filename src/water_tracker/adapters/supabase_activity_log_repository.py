"""Supabase repository for activity logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from water_tracker.domain.models import StoredLogEntry
from water_tracker.services.history import ActivityLogRepository


@dataclass
class SupabaseActivityLogRepository(ActivityLogRepository):
    """Supabase implementation for activity log rows."""

    client: Client

    def list_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[StoredLogEntry]:
        """Return logs in the time range, oldest first."""
        response = (
            self.client.table("activity_log")
            .select(
                "activity_log_id, activity_log_activity_id, activity_log_name, "
                "activity_log_gallons, activity_log_logged_at"
            )
            .eq("activity_log_profile_id", str(user_id))
            .gte("activity_log_logged_at", start.isoformat())
            .lt("activity_log_logged_at", end.isoformat())
            .order("activity_log_logged_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        activity_id: int,
        name: str,
        gallons: float,
        logged_at: datetime,
    ) -> UUID:
        """Insert a log row and return its id."""
        response = (
            self.client.table("activity_log")
            .insert(
                {
                    "activity_log_profile_id": str(user_id),
                    "activity_log_activity_id": activity_id,
                    "activity_log_name": name,
                    "activity_log_gallons": gallons,
                    "activity_log_logged_at": logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create activity log")
        return UUID(str(response.data[0]["activity_log_id"]))

    def delete_log(self, user_id: UUID, activity_id: int, logged_at: datetime) -> None:
        """Delete the row for an activity logged at an instant."""
        (
            self.client.table("activity_log")
            .delete()
            .eq("activity_log_profile_id", str(user_id))
            .eq("activity_log_activity_id", activity_id)
            .eq("activity_log_logged_at", logged_at.isoformat())
            .execute()
        )


def _parse_row(row: dict[str, object]) -> StoredLogEntry:
    return StoredLogEntry(
        log_id=UUID(str(row["activity_log_id"])),
        activity_id=int(row.get("activity_log_activity_id", 0)),
        name=str(row.get("activity_log_name", "")),
        gallons=float(row.get("activity_log_gallons", 0.0)),
        logged_at=datetime.fromisoformat(str(row["activity_log_logged_at"])),
    )
