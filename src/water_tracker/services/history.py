"""History providers that seed a dashboard session's log store."""

import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from water_tracker.domain.activities import ACTIVITY_CATALOG, ActivityTemplate
from water_tracker.domain.models import StoredLogEntry
from water_tracker.domain.usage import LogEntry
from water_tracker.services.usage import WEEK_DAYS, to_local, to_timestamp

_logger = logging.getLogger(__name__)

DEMO_FIRST_HOUR = 6
DEMO_HOUR_SPAN = 16
DEMO_MAX_ENTRIES_PER_DAY = 3


class HistoryProvider(Protocol):
    """Source of prior log entries for a user."""

    def load(self, user_id: UUID, now: datetime) -> list[LogEntry]:
        """Return the user's recent entries sorted by timestamp."""

    def record(self, user_id: UUID, entry: LogEntry) -> None:
        """Persist a newly appended entry."""

    def forget(self, user_id: UUID, entry: LogEntry) -> None:
        """Remove a previously persisted entry."""


class ActivityLogRepository(Protocol):
    """Persistence interface for activity logs."""

    def list_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[StoredLogEntry]:
        """Return logs within a time range ordered by logged_at."""

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        activity_id: int,
        name: str,
        gallons: float,
        logged_at: datetime,
    ) -> UUID:
        """Insert a log row and return its id."""

    def delete_log(self, user_id: UUID, activity_id: int, logged_at: datetime) -> None:
        """Delete the log row for an activity at an instant."""


def generate_demo_logs(
    now: datetime,
    rng: random.Random,
    catalog: tuple[ActivityTemplate, ...] = ACTIVITY_CATALOG,
) -> list[LogEntry]:
    """Generate a week of random entries ending on ``now``'s day.

    Each day gets one to three entries between 6:00 and 21:59 local time.
    """
    logs = []
    for day_offset in range(WEEK_DAYS):
        day = now - timedelta(days=day_offset)
        for _ in range(1 + rng.randrange(DEMO_MAX_ENTRIES_PER_DAY)):
            activity = rng.choice(catalog)
            logged_at = day.replace(
                hour=DEMO_FIRST_HOUR + rng.randrange(DEMO_HOUR_SPAN),
                minute=rng.randrange(60),
                second=0,
                microsecond=0,
            )
            logs.append(
                LogEntry(
                    id=activity.id,
                    name=activity.name,
                    gallons=activity.gallons,
                    timestamp=to_timestamp(logged_at),
                )
            )
    logs.sort(key=lambda entry: entry.timestamp or 0)
    return logs


@dataclass
class RandomDemoHistory(HistoryProvider):
    """Random demonstration history, reproducible when seeded."""

    seed: int | None = None

    def load(self, user_id: UUID, now: datetime) -> list[LogEntry]:
        """Return a freshly generated week of demo entries."""
        return generate_demo_logs(now, random.Random(self.seed))

    def record(self, user_id: UUID, entry: LogEntry) -> None:
        """Demo history is not persisted."""

    def forget(self, user_id: UUID, entry: LogEntry) -> None:
        """Demo history is not persisted."""


@dataclass
class PersistedHistory(HistoryProvider):
    """History backed by the activity log repository."""

    repository: ActivityLogRepository

    def load(self, user_id: UUID, now: datetime) -> list[LogEntry]:
        """Return the trailing week of stored entries."""
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start = midnight - timedelta(days=WEEK_DAYS - 1)
        end = midnight + timedelta(days=1)
        rows = self.repository.list_logs(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        _logger.info("Loaded history: user_id=%s entries=%s", user_id, len(rows))
        return [
            LogEntry(
                id=row.activity_id,
                name=row.name,
                gallons=row.gallons,
                timestamp=to_timestamp(row.logged_at),
            )
            for row in rows
        ]

    def record(self, user_id: UUID, entry: LogEntry) -> None:
        """Insert the entry into the activity log table."""
        if entry.timestamp is None:
            return
        self.repository.create_log(
            user_id,
            activity_id=entry.id,
            name=entry.name,
            gallons=entry.gallons,
            logged_at=to_local(entry.timestamp),
        )

    def forget(self, user_id: UUID, entry: LogEntry) -> None:
        """Delete the entry from the activity log table."""
        if entry.timestamp is None:
            return
        self.repository.delete_log(
            user_id, activity_id=entry.id, logged_at=to_local(entry.timestamp)
        )
