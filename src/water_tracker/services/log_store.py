"""Session-scoped store of logged activities."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, tzinfo

from water_tracker.domain.activities import (
    ACTIVITY_CATALOG,
    ActivityTemplate,
    find_activity,
)
from water_tracker.domain.errors import UnknownActivityError
from water_tracker.domain.usage import LogEntry
from water_tracker.services.usage import is_same_day, to_timestamp


@dataclass
class LogStore:
    """Append-only sequence of log entries owned by one dashboard session.

    Entries are kept in append order. Seeded history arrives sorted by
    timestamp; user appends are stamped with the current instant.
    """

    entries: list[LogEntry] = field(default_factory=list)
    catalog: tuple[ActivityTemplate, ...] = ACTIVITY_CATALOG
    tz: tzinfo = UTC

    def append(self, activity_id: int, now: datetime) -> LogEntry:
        """Log one occurrence of a catalog activity at ``now``."""
        entry = self.build_entry(activity_id, now)
        self.add(entry)
        return entry

    def build_entry(self, activity_id: int, now: datetime) -> LogEntry:
        """Return a new entry for a catalog activity without storing it."""
        activity = find_activity(activity_id, self.catalog)
        if activity is None:
            raise UnknownActivityError(activity_id)
        return LogEntry(
            id=activity.id,
            name=activity.name,
            gallons=activity.gallons,
            timestamp=to_timestamp(now),
        )

    def add(self, entry: LogEntry) -> None:
        """Append an already built entry."""
        self.entries.append(entry)

    def seed(self, entries: list[LogEntry]) -> None:
        """Load previously recorded history into the store."""
        self.entries.extend(entries)

    def latest_index_on_day(self, activity_id: int, day: date) -> int | None:
        """Return the position of the last-appended match on ``day``.

        The scan runs backward by position, so the structurally latest match
        wins even if timestamps are out of order.
        """
        for index in range(len(self.entries) - 1, -1, -1):
            entry = self.entries[index]
            if (
                entry.id == activity_id
                and entry.timestamp is not None
                and is_same_day(entry.timestamp, day, self.tz)
            ):
                return index
        return None

    def remove_latest_on_day(self, activity_id: int, day: date) -> LogEntry | None:
        """Remove the last-appended entry for the activity on ``day``.

        Returns ``None`` when nothing matches.
        """
        index = self.latest_index_on_day(activity_id, day)
        if index is None:
            return None
        return self.entries.pop(index)

    def pop(self, index: int) -> LogEntry:
        """Remove and return the entry at ``index``."""
        return self.entries.pop(index)

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of the current entries."""
        return list(self.entries)
