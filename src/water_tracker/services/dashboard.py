"""Dashboard views computed from a session's log store."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from water_tracker.domain.usage import AggregatedActivity, BudgetStatus, LogEntry
from water_tracker.services.history import HistoryProvider
from water_tracker.services.sessions import DashboardSession
from water_tracker.services.usage import (
    aggregate_day,
    clamp_percent,
    day_label,
    day_total,
    entries_on_day,
    evaluate_budget,
    format_time,
    weekly_totals,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeekDaySummary:
    """One day of the weekly strip."""

    day: date
    label: str
    total: float
    display_percent: float


@dataclass(frozen=True)
class EntryLine:
    """A single logged entry formatted for display."""

    id: int
    name: str
    gallons: float
    time: str


@dataclass(frozen=True)
class DashboardSummary:
    """Today's usage with the trailing week."""

    day: date
    gallons_used: float
    budget: BudgetStatus
    activities: list[AggregatedActivity]
    week: list[WeekDaySummary]


@dataclass(frozen=True)
class DayDetail:
    """Read-only breakdown for a single day."""

    day: date
    label: str
    gallons_used: float
    budget: BudgetStatus
    activities: list[AggregatedActivity]
    entries: list[EntryLine]


@dataclass
class DashboardService:
    """Service that mutates a session's logs and recomputes its views."""

    history: HistoryProvider

    def today(
        self, session: DashboardSession, now: datetime | None = None
    ) -> DashboardSummary:
        """Return today's aggregate, budget status and weekly totals."""
        today = (now or session.now()).astimezone(session.tz).date()
        logs = session.store.snapshot()
        used = day_total(logs, today, session.tz)
        week = [
            WeekDaySummary(
                day=total.day,
                label=day_label(total.day),
                total=total.total,
                display_percent=clamp_percent(100 * total.total / session.budget),
            )
            for total in weekly_totals(logs, today, session.tz)
        ]
        return DashboardSummary(
            day=today,
            gallons_used=used,
            budget=evaluate_budget(used, session.budget),
            activities=aggregate_day(logs, today, session.tz),
            week=week,
        )

    def day_detail(self, session: DashboardSession, day: date) -> DayDetail:
        """Return the read-only view for a selected day."""
        logs = session.store.snapshot()
        used = day_total(logs, day, session.tz)
        return DayDetail(
            day=day,
            label=day_label(day),
            gallons_used=used,
            budget=evaluate_budget(used, session.budget),
            activities=aggregate_day(logs, day, session.tz),
            entries=[
                _entry_line(entry, session)
                for entry in entries_on_day(logs, day, session.tz)
            ],
        )

    def log_activity(
        self, session: DashboardSession, activity_id: int, now: datetime | None = None
    ) -> DashboardSummary:
        """Append an activity at ``now`` and return the refreshed dashboard."""
        resolved_now = now or session.now()
        entry = session.store.build_entry(activity_id, resolved_now)
        self.history.record(session.profile.id, entry)
        session.store.add(entry)
        _logger.info(
            "Activity logged: session_id=%s activity_id=%s gallons=%s",
            session.id,
            entry.id,
            entry.gallons,
        )
        return self.today(session, resolved_now)

    def remove_activity(
        self, session: DashboardSession, activity_id: int, now: datetime | None = None
    ) -> DashboardSummary:
        """Remove today's latest occurrence of an activity, if any."""
        resolved_now = now or session.now()
        today = resolved_now.astimezone(session.tz).date()
        index = session.store.latest_index_on_day(activity_id, today)
        if index is not None:
            self.history.forget(session.profile.id, session.store.entries[index])
            session.store.pop(index)
            _logger.info(
                "Activity removed: session_id=%s activity_id=%s",
                session.id,
                activity_id,
            )
        return self.today(session, resolved_now)


def _entry_line(entry: LogEntry, session: DashboardSession) -> EntryLine:
    return EntryLine(
        id=entry.id,
        name=entry.name,
        gallons=entry.gallons,
        time=format_time(entry.timestamp, session.tz),
    )
