"""Dashboard sessions that own a user's log store."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from water_tracker.domain.models import ProfileRecord
from water_tracker.services.history import HistoryProvider
from water_tracker.services.log_store import LogStore
from water_tracker.services.usage import validate_budget

_logger = logging.getLogger(__name__)

SESSION_TTL_SECONDS = 14 * 24 * 60 * 60


@dataclass
class DashboardSession:
    """State for one signed-in user: profile, budget, timezone and logs."""

    id: UUID
    profile: ProfileRecord
    budget: float
    tz: ZoneInfo
    store: LogStore
    last_seen_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def now(self) -> datetime:
        """Return the current instant in the session timezone."""
        return datetime.now(tz=self.tz)


@dataclass
class SessionRegistry:
    """Creates and tracks dashboard sessions in process memory.

    Sessions unused for ``ttl_seconds`` are dropped on the next ``open`` or
    ``get``, matching the lifetime of the session cookie.
    """

    history: HistoryProvider
    default_budget: float
    timezone_name: str = "UTC"
    ttl_seconds: int = SESSION_TTL_SECONDS
    _sessions: dict[UUID, DashboardSession] = field(default_factory=dict)

    def open(
        self, profile: ProfileRecord, now: datetime | None = None
    ) -> DashboardSession:
        """Start a session for the profile, seeded from history."""
        tz = ZoneInfo(self.timezone_name)
        resolved_now = (now or datetime.now(tz=tz)).astimezone(tz)
        self._evict_expired(resolved_now)
        budget = (
            profile.daily_budget_gallons
            if profile.daily_budget_gallons is not None
            else self.default_budget
        )
        store = LogStore(tz=tz)
        store.seed(self.history.load(profile.id, resolved_now))
        session = DashboardSession(
            id=uuid4(),
            profile=profile,
            budget=validate_budget(budget),
            tz=tz,
            store=store,
            last_seen_at=resolved_now,
        )
        self._sessions[session.id] = session
        _logger.info(
            "Session opened: session_id=%s profile_id=%s entries=%s",
            session.id,
            profile.id,
            len(store.entries),
        )
        return session

    def get(
        self, session_id: UUID, now: datetime | None = None
    ) -> DashboardSession | None:
        """Return an open, unexpired session by id and mark it as seen."""
        resolved_now = now or datetime.now(tz=UTC)
        self._evict_expired(resolved_now)
        session = self._sessions.get(session_id)
        if session is not None:
            session.last_seen_at = resolved_now
        return session

    def close(self, session_id: UUID) -> None:
        """Drop a session; unknown ids are ignored."""
        if self._sessions.pop(session_id, None) is not None:
            _logger.info("Session closed: session_id=%s", session_id)

    def _evict_expired(self, now: datetime) -> None:
        cutoff = now - timedelta(seconds=self.ttl_seconds)
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.last_seen_at <= cutoff
        ]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            _logger.info("Expired sessions evicted: count=%s", len(expired))
