"""Domain models for logged usage and derived summaries."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class LogEntry:
    """One occurrence of an activity.

    Name and gallons are copied from the catalog when the entry is created so
    later catalog changes never alter historical totals. ``timestamp`` is in
    milliseconds since the epoch and is only ``None`` for seeded data.
    """

    id: int
    name: str
    gallons: float
    timestamp: int | None = None


@dataclass(frozen=True)
class AggregatedActivity:
    """An activity with the number of times it occurred in a day."""

    id: int
    name: str
    gallons: float
    count: int

    @property
    def total_gallons(self) -> float:
        return self.gallons * self.count


@dataclass(frozen=True)
class DayTotal:
    """Total gallons used on a calendar day."""

    day: date
    total: float


@dataclass(frozen=True)
class BudgetStatus:
    """Budget evaluation for a day's total."""

    total: float
    budget: float
    raw_percent: float
    display_percent: float
    over_budget: bool
