"""Daily aggregation, weekly summaries and budget evaluation."""

import math
from datetime import UTC, date, datetime, timedelta, tzinfo

from water_tracker.domain.errors import InvalidBudgetError
from water_tracker.domain.usage import (
    AggregatedActivity,
    BudgetStatus,
    DayTotal,
    LogEntry,
)

WEEK_DAYS = 7
NOON = 12


def to_timestamp(moment: datetime) -> int:
    """Return milliseconds since the epoch for an aware datetime."""
    return int(moment.timestamp() * 1000)


def to_local(timestamp: int, tz: tzinfo = UTC) -> datetime:
    """Convert an epoch-milliseconds timestamp to a datetime in ``tz``."""
    return datetime.fromtimestamp(timestamp / 1000, tz=tz)


def is_same_day(timestamp: int, day: date, tz: tzinfo = UTC) -> bool:
    """Return True when the instant falls on ``day`` in local time.

    Compares local year, month and day of month, not a rolling 24-hour window.
    """
    return to_local(timestamp, tz).date() == day


def entries_on_day(
    logs: list[LogEntry], day: date, tz: tzinfo = UTC
) -> list[LogEntry]:
    """Return entries with a timestamp on ``day``, in store order."""
    return [
        entry
        for entry in logs
        if entry.timestamp is not None and is_same_day(entry.timestamp, day, tz)
    ]


def aggregate_day(
    logs: list[LogEntry], day: date, tz: tzinfo = UTC
) -> list[AggregatedActivity]:
    """Group a day's entries by activity id in order of first occurrence."""
    groups: dict[int, AggregatedActivity] = {}
    for entry in entries_on_day(logs, day, tz):
        current = groups.get(entry.id)
        if current is None:
            groups[entry.id] = AggregatedActivity(
                id=entry.id, name=entry.name, gallons=entry.gallons, count=1
            )
            continue
        groups[entry.id] = AggregatedActivity(
            id=current.id,
            name=current.name,
            gallons=current.gallons,
            count=current.count + 1,
        )
    return list(groups.values())


def day_total(logs: list[LogEntry], day: date, tz: tzinfo = UTC) -> float:
    """Return the gallons used on ``day``."""
    return sum((entry.gallons for entry in entries_on_day(logs, day, tz)), 0)


def weekly_totals(
    logs: list[LogEntry], today: date, tz: tzinfo = UTC
) -> list[DayTotal]:
    """Return totals for the trailing seven days, oldest first, today last."""
    totals: dict[date, float] = {}
    for entry in logs:
        if entry.timestamp is None:
            continue
        log_day = to_local(entry.timestamp, tz).date()
        totals[log_day] = totals.get(log_day, 0) + entry.gallons

    week = []
    for offset in range(WEEK_DAYS):
        day = today - timedelta(days=WEEK_DAYS - 1 - offset)
        week.append(DayTotal(day=day, total=totals.get(day, 0)))
    return week


def validate_budget(budget: float) -> float:
    """Return the budget when it is a finite, positive number of gallons."""
    if not math.isfinite(budget) or budget <= 0:
        raise InvalidBudgetError(f"Daily budget must be positive, got {budget}")
    return budget


def evaluate_budget(total: float, budget: float) -> BudgetStatus:
    """Compare a day's total against the budget."""
    validate_budget(budget)
    raw_percent = 100 * total / budget
    return BudgetStatus(
        total=total,
        budget=budget,
        raw_percent=raw_percent,
        display_percent=clamp_percent(raw_percent),
        over_budget=total > budget,
    )


def clamp_percent(percent: float) -> float:
    """Clamp a percentage to [0, 100] for progress indicators."""
    return max(0.0, min(100.0, percent))


def format_time(timestamp: int | None, tz: tzinfo = UTC) -> str:
    """Format a timestamp as a 12-hour clock time like ``7:05 AM``."""
    if timestamp is None:
        return ""
    local = to_local(timestamp, tz)
    hour = local.hour % NOON or NOON
    suffix = "AM" if local.hour < NOON else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def day_label(day: date) -> str:
    """Return a short weekday label such as ``Mon``."""
    return day.strftime("%a")
