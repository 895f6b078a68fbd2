"""Dashboard API endpoints scoped to the signed-in session."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from water_tracker.api.models import LogActivityRequest
from water_tracker.domain.errors import UnknownActivityError
from water_tracker.services.sessions import DashboardSession  # noqa: TC001

if TYPE_CHECKING:
    from water_tracker.containers import AppContainer
    from water_tracker.domain.usage import AggregatedActivity, BudgetStatus
    from water_tracker.services.dashboard import DashboardSummary, DayDetail

SESSION_KEY = "session_id"

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def require_session(request: Request) -> DashboardSession:
    """Resolve the dashboard session referenced by the session cookie."""
    container: AppContainer = request.app.state.container
    raw_id = request.session.get(SESSION_KEY)
    session = None
    if raw_id:
        try:
            session = container.session_registry.get(UUID(raw_id))
        except ValueError:
            session = None
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session


@router.get("")
async def dashboard(
    request: Request, session: DashboardSession = Depends(require_session)
) -> dict[str, object]:
    """Return today's usage and the trailing week."""
    container: AppContainer = request.app.state.container
    return _summary_payload(container.dashboard_service.today(session))


@router.post("/logs")
async def log_activity(
    payload: LogActivityRequest,
    request: Request,
    session: DashboardSession = Depends(require_session),
) -> dict[str, object]:
    """Log one occurrence of a catalog activity now."""
    container: AppContainer = request.app.state.container
    try:
        summary = container.dashboard_service.log_activity(
            session, payload.activity_id
        )
    except UnknownActivityError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _summary_payload(summary)


@router.delete("/logs/{activity_id}")
async def remove_activity(
    activity_id: int,
    request: Request,
    session: DashboardSession = Depends(require_session),
) -> dict[str, object]:
    """Remove today's most recent occurrence of an activity."""
    container: AppContainer = request.app.state.container
    return _summary_payload(
        container.dashboard_service.remove_activity(session, activity_id)
    )


@router.get("/days/{day}")
async def day_detail(
    day: date,
    request: Request,
    session: DashboardSession = Depends(require_session),
) -> dict[str, object]:
    """Return the read-only breakdown for a selected day."""
    container: AppContainer = request.app.state.container
    return _detail_payload(container.dashboard_service.day_detail(session, day))


def _summary_payload(summary: DashboardSummary) -> dict[str, object]:
    return {
        "day": summary.day.isoformat(),
        "gallons_used": summary.gallons_used,
        "budget": _budget_payload(summary.budget),
        "activities": [_activity_payload(item) for item in summary.activities],
        "week": [
            {
                "day": entry.day.isoformat(),
                "label": entry.label,
                "total": entry.total,
                "display_percent": entry.display_percent,
            }
            for entry in summary.week
        ],
    }


def _detail_payload(detail: DayDetail) -> dict[str, object]:
    return {
        "day": detail.day.isoformat(),
        "label": detail.label,
        "gallons_used": detail.gallons_used,
        "budget": _budget_payload(detail.budget),
        "activities": [_activity_payload(item) for item in detail.activities],
        "entries": [
            {
                "id": entry.id,
                "name": entry.name,
                "gallons": entry.gallons,
                "time": entry.time,
            }
            for entry in detail.entries
        ],
    }


def _budget_payload(budget: BudgetStatus) -> dict[str, object]:
    return {
        "budget": budget.budget,
        "raw_percent": budget.raw_percent,
        "display_percent": budget.display_percent,
        "over_budget": budget.over_budget,
    }


def _activity_payload(activity: AggregatedActivity) -> dict[str, object]:
    return {
        "id": activity.id,
        "name": activity.name,
        "gallons": activity.gallons,
        "count": activity.count,
        "total_gallons": activity.total_gallons,
    }
