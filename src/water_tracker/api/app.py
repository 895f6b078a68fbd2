"""FastAPI application factory."""

import logging
from importlib.metadata import PackageNotFoundError, version
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from starlette.middleware.sessions import SessionMiddleware

from water_tracker.api.dashboard import SESSION_KEY
from water_tracker.api.dashboard import router as dashboard_router
from water_tracker.api.models import SignInRequest, SignUpRequest
from water_tracker.app_logging import configure_logging
from water_tracker.containers import AppContainer
from water_tracker.domain.activities import (
    ACTIVITY_CATALOG,
    QUICK_LOG_COUNT,
    ActivityTemplate,
)
from water_tracker.domain.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    SignupValidationError,
)
from water_tracker.domain.models import ProfileRecord

PACKAGE_NAME = "water-tracker"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    app.add_middleware(
        SessionMiddleware,
        secret_key=container.settings.session_secret,
        same_site="lax",
        https_only=container.settings.session_https_only,
        max_age=container.settings.session_max_age_seconds,
    )

    app.include_router(dashboard_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/version")
    async def app_version(request: Request) -> dict[str, str]:
        """Return the running package version."""
        state_container: AppContainer = request.app.state.container
        return {
            "version": _package_version(),
            "environment": state_container.settings.environment,
        }

    @app.get("/activities")
    async def activities() -> dict[str, object]:
        """Return the activity catalog split into quick and extra activities."""
        return {
            "quick": [
                _activity_payload(a) for a in ACTIVITY_CATALOG[:QUICK_LOG_COUNT]
            ],
            "more": [_activity_payload(a) for a in ACTIVITY_CATALOG[QUICK_LOG_COUNT:]],
        }

    @app.post("/signup", status_code=status.HTTP_201_CREATED)
    async def signup(payload: SignUpRequest, request: Request) -> dict[str, object]:
        """Create a new profile."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.user_service.sign_up(
                username=payload.username,
                email=payload.email,
                password=payload.password,
            )
        except SignupValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except DuplicateEmailError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        except RuntimeError as exc:
            logger.exception("Failed to create profile")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_format_error(
                    state_container, exc, "Couldn't create your account."
                ),
            ) from exc
        return {"profile": _profile_payload(profile)}

    @app.post("/login")
    async def login(payload: SignInRequest, request: Request) -> dict[str, object]:
        """Authenticate and start a dashboard session."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.user_service.authenticate(
                payload.email, payload.password
            )
        except InvalidCredentialsError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        previous = request.session.get(SESSION_KEY)
        if previous:
            _close_session(state_container, previous)
        session = state_container.session_registry.open(profile)
        request.session[SESSION_KEY] = str(session.id)
        return {"profile": _profile_payload(profile), "budget": session.budget}

    @app.post("/logout")
    async def logout(request: Request) -> dict[str, str]:
        """End the current dashboard session."""
        state_container: AppContainer = request.app.state.container
        raw_id = request.session.pop(SESSION_KEY, None)
        if raw_id:
            _close_session(state_container, raw_id)
        return {"status": "ok"}

    return app


def _close_session(state_container: AppContainer, raw_id: str) -> None:
    """Close a session referenced by a cookie value, ignoring bad ids."""
    try:
        session_id = UUID(raw_id)
    except ValueError:
        return
    state_container.session_registry.close(session_id)


def _format_error(
    state_container: AppContainer, exc: Exception, fallback: str
) -> str:
    """Return a user-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback


def _package_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


def _profile_payload(profile: ProfileRecord) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "username": profile.username,
        "email": profile.email,
        "base_goal_liters": profile.base_goal_liters,
        "reduction_percent": profile.reduction_percent,
        "daily_budget_gallons": profile.daily_budget_gallons,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
    }


def _activity_payload(activity: ActivityTemplate) -> dict[str, object]:
    return {"id": activity.id, "name": activity.name, "gallons": activity.gallons}
