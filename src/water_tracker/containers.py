"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from water_tracker.adapters.supabase_activity_log_repository import (
    SupabaseActivityLogRepository,
)
from water_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from water_tracker.config import Settings
from water_tracker.services.dashboard import DashboardService
from water_tracker.services.history import (
    HistoryProvider,
    PersistedHistory,
    RandomDemoHistory,
)
from water_tracker.services.sessions import SessionRegistry
from water_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_registry: SessionRegistry
    dashboard_service: DashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    history: HistoryProvider
    if resolved_settings.history_source == "persisted":
        history = PersistedHistory(SupabaseActivityLogRepository(supabase_client))
    else:
        history = RandomDemoHistory(seed=resolved_settings.demo_seed)
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(profile_repository),
        session_registry=SessionRegistry(
            history=history,
            default_budget=resolved_settings.daily_budget_gallons,
            timezone_name=resolved_settings.timezone,
            ttl_seconds=resolved_settings.session_max_age_seconds,
        ),
        dashboard_service=DashboardService(history),
    )
