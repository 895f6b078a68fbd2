"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from water_tracker.adapters.supabase_activity_log_repository import (
    SupabaseActivityLogRepository,
)
from water_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def gte(self, _column: str, _value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self

    def lt(self, _column: str, _value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    profile_table = client.table("profile")
    profile_id = str(uuid4())
    row = {
        "profile_id": profile_id,
        "profile_username": "river",
        "profile_email": "river@example.com",
        "profile_password_hash": "hash",
        "profile_base_goal_liters": None,
        "profile_reduction_percent": 10,
        "profile_daily_budget_gallons": 60,
        "profile_created_at": "2026-01-02T03:04:05+00:00",
    }
    profile_table.queue("insert", [row])
    profile_table.queue("select", [row])

    repository = SupabaseProfileRepository(client)
    created = repository.create_profile("river", "river@example.com", "hash")
    fetched = repository.get_by_email("river@example.com")

    assert str(created.id) == profile_id
    assert profile_table.last_payload == {
        "profile_username": "river",
        "profile_email": "river@example.com",
        "profile_password_hash": "hash",
    }
    assert fetched is not None
    assert fetched.base_goal_liters == 110
    assert fetched.reduction_percent == 10
    assert fetched.daily_budget_gallons == 60
    assert fetched.created_at == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_supabase_profile_repository_email_exists() -> None:
    client = FakeSupabaseClient()
    client.table("profile").queue("select", [{"profile_id": str(uuid4())}])

    repository = SupabaseProfileRepository(client)

    assert repository.email_exists("river@example.com") is True
    assert repository.email_exists("brook@example.com") is False
    assert repository.get_by_email("brook@example.com") is None


def test_supabase_profile_repository_raises_on_failed_insert() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_profile("river", "river@example.com", "hash")


def test_supabase_activity_log_repository() -> None:
    client = FakeSupabaseClient()
    log_table = client.table("activity_log")
    log_id = str(uuid4())
    user_id = uuid4()
    logged_at = datetime(2026, 4, 1, 7, 30, tzinfo=UTC)
    log_table.queue("insert", [{"activity_log_id": log_id}])
    log_table.queue(
        "select",
        [
            {
                "activity_log_id": log_id,
                "activity_log_activity_id": 1,
                "activity_log_name": "5 Minute Shower",
                "activity_log_gallons": 15,
                "activity_log_logged_at": logged_at.isoformat(),
            }
        ],
    )

    repository = SupabaseActivityLogRepository(client)
    created_id = repository.create_log(
        user_id,
        activity_id=1,
        name="5 Minute Shower",
        gallons=15,
        logged_at=logged_at,
    )
    rows = repository.list_logs(user_id, logged_at, logged_at)
    repository.delete_log(user_id, 1, logged_at)

    assert str(created_id) == log_id
    assert rows[0].activity_id == 1
    assert rows[0].gallons == 15
    assert rows[0].logged_at == logged_at
    assert log_table.actions == ["insert", "select", "delete"]
    assert ("activity_log_activity_id", 1) in log_table.last_filters
