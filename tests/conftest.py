"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from goalkernel.db import get_session
from goalkernel.goals.definitions import (
    ActivityType,
    DateWindowKind,
    DiscreteOption,
    Goal,
    Polarity,
    TrackingKind,
    ValueShape,
)
from goalkernel.main import app

# 2026-02-09 is a Monday; the week closes on Sunday 2026-02-15.
MONDAY = date(2026, 2, 9)
WEDNESDAY = date(2026, 2, 11)
SUNDAY = date(2026, 2, 15)


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession; serves rows per table name."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables = tables or {}
        self.statements: list[tuple[str, dict]] = []

    async def execute(self, stmt, params=None):
        sql = str(stmt)
        self.statements.append((sql, params or {}))
        for table, rows in self.tables.items():
            if f"FROM {table} " in sql:
                return FakeResult(rows)
        return FakeResult([])

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (fill `tables` in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def make_goal(**overrides: Any) -> Goal:
    defaults: dict[str, Any] = dict(
        id="goal-1",
        activity_type_id="water",
        target_value=8.0,
        date_window=DateWindowKind.weekly,
        tracking=TrackingKind.sum,
        created_at=date(2026, 1, 1),
        name="Drink water",
    )
    defaults.update(overrides)
    return Goal(**defaults)


def make_activity_type(**overrides: Any) -> ActivityType:
    defaults: dict[str, Any] = dict(
        id="water",
        value_shape=ValueShape.continuous_range,
        polarity=Polarity.positive,
        name="Water",
        unit="glass",
        incremental=True,
    )
    defaults.update(overrides)
    return ActivityType(**defaults)


def make_toggle(**overrides: Any) -> ActivityType:
    defaults: dict[str, Any] = dict(
        id="meds",
        value_shape=ValueShape.binary_toggle,
        polarity=Polarity.positive,
        name="Took medication",
        options=(DiscreteOption("No", 0.0), DiscreteOption("Yes", 1.0)),
        incremental=False,
    )
    defaults.update(overrides)
    return make_activity_type(**defaults)


def make_log(activity_type_id: str, values: dict[date, float]) -> dict[date, dict[str, float]]:
    """Helper to build an activity log for a single activity type."""
    return {d: {activity_type_id: v} for d, v in values.items()}


def make_goal_row(**overrides: Any) -> dict[str, Any]:
    """Helper to build a fake goals row dict."""
    row: dict[str, Any] = {
        "id": "goal-1",
        "activity_type_id": "water",
        "name": "Drink water",
        "target_value": 8,
        "icon": "hydration",
        "date_type": "weekly",
        "tracking_type": "sum",
        "target_date": None,
        "start_date": None,
        "end_date": None,
        "created_at": "2026-01-01T09:30:00+00:00",
    }
    row.update(overrides)
    return row


def make_activity_type_row(**overrides: Any) -> dict[str, Any]:
    """Helper to build a fake activity_types row dict."""
    row: dict[str, Any] = {
        "id": "water",
        "name": "Water",
        "unit": "glass",
        "goal_type": "positive",
        "is_negative": None,
        "ui_type": "increment",
        "min_value": None,
        "max_value": None,
        "step": 1,
        "button_options": None,
        "fixed_value": None,
        "deleted": False,
        "display_order": 0,
    }
    row.update(overrides)
    return row


def make_activity_row(day: date, value: float, activity_type_id: str = "water") -> dict[str, Any]:
    return {"date": day, "activity_type_id": activity_type_id, "value": value}
