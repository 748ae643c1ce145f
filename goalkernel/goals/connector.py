"""Database connector — async read-only access to goals, activity_types and activities.

Rows come back as plain dicts keyed by column name. The evaluation engine
works on snapshots built from these rows; nothing here writes.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


def _rows(result) -> list[dict[str, Any]]:
    columns = list(result.keys())
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def fetch_goals(
    session: AsyncSession,
    user_id: str | None = None,
) -> Sequence[dict[str, Any]]:
    """All goals, optionally for one user. Returns an empty list when none — never raises."""
    query = (
        "SELECT id, activity_type_id, name, target_value, icon, date_type, "
        "tracking_type, target_date, start_date, end_date, created_at "
        "FROM goals"
    )
    params: dict[str, Any] = {}
    if user_id is not None:
        query += " WHERE user_id = :user_id"
        params["user_id"] = user_id
    query += " ORDER BY created_at"

    result = await session.execute(text(query), params)
    return _rows(result)


async def fetch_activity_types(
    session: AsyncSession,
    user_id: str | None = None,
) -> Sequence[dict[str, Any]]:
    """Non-deleted activity types in display order."""
    query = (
        "SELECT id, name, unit, goal_type, is_negative, ui_type, min_value, "
        "max_value, step, button_options, fixed_value, deleted, display_order "
        "FROM activity_types "
        "WHERE coalesce(deleted, false) = false"
    )
    params: dict[str, Any] = {}
    if user_id is not None:
        query += " AND user_id = :user_id"
        params["user_id"] = user_id
    query += " ORDER BY display_order"

    result = await session.execute(text(query), params)
    return _rows(result)


async def fetch_activities(
    session: AsyncSession,
    start: date,
    end_inclusive: date,
    user_id: str | None = None,
) -> Sequence[dict[str, Any]]:
    """Activity entries (date, activity_type_id, value) for [start, end_inclusive]."""
    query = (
        "SELECT date, activity_type_id, value "
        "FROM activities "
        "WHERE date >= :start AND date <= :end"
    )
    params: dict[str, Any] = {"start": start, "end": end_inclusive}
    if user_id is not None:
        query += " AND user_id = :user_id"
        params["user_id"] = user_id
    query += " ORDER BY date"

    result = await session.execute(text(query), params)
    return _rows(result)
