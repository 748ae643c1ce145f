"""Kernel HTTP router — goals, goal progress & validation."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from goalkernel.auth import verify_api_key
from goalkernel.config import settings
from goalkernel.db import get_session
from goalkernel.goals import connector
from goalkernel.goals.definitions import ActivityType, Goal
from goalkernel.goals.models import GoalDraft, GoalProgress, GoalProgressEnvelope, ValidationReport
from goalkernel.goals.periods import resolve_window
from goalkernel.goals.progress import goal_progress, status_counts
from goalkernel.goals.records import (
    RecordError,
    activity_log_from_rows,
    activity_type_from_row,
    goal_from_row,
)
from goalkernel.goals.schedule import relevant_goals
from goalkernel.goals.validation import validate_goal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/kernel", tags=["goals"])


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _today(tz_name: str | None) -> date:
    name = tz_name or settings.default_tz
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise HTTPException(status_code=422, detail=f"Unknown timezone: {name}")
    return datetime.now(zone).date()


async def _load_definitions(
    session: AsyncSession,
    user_id: str | None,
    warnings: list[str],
) -> tuple[list[Goal], dict[str, ActivityType]]:
    """Parse stored rows; malformed rows are skipped and reported."""
    goals: list[Goal] = []
    for row in await connector.fetch_goals(session, user_id):
        try:
            goals.append(goal_from_row(row))
        except RecordError as exc:
            logger.warning("skipping goal row %s: %s", row.get("id"), exc)
            warnings.append(f"Skipped goal {row.get('id')}: {exc}")

    activity_types: dict[str, ActivityType] = {}
    for row in await connector.fetch_activity_types(session, user_id):
        try:
            at = activity_type_from_row(row)
        except RecordError as exc:
            logger.warning("skipping activity type row %s: %s", row.get("id"), exc)
            warnings.append(f"Skipped activity type {row.get('id')}: {exc}")
            continue
        activity_types[at.id] = at

    return goals, activity_types


async def _load_log(
    session: AsyncSession,
    goals: list[Goal],
    reference_date: date,
    user_id: str | None,
):
    """Activity log snapshot covering every goal's window."""
    starts = [w.start for w in (resolve_window(g, reference_date) for g in goals) if w is not None]
    if not starts:
        return {}
    rows = await connector.fetch_activities(session, min(starts), reference_date, user_id)
    return activity_log_from_rows(rows)


# ---------------------------------------------------------------------------
# /kernel/goals
# ---------------------------------------------------------------------------


@router.get("/goals")
async def goals_list(
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    user_id: str | None = Query(default=None, description="Filter by user (omit for all users)"),
) -> list[dict]:
    goals, _types = await _load_definitions(session, user_id, [])
    return [asdict(g) for g in goals]


@router.post("/goals/validate", response_model=ValidationReport)
async def goals_validate(
    draft: GoalDraft,
    _: str = Depends(verify_api_key),
) -> ValidationReport:
    try:
        goal = goal_from_row(draft.model_dump())
    except RecordError as exc:
        return ValidationReport(valid=False, errors=[str(exc)])
    errors = validate_goal(goal)
    return ValidationReport(valid=not errors, errors=errors)


# ---------------------------------------------------------------------------
# /kernel/goals/progress
# ---------------------------------------------------------------------------


@router.get("/goals/progress", response_model=GoalProgressEnvelope)
async def goals_progress(
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    user_id: str | None = Query(default=None, description="Filter by user (omit for all users)"),
    on_date: str | None = Query(default=None, alias="date", description="Reference date (YYYY-MM-DD, default: today)"),
    tz: str = Query(default=None, description="Timezone used for 'today' (e.g. US/Eastern)"),
) -> GoalProgressEnvelope:
    today = _today(tz)
    reference_date = _parse_date(on_date, "date") if on_date else today

    warnings: list[str] = []
    goals, activity_types = await _load_definitions(session, user_id, warnings)
    goals = relevant_goals(goals, reference_date, today)
    log = await _load_log(session, goals, reference_date, user_id)

    progress: list[GoalProgress] = []
    for goal in goals:
        activity_type = activity_types.get(goal.activity_type_id)
        if activity_type is None:
            warnings.append(f"Goal {goal.id} references unknown activity type {goal.activity_type_id}.")
        progress.append(goal_progress(goal, activity_type, log, reference_date))

    if not goals:
        warnings.append("No goals relevant for the requested date.")

    return GoalProgressEnvelope(
        reference_date=reference_date,
        goals=progress,
        status_counts=status_counts(progress),
        warnings=warnings,
    )


@router.get("/goals/{goal_id}/progress", response_model=GoalProgress)
async def goal_progress_detail(
    goal_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    user_id: str | None = Query(default=None, description="Filter by user (omit for all users)"),
    on_date: str | None = Query(default=None, alias="date", description="Reference date (YYYY-MM-DD, default: today)"),
    tz: str = Query(default=None, description="Timezone used for 'today'"),
) -> GoalProgress:
    reference_date = _parse_date(on_date, "date") if on_date else _today(tz)

    goals, activity_types = await _load_definitions(session, user_id, [])
    goal = next((g for g in goals if g.id == goal_id), None)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Unknown goal: {goal_id}")

    log = await _load_log(session, [goal], reference_date, user_id)
    return goal_progress(goal, activity_types.get(goal.activity_type_id), log, reference_date)
