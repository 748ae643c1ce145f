"""GoalProgress v0 contract — Pydantic v2 models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from pydantic import BaseModel, Field

from goalkernel.goals.definitions import DateWindowKind, GoalStatus, TrackingKind


class DateWindow(BaseModel):
    start: date
    end: date


class GoalProgress(BaseModel):
    goal_id: str
    name: str = ""
    activity_type_id: str
    activity_type_name: str | None = None
    date_window: DateWindowKind
    tracking: TrackingKind
    effective_tracking: TrackingKind | None = None  # None when the activity type is missing
    target_value: float

    effective_value: float = 0.0
    days_met_target: int = 0
    day_count: int = 0
    all_days_met: bool = False

    status: GoalStatus
    progress_pct: float = 0.0  # 0–100
    is_on_track: bool = False
    days_remaining: int | None = None
    is_evaluation_day: bool = False
    window: DateWindow | None = None


class GoalProgressEnvelope(BaseModel):
    """Top-level progress response — always constructible."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    schema_version: str = "v0"
    reference_date: date
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    goals: list[GoalProgress] = Field(default_factory=list)
    status_counts: dict[GoalStatus, int] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class GoalDraft(BaseModel):
    """Goal fields as submitted by an edit form, before validation."""

    id: str = "draft"
    activity_type_id: str = ""
    name: str = ""
    target_value: float = 1.0
    icon: str = "target"
    date_type: str = "daily"
    tracking_type: str = "average"
    created_at: date
    target_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
