"""Goal progress composition — evaluate, classify and schedule in one pass.

This is what presentation code and the check-in pipeline consume: one
GoalProgress per goal, built from the three engine operations.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Mapping

from goalkernel.goals.aggregator import day_matches
from goalkernel.goals.classifier import classify_status
from goalkernel.goals.definitions import (
    ActivityLog,
    ActivityType,
    EffectiveValueResult,
    Goal,
    GoalStatus,
    Polarity,
    TrackingKind,
)
from goalkernel.goals.evaluator import evaluate
from goalkernel.goals.models import DateWindow, GoalProgress
from goalkernel.goals.periods import resolve_window
from goalkernel.goals.schedule import days_remaining, is_evaluation_day
from goalkernel.goals.tracking import resolve_tracking_kind

ON_TRACK_STATUSES = frozenset({GoalStatus.met, GoalStatus.ahead, GoalStatus.on_pace})


def _polarity_pct(value: float, target: float, polarity: Polarity) -> float:
    """Progress toward a continuous target.

    - positive: value / target, capped at 100
    - negative: 100 while within budget, else target / value
    - neutral: 100 minus the relative deviation, clamped 0–100
    """
    if target == 0.0:
        return 100.0 if day_matches(value, target, False, polarity) else 0.0
    if polarity is Polarity.negative:
        if value <= target:
            return 100.0
        return min(100.0, (target / value) * 100.0)
    if polarity is Polarity.neutral:
        deviation = abs(value - target) / abs(target)
        return max(0.0, min(100.0, (1.0 - deviation) * 100.0))
    return max(0.0, min(100.0, (value / target) * 100.0))


def progress_pct(
    goal: Goal,
    activity_type: ActivityType,
    result: EffectiveValueResult,
    kind: TrackingKind,
) -> float:
    """Percentage (0–100) of the goal achieved so far."""
    if activity_type.is_discrete and kind in (TrackingKind.absolute, TrackingKind.average):
        if result.day_count == 0:
            return 0.0
        return round(result.days_met_target / result.day_count * 100.0, 1)
    if kind is TrackingKind.count:
        if goal.target_value <= 0:
            return 100.0
        return round(min(100.0, result.day_count / goal.target_value * 100.0), 1)
    return round(_polarity_pct(result.effective_value, goal.target_value, activity_type.polarity), 1)


def goal_progress(
    goal: Goal,
    activity_type: ActivityType | None,
    log: ActivityLog | None,
    reference_date: date,
) -> GoalProgress:
    result = evaluate(goal, activity_type, log, reference_date)
    status = classify_status(goal, activity_type, result, reference_date)
    window = resolve_window(goal, reference_date)

    kind = resolve_tracking_kind(goal, activity_type) if activity_type is not None else None
    pct = progress_pct(goal, activity_type, result, kind) if activity_type is not None else 0.0

    return GoalProgress(
        goal_id=goal.id,
        name=goal.name,
        activity_type_id=goal.activity_type_id,
        activity_type_name=activity_type.name if activity_type is not None else None,
        date_window=goal.date_window,
        tracking=goal.tracking,
        effective_tracking=kind,
        target_value=goal.target_value,
        effective_value=result.effective_value,
        days_met_target=result.days_met_target,
        day_count=result.day_count,
        all_days_met=result.all_days_met,
        status=status,
        progress_pct=pct,
        is_on_track=status in ON_TRACK_STATUSES,
        days_remaining=days_remaining(goal, reference_date),
        is_evaluation_day=is_evaluation_day(goal, reference_date),
        window=DateWindow(start=window.start, end=window.end) if window is not None else None,
    )


def analyze_goals(
    goals: Iterable[Goal],
    activity_types: Mapping[str, ActivityType],
    log: ActivityLog,
    reference_date: date,
) -> list[GoalProgress]:
    """Progress for every goal whose activity type is known; others are skipped."""
    results: list[GoalProgress] = []
    for goal in goals:
        activity_type = activity_types.get(goal.activity_type_id)
        if activity_type is None:
            continue
        results.append(goal_progress(goal, activity_type, log, reference_date))
    return results


def status_counts(progress: Iterable[GoalProgress]) -> dict[GoalStatus, int]:
    return dict(Counter(p.status for p in progress))
