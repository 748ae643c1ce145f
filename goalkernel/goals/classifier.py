"""Status classification — met, missed, or how the goal is pacing.

Status is recomputed from current data on every call; there is no stored
state machine. Thresholds below are ratios applied to the pro-rated
requirement (cumulative kinds) or to the flat target (averages).
"""

from __future__ import annotations

from datetime import date

from goalkernel.goals.definitions import (
    ActivityType,
    DateWindowKind,
    EffectiveValueResult,
    Goal,
    GoalStatus,
    Polarity,
    TrackingKind,
    WindowTiming,
)
from goalkernel.goals.periods import window_timing
from goalkernel.goals.tracking import resolve_tracking_kind

# Cumulative, more is better
PACE_AHEAD_RATIO = 1.10
PACE_BEHIND_RATIO = 0.85

# Cumulative, less is better (budget framing)
BUDGET_AHEAD_RATIO = 0.90
BUDGET_BEHIND_RATIO = 1.10

# Averages, compared flat against the target
AVERAGE_AHEAD_RATIO = 1.05
AVERAGE_BEHIND_RATIO = 0.95

# Share of matching days needed for a discrete "average" goal
MAJORITY_RATIO = 0.5

RECURRING_WINDOWS = frozenset({DateWindowKind.weekly, DateWindowKind.monthly})


def _met_or_failed(
    goal: Goal,
    activity_type: ActivityType,
    kind: TrackingKind,
    result: EffectiveValueResult,
    timing: WindowTiming,
    today: date,
) -> tuple[bool, bool]:
    value = result.effective_value
    target = goal.target_value
    logged = result.day_count > 0
    met = False
    failed = False

    if goal.date_window is DateWindowKind.daily:
        # Same-day evaluation: the day's own entry decides.
        if kind is TrackingKind.count:
            met = result.day_count >= target
        else:
            met = result.all_days_met
        hard_fail = activity_type.is_discrete and kind is TrackingKind.absolute
        hard_fail = hard_fail or (not activity_type.is_discrete and activity_type.polarity is Polarity.negative)
        failed = logged and not met and hard_fail
    elif kind is TrackingKind.count:
        met = result.day_count >= target
    elif activity_type.is_discrete and kind is TrackingKind.absolute:
        met = result.all_days_met and logged
        failed = not result.all_days_met and logged
    elif activity_type.is_discrete and kind is TrackingKind.average:
        met = value > MAJORITY_RATIO and logged
    elif activity_type.polarity is Polarity.negative:
        if timing.expired:
            met = value <= target
            failed = not met
        elif kind is not TrackingKind.average:
            # An exceeded budget is final.
            failed = value > target
    elif activity_type.polarity is Polarity.positive:
        reached = value >= target
        if goal.date_window in RECURRING_WINDOWS:
            # Weekly/monthly goals are awarded on the period's final day.
            met = reached and today >= timing.natural_end
        else:
            met = reached
    else:
        met = value == target

    if timing.expired and not met:
        failed = True
    return met, failed


def _pace(
    goal: Goal,
    activity_type: ActivityType,
    kind: TrackingKind,
    result: EffectiveValueResult,
    timing: WindowTiming,
) -> GoalStatus:
    target = goal.target_value
    polarity = activity_type.polarity

    if kind is TrackingKind.absolute:
        if result.days_met_target < timing.elapsed_days:
            return GoalStatus.behind
        return GoalStatus.on_pace

    if activity_type.is_discrete and kind is TrackingKind.average:
        if result.day_count > 0 and result.effective_value < MAJORITY_RATIO:
            return GoalStatus.behind
        return GoalStatus.on_pace

    # TODO: add an ahead/behind rule for neutral polarity; it stays on pace until met or missed.
    if polarity is Polarity.neutral:
        return GoalStatus.on_pace

    if kind is TrackingKind.average:
        if result.day_count == 0:
            return GoalStatus.on_pace
        value = result.effective_value
        if polarity is Polarity.negative:
            if value < target * AVERAGE_BEHIND_RATIO:
                return GoalStatus.ahead
            if value > target * AVERAGE_AHEAD_RATIO:
                return GoalStatus.behind
            return GoalStatus.on_pace
        if value > target * AVERAGE_AHEAD_RATIO:
            return GoalStatus.ahead
        if value < target * AVERAGE_BEHIND_RATIO:
            return GoalStatus.behind
        return GoalStatus.on_pace

    # sum and count: compare against the target pro-rated by elapsed time
    value = float(result.day_count) if kind is TrackingKind.count else result.effective_value
    required = target * timing.elapsed_fraction
    if polarity is Polarity.negative:
        if value < required * BUDGET_AHEAD_RATIO:
            return GoalStatus.ahead
        if value > required * BUDGET_BEHIND_RATIO:
            return GoalStatus.behind
        return GoalStatus.on_pace
    if value > required * PACE_AHEAD_RATIO:
        return GoalStatus.ahead
    if value < required * PACE_BEHIND_RATIO:
        return GoalStatus.behind
    return GoalStatus.on_pace


def classify_status(
    goal: Goal,
    activity_type: ActivityType | None,
    result: EffectiveValueResult,
    reference_date: date,
) -> GoalStatus:
    """Classify a goal's evaluated result as of `reference_date`.

    Goals whose activity type is not loaded, or whose window cannot be
    resolved, are reported on pace rather than raising.
    """
    timing = window_timing(goal, reference_date)
    if activity_type is None or timing is None:
        return GoalStatus.on_pace

    kind = resolve_tracking_kind(goal, activity_type)
    met, failed = _met_or_failed(goal, activity_type, kind, result, timing, reference_date)
    if met:
        return GoalStatus.met
    if failed:
        return GoalStatus.missed
    return _pace(goal, activity_type, kind, result, timing)
