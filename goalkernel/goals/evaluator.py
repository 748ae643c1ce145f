"""Effective value selection — the number a goal's target is compared against.

Pure and stateless: the same goal, activity type, log snapshot and reference
date always produce the same result. Missing data never raises; it yields a
zeroed result.
"""

from __future__ import annotations

import logging
from datetime import date

from goalkernel.goals.aggregator import aggregate_window, day_matches
from goalkernel.goals.definitions import (
    ZERO_RESULT,
    ActivityLog,
    ActivityType,
    DateWindowKind,
    EffectiveValueResult,
    Goal,
    TrackingKind,
    ValueShape,
    WindowStats,
)
from goalkernel.goals.periods import resolve_window
from goalkernel.goals.tracking import resolve_tracking_kind

logger = logging.getLogger(__name__)


def select_effective_value(
    stats: WindowStats,
    kind: TrackingKind,
    activity_type: ActivityType,
) -> EffectiveValueResult:
    """Pick the comparable value from window stats for an effective kind.

    Order matters: sum wins over everything, then the discrete rules, then
    slider averages. Discrete "average" is the share of matching days, not an
    average of option codes.
    """
    met = stats.days_met_target
    n = stats.count

    if kind is TrackingKind.sum:
        value = stats.sum
    elif activity_type.is_discrete and kind is TrackingKind.absolute:
        value = float(met)
    elif activity_type.is_discrete:
        value = met / n if n > 0 else 0.0
    elif activity_type.value_shape is ValueShape.continuous_range:
        value = stats.average
    elif kind is TrackingKind.count:
        value = float(n)
    else:
        # fixed_amount tracked as anything but count accumulates like a counter
        value = stats.sum

    return EffectiveValueResult(
        effective_value=value,
        all_days_met=stats.all_days_met,
        days_met_target=met,
        day_count=n,
    )


def _evaluate_single_day(
    goal: Goal,
    activity_type: ActivityType,
    log: ActivityLog,
    day: date,
) -> EffectiveValueResult:
    value = (log.get(day) or {}).get(goal.activity_type_id)
    if value is None:
        return ZERO_RESULT
    matched = day_matches(value, goal.target_value, activity_type.is_discrete, activity_type.polarity)
    return EffectiveValueResult(
        effective_value=value,
        all_days_met=matched,
        days_met_target=1 if matched else 0,
        day_count=1,
    )


def evaluate(
    goal: Goal,
    activity_type: ActivityType | None,
    log: ActivityLog | None,
    reference_date: date,
) -> EffectiveValueResult:
    """Current effective value of `goal` as of `reference_date`.

    Daily goals skip aggregation and use the reference day's raw value.
    """
    if activity_type is None or log is None:
        logger.debug("goal %s: activity type or log not loaded", goal.id)
        return ZERO_RESULT

    if goal.date_window is DateWindowKind.daily:
        return _evaluate_single_day(goal, activity_type, log, reference_date)

    window = resolve_window(goal, reference_date)
    if window is None:
        logger.debug("goal %s: %s window missing required dates", goal.id, goal.date_window.value)
        return ZERO_RESULT

    stats = aggregate_window(
        window,
        log,
        goal.activity_type_id,
        goal.target_value,
        activity_type.is_discrete,
        activity_type.polarity,
    )
    return select_effective_value(stats, resolve_tracking_kind(goal, activity_type), activity_type)
