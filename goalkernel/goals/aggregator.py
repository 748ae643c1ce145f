"""Window aggregation — raw statistics over an activity log slice."""

from __future__ import annotations

from goalkernel.goals.definitions import (
    ActivityLog,
    EvaluationWindow,
    Polarity,
    WindowStats,
)
from goalkernel.goals.periods import iter_days


def day_matches(value: float, target: float, is_discrete: bool, polarity: Polarity) -> bool:
    """Whether a single day's value satisfies the goal's target.

    Discrete values are categorical codes, so they only ever match exactly.
    Continuous values are compared according to polarity.
    """
    if is_discrete:
        return value == target
    if polarity is Polarity.negative:
        return value <= target
    if polarity is Polarity.neutral:
        return value == target
    return value >= target


def aggregate_window(
    window: EvaluationWindow,
    log: ActivityLog,
    activity_type_id: str,
    target: float,
    is_discrete: bool,
    polarity: Polarity,
) -> WindowStats:
    """Sum, count, average and per-day matches for one activity in `window`.

    Days without a logged value are skipped entirely. An empty window yields
    zeroed stats with all_days_met False.
    """
    total = 0.0
    count = 0
    met = 0

    for day in iter_days(window):
        entries = log.get(day)
        if not entries:
            continue
        value = entries.get(activity_type_id)
        if value is None:
            continue
        total += value
        count += 1
        if day_matches(value, target, is_discrete, polarity):
            met += 1

    return WindowStats(
        sum=total,
        count=count,
        average=total / count if count > 0 else 0.0,
        days_met_target=met,
        all_days_met=count > 0 and met == count,
    )
