"""Tracking policy — reconcile a goal's declared aggregation with its activity."""

from __future__ import annotations

from goalkernel.goals.definitions import ActivityType, Goal, TrackingKind, ValueShape


def is_increment_style(activity_type: ActivityType) -> bool:
    """Unbounded additive counter (as opposed to a bounded slider)."""
    return activity_type.value_shape is ValueShape.continuous_range and activity_type.incremental


def resolve_tracking_kind(goal: Goal, activity_type: ActivityType) -> TrackingKind:
    """Effective aggregation kind for `goal` on `activity_type`.

    - Increment-style activities always accumulate, so they are tracked as
      sum whatever the goal declares.
    - count is only valid for fixed_amount activities; elsewhere it becomes sum.
    """
    if is_increment_style(activity_type):
        return TrackingKind.sum
    if goal.tracking is TrackingKind.count and activity_type.value_shape is not ValueShape.fixed_amount:
        return TrackingKind.sum
    return goal.tracking
