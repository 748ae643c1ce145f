"""Goal validation at creation/edit time.

The evaluation engine assumes validated goals and does not re-check
thresholds; callers that accept goal edits run validate_goal first.
"""

from __future__ import annotations

from goalkernel.goals.definitions import DateWindowKind, Goal

GOAL_ICONS: tuple[str, ...] = (
    "target",
    "fitness",
    "health",
    "nutrition",
    "mindfulness",
    "hydration",
    "sleep",
    "strength",
    "cardio",
    "habit",
    "milestone",
    "challenge",
)


def validate_goal(goal: Goal) -> list[str]:
    """Return human-readable problems with `goal`. Empty list means valid."""
    errors: list[str] = []

    if not goal.name.strip():
        errors.append("Goal name is required")
    if not goal.activity_type_id:
        errors.append("Activity type is required")
    if goal.target_value < 0:
        errors.append("Target value cannot be negative")
    if goal.icon not in GOAL_ICONS:
        errors.append("Invalid icon selected")

    if goal.date_window is DateWindowKind.by_date and goal.target_date is None:
        errors.append('Target date is required for "By Date" goals')

    if goal.date_window is DateWindowKind.date_range:
        if goal.start_date is None:
            errors.append('Start date is required for "Date Range" goals')
        if goal.end_date is None:
            errors.append('End date is required for "Date Range" goals')
        if goal.start_date and goal.end_date and goal.end_date < goal.start_date:
            errors.append("End date must be after start date")

    return errors


def is_valid_goal(goal: Goal) -> bool:
    return not validate_goal(goal)
