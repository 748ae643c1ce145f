"""Goal calendar helpers — days remaining, evaluation days, relevance."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from goalkernel.goals.definitions import DateWindowKind, Goal
from goalkernel.goals.periods import month_end, week_end


def days_remaining(goal: Goal, reference_date: date) -> int | None:
    """Days from `reference_date` until the goal's evaluation boundary.

    - daily: always 0 (evaluated same day)
    - weekly: days until Sunday (0 on Sunday)
    - monthly: days until the last day of the month
    - by_date / date_range: days until target/end date, never negative
    Returns None only when a by_date/date_range goal lacks its date.
    """
    kind = goal.date_window
    if kind is DateWindowKind.daily:
        return 0
    if kind is DateWindowKind.weekly:
        boundary = week_end(reference_date)
    elif kind is DateWindowKind.monthly:
        boundary = month_end(reference_date)
    elif kind is DateWindowKind.by_date:
        if goal.target_date is None:
            return None
        boundary = goal.target_date
    elif kind is DateWindowKind.date_range:
        if goal.end_date is None:
            return None
        boundary = goal.end_date
    else:
        raise ValueError(f"Unknown date window: {kind!r}")
    return max(0, (boundary - reference_date).days)


def is_evaluation_day(goal: Goal, day: date) -> bool:
    """Whether `day` is a milestone day for the goal's indicator."""
    kind = goal.date_window
    if kind is DateWindowKind.daily:
        return True
    if kind is DateWindowKind.weekly:
        return day == week_end(day)
    if kind is DateWindowKind.monthly:
        return day == month_end(day)
    if kind is DateWindowKind.by_date:
        return goal.target_date == day
    if kind is DateWindowKind.date_range:
        if goal.start_date is None or goal.end_date is None:
            return False
        return goal.start_date <= day <= goal.end_date
    return False


def is_expired(goal: Goal, today: date) -> bool:
    """Whether a one-off goal's deadline has passed. Recurring goals never expire."""
    if goal.date_window is DateWindowKind.by_date and goal.target_date is not None:
        return today > goal.target_date
    if goal.date_window is DateWindowKind.date_range and goal.end_date is not None:
        return today > goal.end_date
    return False


def is_relevant_for_date(goal: Goal, day: date, today: date) -> bool:
    """Whether the goal belongs in the view for `day`.

    Broader than is_evaluation_day: in-progress goals count too. Missed
    one-off goals stay visible on `today` so they can still be updated.
    """
    if goal.date_window is DateWindowKind.date_range:
        if goal.start_date is None or goal.end_date is None:
            return False
        in_range = goal.start_date <= day <= goal.end_date
        return in_range or (day == today and day > goal.end_date)

    if day < goal.created_at:
        return False

    if goal.date_window is DateWindowKind.by_date:
        if goal.target_date is None:
            return False
        return day <= goal.target_date or (day == today and day > goal.target_date)

    return True


def relevant_goals(goals: Iterable[Goal], day: date, today: date) -> list[Goal]:
    return [g for g in goals if is_relevant_for_date(g, day, today)]


def goals_with_indicator(goals: Iterable[Goal], day: date) -> list[Goal]:
    return [g for g in goals if is_evaluation_day(g, day)]
