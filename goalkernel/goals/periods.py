"""Period resolution — which dates a goal is evaluated over.

All functions take the reference date explicitly; nothing here reads the
wall clock. Windows are inclusive on both ends.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from goalkernel.goals.definitions import DateWindowKind, EvaluationWindow, Goal, WindowTiming


def week_start(d: date) -> date:
    """Monday of the ISO week containing `d` (Sunday closes the week)."""
    return d - timedelta(days=d.weekday())


def week_end(d: date) -> date:
    return week_start(d) + timedelta(days=6)


def month_start(d: date) -> date:
    return d.replace(day=1)


def month_end(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def natural_period(goal: Goal, today: date) -> tuple[date, date] | None:
    """Full period containing `today` — not clipped to the reference date.

    Returns None when a by_date/date_range goal lacks its dates.
    """
    kind = goal.date_window
    if kind is DateWindowKind.daily:
        return today, today
    if kind is DateWindowKind.weekly:
        return week_start(today), week_end(today)
    if kind is DateWindowKind.monthly:
        return month_start(today), month_end(today)
    if kind is DateWindowKind.by_date:
        if goal.target_date is None:
            return None
        return goal.created_at, goal.target_date
    if kind is DateWindowKind.date_range:
        if goal.start_date is None or goal.end_date is None:
            return None
        return goal.start_date, goal.end_date
    raise ValueError(f"Unknown date window: {kind!r}")


def resolve_window(goal: Goal, today: date) -> EvaluationWindow | None:
    """Window to aggregate over: the natural period clipped at `today`.

    None means "not applicable" (required goal dates missing).
    """
    period = natural_period(goal, today)
    if period is None:
        return None
    start, end = period
    return EvaluationWindow(start=start, end=min(today, end))


def window_timing(goal: Goal, today: date) -> WindowTiming | None:
    """How far `today` is through the goal's natural period.

    Pace is measured from the later of the period start and the goal's
    creation date, and only whole days before `today` count as elapsed, so a
    goal evaluated on the day it was created has an elapsed fraction of 0.
    This puts a Wednesday at 2/7 of an ISO week, not 3/7.

    Daily goals are judged as of the end of their day, so their single day
    always counts as fully elapsed.
    """
    period = natural_period(goal, today)
    if period is None:
        return None
    natural_start, natural_end = period

    pace_start = max(natural_start, goal.created_at)
    total_days = max((natural_end - pace_start).days + 1, 1)
    if goal.date_window is DateWindowKind.daily:
        elapsed_days = total_days
    else:
        elapsed_days = min(max((today - pace_start).days, 0), total_days)

    return WindowTiming(
        natural_start=natural_start,
        natural_end=natural_end,
        elapsed_days=elapsed_days,
        total_days=total_days,
        elapsed_fraction=elapsed_days / total_days,
        expired=today > natural_end,
    )


def iter_days(window: EvaluationWindow):
    """Yield each date in the window, oldest first."""
    day = window.start
    while day <= window.end:
        yield day
        day += timedelta(days=1)
