"""Tests for goal validation."""

from __future__ import annotations

from datetime import date

from goalkernel.goals.definitions import DateWindowKind
from goalkernel.goals.validation import is_valid_goal, validate_goal
from tests.conftest import make_goal


class TestValidateGoal:
    def test_valid(self):
        assert validate_goal(make_goal()) == []
        assert is_valid_goal(make_goal()) is True

    def test_name_required(self):
        assert "Goal name is required" in validate_goal(make_goal(name="  "))

    def test_activity_type_required(self):
        assert "Activity type is required" in validate_goal(make_goal(activity_type_id=""))

    def test_negative_target(self):
        assert "Target value cannot be negative" in validate_goal(make_goal(target_value=-1))

    def test_unknown_icon(self):
        assert "Invalid icon selected" in validate_goal(make_goal(icon="rocket"))

    def test_by_date_needs_target(self):
        errors = validate_goal(make_goal(date_window=DateWindowKind.by_date))
        assert errors == ['Target date is required for "By Date" goals']

    def test_date_range_needs_both_dates(self):
        errors = validate_goal(make_goal(date_window=DateWindowKind.date_range))
        assert len(errors) == 2

    def test_date_range_order(self):
        goal = make_goal(
            date_window=DateWindowKind.date_range,
            start_date=date(2026, 3, 1),
            end_date=date(2026, 2, 1),
        )
        assert validate_goal(goal) == ["End date must be after start date"]
        assert is_valid_goal(goal) is False
