"""Tests for row → definition conversion."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from goalkernel.goals.definitions import DateWindowKind, Polarity, TrackingKind, ValueShape
from goalkernel.goals.records import (
    RecordError,
    activity_log_from_rows,
    activity_type_from_row,
    goal_from_row,
    parse_date,
    polarity_from_row,
)
from tests.conftest import MONDAY, make_activity_row, make_activity_type_row, make_goal_row


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2026-02-09") == MONDAY

    def test_timestamp_string(self):
        assert parse_date("2026-02-09T23:10:00+00:00") == MONDAY

    def test_datetime(self):
        assert parse_date(datetime(2026, 2, 9, 8, tzinfo=timezone.utc)) == MONDAY

    def test_date(self):
        assert parse_date(MONDAY) == MONDAY

    def test_empty(self):
        assert parse_date(None) is None
        assert parse_date("") is None

    def test_garbage(self):
        with pytest.raises(RecordError):
            parse_date("next tuesday")


class TestPolarity:
    def test_goal_type_wins(self):
        assert polarity_from_row({"goal_type": "negative", "is_negative": False}) is Polarity.negative

    def test_legacy_is_negative(self):
        assert polarity_from_row({"goal_type": None, "is_negative": True}) is Polarity.negative
        assert polarity_from_row({"is_negative": False}) is Polarity.positive

    def test_default_neutral(self):
        assert polarity_from_row({}) is Polarity.neutral

    def test_unknown_rejected(self):
        with pytest.raises(RecordError):
            polarity_from_row({"goal_type": "sideways"})


class TestActivityTypeFromRow:
    def test_increment(self):
        at = activity_type_from_row(make_activity_type_row())
        assert at.value_shape is ValueShape.continuous_range
        assert at.incremental is True
        assert at.polarity is Polarity.positive

    def test_slider(self):
        at = activity_type_from_row(make_activity_type_row(ui_type="slider", min_value=0, max_value=10))
        assert at.value_shape is ValueShape.continuous_range
        assert at.incremental is False
        assert at.max_value == 10.0

    def test_button_group(self):
        row = make_activity_type_row(
            id="mood",
            ui_type="buttonGroup",
            button_options=[{"label": "Bad", "value": 0}, {"label": "Good", "value": 2}],
        )
        at = activity_type_from_row(row)
        assert at.is_discrete is True
        assert at.option_label(2) == "Good"

    def test_toggle_default_options(self):
        at = activity_type_from_row(make_activity_type_row(ui_type="toggle"))
        assert at.value_shape is ValueShape.binary_toggle
        assert at.option_label(1) == "Yes"

    def test_fixed_value(self):
        at = activity_type_from_row(make_activity_type_row(ui_type="fixedValue", fixed_value=250))
        assert at.value_shape is ValueShape.fixed_amount
        assert at.fixed_value == 250.0

    def test_shape_name_accepted(self):
        at = activity_type_from_row(make_activity_type_row(ui_type="discrete_options"))
        assert at.value_shape is ValueShape.discrete_options

    def test_unknown_ui_type(self):
        with pytest.raises(RecordError):
            activity_type_from_row(make_activity_type_row(ui_type="dial"))


class TestGoalFromRow:
    def test_basic(self):
        goal = goal_from_row(make_goal_row())
        assert goal.date_window is DateWindowKind.weekly
        assert goal.tracking is TrackingKind.sum
        assert goal.created_at == date(2026, 1, 1)
        assert goal.target_value == 8.0

    def test_missing_tracking_defaults_to_average(self):
        goal = goal_from_row(make_goal_row(tracking_type=None))
        assert goal.tracking is TrackingKind.average

    def test_by_date_fields(self):
        goal = goal_from_row(make_goal_row(date_type="by_date", target_date="2026-03-01"))
        assert goal.target_date == date(2026, 3, 1)

    def test_unknown_date_type(self):
        with pytest.raises(RecordError):
            goal_from_row(make_goal_row(date_type="fortnightly"))

    def test_unknown_tracking_type(self):
        with pytest.raises(RecordError):
            goal_from_row(make_goal_row(tracking_type="median"))

    def test_missing_created_at(self):
        with pytest.raises(RecordError):
            goal_from_row(make_goal_row(created_at=None))


class TestActivityLogFromRows:
    def test_groups_by_day(self):
        log = activity_log_from_rows([
            make_activity_row(MONDAY, 3),
            make_activity_row(MONDAY, 1, "coffee"),
            make_activity_row(date(2026, 2, 10), 2),
        ])
        assert log[MONDAY] == {"water": 3.0, "coffee": 1.0}
        assert log[date(2026, 2, 10)] == {"water": 2.0}

    def test_string_dates(self):
        log = activity_log_from_rows([{"date": "2026-02-09", "activity_type_id": "water", "value": "4"}])
        assert log[MONDAY]["water"] == 4.0

    def test_skips_missing_values(self):
        log = activity_log_from_rows([make_activity_row(MONDAY, None)])
        assert log == {}
