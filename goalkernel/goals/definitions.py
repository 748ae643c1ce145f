"""Goal and activity definitions — enums and frozen value objects.

Everything the evaluation engine reads is declared here. Instances are
immutable; the engine never mutates a goal, an activity type or a log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Mapping


class ValueShape(str, Enum):
    continuous_range = "continuous_range"
    discrete_options = "discrete_options"
    binary_toggle = "binary_toggle"
    fixed_amount = "fixed_amount"


class Polarity(str, Enum):
    positive = "positive"  # more is better
    negative = "negative"  # less is better
    neutral = "neutral"  # exact value wanted


class DateWindowKind(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    by_date = "by_date"
    date_range = "date_range"


class TrackingKind(str, Enum):
    average = "average"
    sum = "sum"
    absolute = "absolute"
    count = "count"  # fixed_amount activities only


class GoalStatus(str, Enum):
    met = "met"
    missed = "missed"
    ahead = "ahead"
    on_pace = "on_pace"
    behind = "behind"


DISCRETE_SHAPES = frozenset({ValueShape.discrete_options, ValueShape.binary_toggle})


@dataclass(frozen=True, slots=True)
class DiscreteOption:
    label: str
    value: float


@dataclass(frozen=True, slots=True)
class ActivityType:
    id: str
    value_shape: ValueShape
    polarity: Polarity = Polarity.neutral
    name: str = ""
    unit: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    options: tuple[DiscreteOption, ...] = ()
    fixed_value: float | None = None
    incremental: bool = False  # unbounded counter rather than bounded slider

    @property
    def is_discrete(self) -> bool:
        return self.value_shape in DISCRETE_SHAPES

    def option_label(self, value: float) -> str | None:
        for opt in self.options:
            if opt.value == value:
                return opt.label
        return None


@dataclass(frozen=True, slots=True)
class Goal:
    id: str
    activity_type_id: str
    target_value: float
    date_window: DateWindowKind
    tracking: TrackingKind
    created_at: date
    target_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    name: str = ""
    icon: str = "target"


# date -> activity_type_id -> value
ActivityLog = Mapping[date, Mapping[str, float]]


@dataclass(frozen=True, slots=True)
class EvaluationWindow:
    """Inclusive [start, end] range a goal is aggregated over."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start


@dataclass(frozen=True, slots=True)
class WindowTiming:
    """Where the reference date sits inside the goal's full period."""

    natural_start: date
    natural_end: date
    elapsed_days: int
    total_days: int
    elapsed_fraction: float
    expired: bool


@dataclass(frozen=True, slots=True)
class WindowStats:
    sum: float = 0.0
    count: int = 0
    average: float = 0.0
    days_met_target: int = 0
    all_days_met: bool = False


@dataclass(frozen=True, slots=True)
class EffectiveValueResult:
    effective_value: float = 0.0
    all_days_met: bool = False
    days_met_target: int = 0
    day_count: int = 0


ZERO_RESULT = EffectiveValueResult()

