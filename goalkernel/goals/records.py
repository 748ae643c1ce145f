"""Row → definition conversion for goals, activity types and activity logs.

This is the boundary where free-form strings from storage become closed
enums. Unknown kinds raise RecordError here instead of being defaulted
somewhere deep in the evaluation logic.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from goalkernel.goals.definitions import (
    ActivityLog,
    ActivityType,
    DateWindowKind,
    DiscreteOption,
    Goal,
    Polarity,
    TrackingKind,
    ValueShape,
)


class RecordError(ValueError):
    """A stored row cannot be turned into a definition."""


# Stored ui_type → (value shape, incremental)
UI_TYPE_SHAPES: dict[str, tuple[ValueShape, bool]] = {
    "increment": (ValueShape.continuous_range, True),
    "slider": (ValueShape.continuous_range, False),
    "buttonGroup": (ValueShape.discrete_options, False),
    "toggle": (ValueShape.binary_toggle, False),
    "fixedValue": (ValueShape.fixed_amount, False),
}


def _enum(enum_cls, raw: Any, field_name: str):
    text = str(raw).strip().lower() if raw is not None else ""
    try:
        return enum_cls(text)
    except ValueError:
        raise RecordError(f"Unknown {field_name}: {raw!r}") from None


def parse_date(raw: Any, field_name: str = "date") -> date | None:
    """Accept date, datetime or ISO string (timestamps are cut to the day)."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        raise RecordError(f"Invalid {field_name}: {raw!r}") from None


def _optional_float(raw: Any) -> float | None:
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def polarity_from_row(row: dict[str, Any]) -> Polarity:
    """goal_type wins; legacy is_negative is the fallback; neutral otherwise."""
    if row.get("goal_type"):
        return _enum(Polarity, row["goal_type"], "goal_type")
    if row.get("is_negative") is True:
        return Polarity.negative
    if row.get("is_negative") is False:
        return Polarity.positive
    return Polarity.neutral


def activity_type_from_row(row: dict[str, Any]) -> ActivityType:
    ui_type = row.get("ui_type") or "increment"
    if ui_type in UI_TYPE_SHAPES:
        shape, incremental = UI_TYPE_SHAPES[ui_type]
    else:
        shape = _enum(ValueShape, ui_type, "ui_type")
        incremental = bool(row.get("incremental", False))

    options: list[DiscreteOption] = []
    for opt in row.get("button_options") or []:
        if not isinstance(opt, dict):
            continue
        value = _optional_float(opt.get("value"))
        if value is None:
            continue
        options.append(DiscreteOption(label=str(opt.get("label", "")), value=value))

    if shape is ValueShape.binary_toggle and not options:
        options = [DiscreteOption("No", 0.0), DiscreteOption("Yes", 1.0)]

    return ActivityType(
        id=str(row["id"]),
        value_shape=shape,
        polarity=polarity_from_row(row),
        name=row.get("name") or "",
        unit=row.get("unit") or None,
        min_value=_optional_float(row.get("min_value")),
        max_value=_optional_float(row.get("max_value")),
        step=_optional_float(row.get("step")),
        options=tuple(options),
        fixed_value=_optional_float(row.get("fixed_value")),
        incremental=incremental,
    )


def goal_from_row(row: dict[str, Any]) -> Goal:
    created_at = parse_date(row.get("created_at"), "created_at")
    if created_at is None:
        raise RecordError(f"Goal {row.get('id')!r} has no created_at")
    target = _optional_float(row.get("target_value"))
    if target is None:
        raise RecordError(f"Goal {row.get('id')!r} has no target_value")

    return Goal(
        id=str(row["id"]),
        activity_type_id=str(row["activity_type_id"]),
        target_value=target,
        date_window=_enum(DateWindowKind, row.get("date_type") or "daily", "date_type"),
        tracking=_enum(TrackingKind, row.get("tracking_type") or "average", "tracking_type"),
        created_at=created_at,
        target_date=parse_date(row.get("target_date"), "target_date"),
        start_date=parse_date(row.get("start_date"), "start_date"),
        end_date=parse_date(row.get("end_date"), "end_date"),
        name=row.get("name") or "",
        icon=row.get("icon") or "target",
    )


def activity_log_from_rows(rows: Iterable[dict[str, Any]]) -> ActivityLog:
    """Build date → activity_type_id → value. A later row for the same day wins."""
    log: dict[date, dict[str, float]] = {}
    for row in rows:
        day = parse_date(row.get("date"))
        value = _optional_float(row.get("value"))
        if day is None or value is None:
            continue
        log.setdefault(day, {})[str(row["activity_type_id"])] = value
    return log


