"""Map storage rows (mappings or ORM objects) into the engine's typed records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Iterable

from smartshift.services.domain import (
    Commitment,
    EmploymentTier,
    Shift,
    ShiftPreference,
    StaffProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTRACTED_HOURS = 37.5


def _get(row: Any, *names: str, default: Any = None) -> Any:
    for name in names:
        if isinstance(row, Mapping):
            if name in row and row[name] is not None:
                return row[name]
        else:
            value = getattr(row, name, None)
            if value is not None:
                return value
    return default


def parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def format_time(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")
    return str(value).strip()[:5]


def _parse_float(value: Any, default: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed == parsed else default


def parse_tier(value: Any) -> EmploymentTier:
    if value is None or value == "":
        return EmploymentTier.PERMANENT
    try:
        return EmploymentTier(str(value).strip().lower())
    except ValueError:
        return EmploymentTier.UNKNOWN


def parse_preference(value: Any) -> ShiftPreference:
    text = str(value or "").strip().lower()
    if "night" in text:
        return ShiftPreference.NIGHT
    if text in {"any", "either", "flexible", "both"}:
        return ShiftPreference.ANY
    return ShiftPreference.DAY


def shift_from_row(row: Any) -> Shift:
    if row is None:
        raise ValueError("shift row is required")
    shift = Shift(
        id=_get(row, "id"),
        organisation_id=_get(row, "organisation_id"),
        ward=_get(row, "ward"),
        role_required=_get(row, "role_required"),
        gender_requirement=str(_get(row, "gender_requirement", "gender_required", default="any")).lower(),
        required_count=int(_get(row, "required_count", "number_required", default=1)),
        filled_count=int(_get(row, "filled_count", "number_filled", default=0)),
        date=parse_date(_get(row, "date", "shift_date")),
        start_time=format_time(_get(row, "start_time")),
        end_time=format_time(_get(row, "end_time")),
        status=str(_get(row, "status", default="open")).lower(),
    )
    if shift.date is None or shift.start_time is None or shift.end_time is None:
        logger.warning(
            "Shift %s has incomplete date/time (%s %s-%s); defaults will apply",
            shift.id,
            shift.date,
            shift.start_time,
            shift.end_time,
        )
    return shift


def commitment_from_row(row: Any) -> Commitment | None:
    """Snapshot an assignment row; ``None`` when the row has no usable date."""

    shift_date = parse_date(_get(row, "shift_date", "date"))
    if shift_date is None:
        logger.warning("Dropping commitment without a valid date: %r", row)
        return None
    return Commitment(
        shift_date=shift_date,
        start_time=format_time(_get(row, "start_time")),
        end_time=format_time(_get(row, "end_time")),
        ward=_get(row, "ward"),
        role_required=_get(row, "role_required"),
    )


def commitments_from_rows(rows: Iterable[Any]) -> list[Commitment]:
    commitments = (commitment_from_row(row) for row in rows)
    return [commitment for commitment in commitments if commitment is not None]


def profile_from_row(row: Any) -> StaffProfile:
    if row is None:
        raise ValueError("staff row is required")
    training = _get(row, "mandatory_training_complete")
    contracted = _parse_float(
        _get(row, "contracted_hours_per_week"), DEFAULT_CONTRACTED_HOURS
    )
    return StaffProfile(
        id=_get(row, "id"),
        organisation_id=_get(row, "organisation_id"),
        name=_get(row, "name"),
        home_ward=_get(row, "home_ward", "ward"),
        preferred_shift_type=parse_preference(_get(row, "preferred_shift_type", "preferred_shift")),
        employment_tier=parse_tier(_get(row, "employment_tier", "staff_type")),
        contracted_hours_per_week=contracted or DEFAULT_CONTRACTED_HOURS,
        mandatory_training_complete=None if training is None else bool(training),
        wellbeing_score=_parse_float(_get(row, "wellbeing_score"), 0.0),
    )


__all__ = [
    "commitment_from_row",
    "commitments_from_rows",
    "format_time",
    "parse_date",
    "parse_preference",
    "parse_tier",
    "profile_from_row",
    "shift_from_row",
]
