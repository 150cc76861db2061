import logging
from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from smartshift.services.adapters import (
    commitments_from_rows,
    format_time,
    parse_date,
    parse_preference,
    parse_tier,
    profile_from_row,
    shift_from_row,
)
from smartshift.services.domain import EmploymentTier, ShiftPreference


def test_parse_date_accepts_common_shapes() -> None:
    assert parse_date(date(2025, 11, 20)) == date(2025, 11, 20)
    assert parse_date(datetime(2025, 11, 20, 7, 30)) == date(2025, 11, 20)
    assert parse_date("2025-11-20T07:30:00") == date(2025, 11, 20)
    assert parse_date("20/11/2025") is None
    assert parse_date("") is None


def test_format_time() -> None:
    assert format_time(time(7, 30)) == "07:30"
    assert format_time("19:30:00") == "19:30"
    assert format_time(None) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, EmploymentTier.PERMANENT),
        ("Bank", EmploymentTier.BANK),
        (" agency ", EmploymentTier.AGENCY),
        ("locum", EmploymentTier.UNKNOWN),
    ],
)
def test_parse_tier(value, expected) -> None:
    assert parse_tier(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Night", ShiftPreference.NIGHT),
        ("nights only", ShiftPreference.NIGHT),
        ("either", ShiftPreference.ANY),
        ("any", ShiftPreference.ANY),
        ("", ShiftPreference.DAY),
        (None, ShiftPreference.DAY),
    ],
)
def test_parse_preference(value, expected) -> None:
    assert parse_preference(value) is expected


def test_shift_from_mapping() -> None:
    shift = shift_from_row(
        {
            "id": 3,
            "organisation_id": 1,
            "ward": "Willow",
            "shift_date": "2025-11-20",
            "start_time": time(19, 30),
            "end_time": "08:00",
            "required_count": 2,
        }
    )

    assert shift.date == date(2025, 11, 20)
    assert shift.start_time == "19:30"
    assert shift.end_time == "08:00"
    assert shift.required_count == 2
    assert shift.status == "open"


def test_shift_with_missing_times_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="smartshift.services.adapters"):
        shift = shift_from_row({"id": 4, "shift_date": "2025-11-20"})

    assert shift.start_time is None
    assert "incomplete date/time" in caplog.text


def test_shift_row_is_required() -> None:
    with pytest.raises(ValueError):
        shift_from_row(None)


def test_commitments_without_dates_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    rows = [
        SimpleNamespace(shift_date=date(2025, 11, 19), start_time="07:30", end_time="19:30", ward="Alder"),
        SimpleNamespace(shift_date=None, start_time="07:30", end_time="19:30", ward="Alder"),
    ]

    with caplog.at_level(logging.WARNING, logger="smartshift.services.adapters"):
        commitments = commitments_from_rows(rows)

    assert len(commitments) == 1
    assert commitments[0].shift_date == date(2025, 11, 19)
    assert "Dropping commitment" in caplog.text


def test_profile_from_orm_like_row() -> None:
    row = SimpleNamespace(
        id=12,
        organisation_id=1,
        name="Chloe Evans",
        ward="Redwood",
        preferred_shift="any",
        staff_type="bank",
        contracted_hours_per_week=None,
        mandatory_training_complete=None,
        wellbeing_score=65,
    )

    profile = profile_from_row(row)

    assert profile.home_ward == "Redwood"
    assert profile.preferred_shift_type is ShiftPreference.ANY
    assert profile.employment_tier is EmploymentTier.BANK
    assert profile.contracted_hours_per_week == 37.5
    assert profile.mandatory_training_complete is None
    assert profile.wellbeing_score == 65


def test_profile_prefers_explicit_field_names() -> None:
    profile = profile_from_row(
        {
            "id": 1,
            "home_ward": "Alder",
            "ward": "Willow",
            "employment_tier": "agency",
            "staff_type": "permanent",
            "contracted_hours_per_week": "22.5",
            "mandatory_training_complete": 0,
        }
    )

    assert profile.home_ward == "Alder"
    assert profile.employment_tier is EmploymentTier.AGENCY
    assert profile.contracted_hours_per_week == 22.5
    assert profile.mandatory_training_complete is False


def test_enum_lookups_ignore_case() -> None:
    assert EmploymentTier("Agency") is EmploymentTier.AGENCY
    assert EmploymentTier("locum") is EmploymentTier.UNKNOWN
    assert ShiftPreference("NIGHT") is ShiftPreference.NIGHT
    with pytest.raises(ValueError):
        ShiftPreference("weekends")
