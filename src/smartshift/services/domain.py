"""Value records consumed and produced by the eligibility and scoring engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Sequence


class ShiftType(str, Enum):
    DAY = "day"
    NIGHT = "night"
    UNKNOWN = "unknown"


class ShiftPreference(str, Enum):
    DAY = "day"
    NIGHT = "night"
    ANY = "any"

    @classmethod
    def _missing_(cls, value: object) -> "ShiftPreference | None":
        text = str(value).strip().lower()
        return next((member for member in cls if member.value == text), None)


class EmploymentTier(str, Enum):
    PERMANENT = "permanent"
    BANK = "bank"
    AGENCY = "agency"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "EmploymentTier":
        text = str(value).strip().lower()
        return next((member for member in cls if member.value == text), cls.UNKNOWN)


class Rule(str, Enum):
    DOUBLE_BOOKING = "double-booking"
    REST_PERIOD = "rest-period"
    CONSECUTIVE_DAYS = "consecutive-days"
    WEEKLY_HOURS = "weekly-hours"
    NIGHT_SHIFT_LIMIT = "night-shift-limit"
    MANDATORY_TRAINING = "mandatory-training"


@dataclass(frozen=True)
class ShiftInterval:
    """Half-open ``[start, end)`` interval of a shift in wall-clock time."""

    start: datetime
    end: datetime
    is_estimated: bool = False

    @property
    def crosses_midnight(self) -> bool:
        return self.start.date() != self.end.date()


@dataclass(frozen=True)
class Shift:
    id: int | None
    date: Optional[date]
    start_time: Optional[str]
    end_time: Optional[str]
    ward: str | None = None
    role_required: str | None = None
    organisation_id: int | None = None
    gender_requirement: str = "any"
    required_count: int = 1
    filled_count: int = 0
    status: str = "open"


@dataclass(frozen=True)
class Commitment:
    """Snapshot of one accepted assignment, detached from storage."""

    shift_date: Optional[date]
    start_time: Optional[str]
    end_time: Optional[str]
    ward: str | None = None
    role_required: str | None = None


@dataclass(frozen=True)
class StaffProfile:
    id: int
    organisation_id: int | None = None
    name: str | None = None
    home_ward: str | None = None
    preferred_shift_type: ShiftPreference = ShiftPreference.DAY
    employment_tier: EmploymentTier = EmploymentTier.PERMANENT
    contracted_hours_per_week: float = 37.5
    mandatory_training_complete: bool | None = None
    wellbeing_score: float = 0


@dataclass(frozen=True)
class Candidate:
    profile: StaffProfile
    commitments: Sequence[Commitment] = ()


@dataclass
class EligibilityVerdict:
    rule: Rule
    ok: bool
    reason: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def violated_rule(self) -> Rule | None:
        return None if self.ok else self.rule

    @property
    def warning(self) -> str | None:
        value = self.details.get("legal_warning") or self.details.get("warning")
        return str(value) if value else None


@dataclass
class ScoreResult:
    score: float
    reasons: list[str] = field(default_factory=list)
    weekly_hours: float = 0.0


@dataclass
class RankedCandidate:
    staff_id: int
    score: float
    eligible: bool
    reasons: list[str] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    verdicts: list[EligibilityVerdict] = field(default_factory=list)
    staff_name: str | None = None
    weekly_hours: float = 0.0


@dataclass
class RankingResult:
    eligible_top: list[RankedCandidate] = field(default_factory=list)
    all_ranked: list[RankedCandidate] = field(default_factory=list)


def aggregate_ok(verdicts: Sequence[EligibilityVerdict]) -> bool:
    """Aggregate verdict: eligible only when every predicate passed."""
    return all(verdict.ok for verdict in verdicts)


__all__ = [
    "Candidate",
    "Commitment",
    "EligibilityVerdict",
    "EmploymentTier",
    "RankedCandidate",
    "RankingResult",
    "Rule",
    "ScoreResult",
    "Shift",
    "ShiftInterval",
    "ShiftPreference",
    "ShiftType",
    "StaffProfile",
    "aggregate_ok",
]
