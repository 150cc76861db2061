from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from smartshift.schemas.roster import ShiftRead
from smartshift.services.domain import EligibilityVerdict, RankedCandidate


class VerdictRead(BaseModel):
    rule: str
    ok: bool
    reason: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_verdict(cls, verdict: EligibilityVerdict) -> "VerdictRead":
        return cls(rule=verdict.rule.value, ok=verdict.ok, reason=verdict.reason, details=verdict.details)


class RankedCandidateRead(BaseModel):
    staff_id: int
    staff_name: str | None = None
    score: float
    eligible: bool
    weekly_hours: float = 0.0
    reasons: list[str] = Field(default_factory=list)
    violations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    verdicts: list[VerdictRead] = Field(default_factory=list)

    @classmethod
    def from_ranked(cls, ranked: RankedCandidate) -> "RankedCandidateRead":
        return cls(
            staff_id=ranked.staff_id,
            staff_name=ranked.staff_name,
            score=ranked.score,
            eligible=ranked.eligible,
            weekly_hours=ranked.weekly_hours,
            reasons=list(ranked.reasons),
            violations=list(ranked.violations),
            warnings=list(ranked.warnings),
            verdicts=[VerdictRead.from_verdict(verdict) for verdict in ranked.verdicts],
        )


class RecommendationResponse(BaseModel):
    shift: ShiftRead
    top_recommendations: list[RankedCandidateRead] = Field(default_factory=list)
    all_ranked: list[RankedCandidateRead] = Field(default_factory=list)


class AssignmentCreate(BaseModel):
    staff_id: int
    manager_override: bool = False


class AssignmentRead(BaseModel):
    id: int
    shift_id: int
    staff_id: int
    manager_override: bool
    accepted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AssignmentResult(BaseModel):
    assignment: AssignmentRead
    evaluation: RankedCandidateRead
