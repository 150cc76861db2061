import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartshift.core.config import get_policy, get_settings
from smartshift.db.models.roster import Shift, ShiftStatus
from smartshift.db.session import get_db_session
from smartshift.repositories import assignment as assignment_repo
from smartshift.repositories import shift as shift_repo
from smartshift.repositories import staff as staff_repo
from smartshift.schemas.assignment import (
    AssignmentCreate,
    AssignmentRead,
    AssignmentResult,
    RankedCandidateRead,
    RecommendationResponse,
)
from smartshift.schemas.roster import ShiftRead
from smartshift.services.adapters import commitments_from_rows, profile_from_row, shift_from_row
from smartshift.services.domain import Candidate
from smartshift.services.policy import Policy
from smartshift.services.ranking import check_assignment, rank_candidates

logger = logging.getLogger(__name__)

router = APIRouter()


def _lookback_days(policy: Policy) -> int:
    rules = policy.eligibility
    return max(rules.night_window_days, rules.weekly_window_days, rules.max_consecutive_days + 1)


async def _get_shift_or_404(session: AsyncSession, shift_id: int) -> Shift:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    return shift


@router.get("/shifts/{shift_id}/recommendations", response_model=RecommendationResponse)
async def recommend_staff(
    shift_id: int,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    policy: Annotated[Policy, Depends(get_policy)],
    limit: Annotated[int | None, Query(ge=1, le=50)] = None,
    manager_override: bool = False,
) -> RecommendationResponse:
    shift = await _get_shift_or_404(session, shift_id)
    limit = limit or get_settings().recommendation_limit

    already_assigned = {
        assignment.staff_id for assignment in await assignment_repo.list_assignments_for_shift(session, shift.id)
    }
    members = [
        member
        for member in await staff_repo.list_staff(session, organisation_id=shift.organisation_id)
        if member.id not in already_assigned
    ]
    commitment_rows = await assignment_repo.load_commitment_rows(
        session,
        [member.id for member in members],
        shift.shift_date,
        lookback_days=_lookback_days(policy),
        exclude_shift_id=shift.id,
    )
    candidates = [
        Candidate(
            profile=profile_from_row(member),
            commitments=tuple(commitments_from_rows(commitment_rows.get(member.id, []))),
        )
        for member in members
    ]

    logger.info(
        "Ranking %d candidates for shift %s (organisation %s)",
        len(candidates),
        shift.id,
        shift.organisation_id,
    )
    result = rank_candidates(
        shift_from_row(shift), candidates, policy, limit, manager_override=manager_override
    )
    return RecommendationResponse(
        shift=ShiftRead.model_validate(shift),
        top_recommendations=[RankedCandidateRead.from_ranked(ranked) for ranked in result.eligible_top],
        all_ranked=[RankedCandidateRead.from_ranked(ranked) for ranked in result.all_ranked],
    )


@router.post(
    "/shifts/{shift_id}",
    response_model=AssignmentResult,
    status_code=status.HTTP_201_CREATED,
)
async def assign_staff(
    shift_id: int,
    payload: AssignmentCreate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    policy: Annotated[Policy, Depends(get_policy)],
) -> AssignmentResult:
    shift = await _get_shift_or_404(session, shift_id)
    member = await staff_repo.get_staff(session, payload.staff_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff member not found")
    if member.organisation_id != shift.organisation_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Staff member belongs to a different organisation",
        )
    if shift.status == ShiftStatus.FILLED.value or shift.filled_count >= shift.required_count:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Shift is already filled")
    if await assignment_repo.get_assignment(session, shift.id, member.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Staff member is already assigned to this shift"
        )

    commitment_rows = await assignment_repo.load_commitment_rows(
        session,
        [member.id],
        shift.shift_date,
        lookback_days=_lookback_days(policy),
        exclude_shift_id=shift.id,
    )
    candidate = Candidate(
        profile=profile_from_row(member),
        commitments=tuple(commitments_from_rows(commitment_rows.get(member.id, []))),
    )
    evaluation = check_assignment(
        shift_from_row(shift), candidate, policy, manager_override=payload.manager_override
    )
    if not evaluation.eligible:
        logger.info(
            "Rejected assignment of staff %s to shift %s: %s",
            member.id,
            shift.id,
            "; ".join(evaluation.violations),
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": "Staff member is not eligible for this shift", "violations": evaluation.violations},
        )

    assignment = await assignment_repo.create_assignment(
        session, shift, member.id, manager_override=payload.manager_override
    )
    await session.commit()
    logger.info("Assigned staff %s to shift %s", member.id, shift.id)
    return AssignmentResult(
        assignment=AssignmentRead.model_validate(assignment),
        evaluation=RankedCandidateRead.from_ranked(evaluation),
    )
