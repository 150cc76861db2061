"""Rank a pool of candidates for one shift by eligibility and score."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Union

from smartshift.services.constraints import evaluate_eligibility
from smartshift.services.domain import (
    Candidate,
    Commitment,
    RankedCandidate,
    RankingResult,
    Shift,
    StaffProfile,
    aggregate_ok,
)
from smartshift.services.policy import Policy, load_default_policy
from smartshift.services.scoring import score

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

CandidateInput = Union[Candidate, tuple[StaffProfile, Sequence[Commitment]]]


def _as_candidate(item: CandidateInput) -> Candidate:
    if isinstance(item, Candidate):
        return item
    profile, commitments = item
    return Candidate(profile=profile, commitments=tuple(commitments or ()))


def check_assignment(
    shift: Shift,
    candidate: CandidateInput,
    policy: Policy | None = None,
    *,
    manager_override: bool = False,
) -> RankedCandidate:
    """Evaluate and score one candidate, keeping every violation reason."""

    if shift is None:
        raise ValueError("check_assignment requires a shift")
    policy = policy or load_default_policy()
    candidate = _as_candidate(candidate)
    profile = candidate.profile
    if profile is None:
        raise ValueError("check_assignment requires a staff profile")

    verdicts = evaluate_eligibility(
        candidate.commitments,
        shift,
        policy.eligibility,
        training_complete=profile.mandatory_training_complete,
        manager_override=manager_override,
    )
    result = score(profile, shift, candidate.commitments, policy)

    eligible = aggregate_ok(verdicts)
    ranked = RankedCandidate(
        staff_id=profile.id,
        staff_name=profile.name,
        score=result.score,
        eligible=eligible,
        reasons=list(result.reasons),
        violations=[verdict.reason or verdict.rule.value for verdict in verdicts if not verdict.ok],
        warnings=[verdict.warning for verdict in verdicts if verdict.ok and verdict.warning],
        verdicts=verdicts,
        weekly_hours=round(result.weekly_hours, 2),
    )
    logger.debug(
        "Staff %s for shift %s: score=%s eligible=%s violations=%s",
        profile.id,
        shift.id,
        ranked.score,
        eligible,
        ranked.violations,
    )
    return ranked


def rank_candidates(
    shift: Shift,
    candidates: Iterable[CandidateInput],
    policy: Policy | None = None,
    limit: int = DEFAULT_LIMIT,
    *,
    manager_override: bool = False,
) -> RankingResult:
    """
    Evaluate every candidate for ``shift`` and order them by score.

    ``all_ranked`` keeps ineligible candidates so a reviewer sees the full picture;
    ``eligible_top`` holds at most ``limit`` eligible candidates. Equal scores keep
    their input order. An empty pool yields two empty lists.
    """

    if shift is None:
        raise ValueError("rank_candidates requires a shift")
    policy = policy or load_default_policy()
    if not limit or limit <= 0:
        limit = DEFAULT_LIMIT

    evaluated = [
        check_assignment(shift, item, policy, manager_override=manager_override)
        for item in candidates or ()
    ]
    # Stable sort: ties keep input order.
    all_ranked = sorted(evaluated, key=lambda ranked: ranked.score, reverse=True)
    eligible_top = [ranked for ranked in all_ranked if ranked.eligible][:limit]

    logger.debug(
        "Ranked %d candidates for shift %s; %d eligible",
        len(all_ranked),
        shift.id,
        sum(1 for ranked in all_ranked if ranked.eligible),
    )
    return RankingResult(eligible_top=eligible_top, all_ranked=all_ranked)


__all__ = ["DEFAULT_LIMIT", "check_assignment", "rank_candidates"]
