"""Additive desirability score for assigning a staff member to a shift."""

from __future__ import annotations

from typing import Sequence

from smartshift.services.constraints import weekly_hours_in_window
from smartshift.services.domain import (
    Commitment,
    EmploymentTier,
    ScoreResult,
    Shift,
    ShiftPreference,
    StaffProfile,
)
from smartshift.services.policy import Policy, ScoringWeights, load_default_policy
from smartshift.services.shift_time import classify, duration_hours, shift_interval


def _points(value: float) -> str:
    return f"{value:+g}"


def _tier_points(tier: EmploymentTier, weights: ScoringWeights) -> float:
    return {
        EmploymentTier.PERMANENT: weights.tier_permanent,
        EmploymentTier.BANK: weights.tier_bank,
        EmploymentTier.AGENCY: weights.tier_agency,
    }.get(tier, weights.tier_unknown)


def score(
    candidate: StaffProfile,
    shift: Shift,
    commitments: Sequence[Commitment] = (),
    policy: Policy | None = None,
) -> ScoreResult:
    """
    Score ``candidate`` for ``shift``; higher is more desirable.

    Factors are applied in a fixed order (employment tier, home ward, shift-type
    preference, contract-hours fairness, wellbeing) and each one that contributes
    appends a reason, so the reason list explains the total.
    """

    if candidate is None or shift is None:
        raise ValueError("score requires both a candidate and a shift")
    policy = policy or load_default_policy()
    weights = policy.scoring
    eligibility = policy.eligibility

    points = 0.0
    reasons: list[str] = []

    interval = shift_interval(shift, default_hours=eligibility.default_shift_hours)
    shift_hours = duration_hours(interval) if interval else eligibility.default_shift_hours
    weekly_hours = 0.0
    if interval is not None:
        weekly_hours = weekly_hours_in_window(
            commitments,
            interval.start.date(),
            window_days=eligibility.weekly_window_days,
            default_hours=eligibility.default_shift_hours,
        )

    # Employment tier priority.
    tier = EmploymentTier(candidate.employment_tier)
    tier_points = _tier_points(tier, weights)
    points += tier_points
    reasons.append(f"Staff type: {tier.value.capitalize()} {_points(tier_points)}")

    # Home ward familiarity.
    home_ward = candidate.home_ward
    if home_ward and shift.ward and home_ward.casefold() == shift.ward.casefold():
        points += weights.home_ward_match
        reasons.append(f"Home ward match ({shift.ward}) {_points(weights.home_ward_match)}")
    elif home_ward:
        points += weights.other_ward
        reasons.append(
            f"Different ward (home: {home_ward}, shift: {shift.ward or 'n/a'}) {_points(weights.other_ward)}"
        )

    # Shift-type preference.
    preference = ShiftPreference(candidate.preferred_shift_type)
    shift_type = classify(interval)
    if preference is ShiftPreference.ANY:
        points += weights.preference_any
        reasons.append(f"Flexible shift preference (any) {_points(weights.preference_any)}")
    elif preference.value == shift_type.value:
        points += weights.preference_match
        reasons.append(f"Shift preference match ({preference.value}) {_points(weights.preference_match)}")
    else:
        points += weights.preference_mismatch
        reasons.append(
            f"Shift preference mismatch (prefers {preference.value}, shift is {shift_type.value}) "
            f"{_points(weights.preference_mismatch)}"
        )

    # Contract hours fairness.
    projected = weekly_hours + shift_hours
    if tier is EmploymentTier.PERMANENT:
        contracted = candidate.contracted_hours_per_week or weights.default_contracted_hours
        utilisation = projected / contracted
        if utilisation < weights.utilisation_low_band:
            points += weights.under_utilised
            reasons.append(
                f"Contract hours under {weights.utilisation_low_band:.0%} "
                f"({projected:.1f}/{contracted:g}h after shift) {_points(weights.under_utilised)}"
            )
        elif utilisation <= weights.utilisation_high_band:
            points += weights.within_contract
            reasons.append(
                f"Contract hours between {weights.utilisation_low_band:.0%} and "
                f"{weights.utilisation_high_band:.0%} ({projected:.1f}/{contracted:g}h after shift) "
                f"{_points(weights.within_contract)}"
            )
        else:
            points += weights.over_contract
            reasons.append(
                f"Already at/over contract hours ({projected:.1f}/{contracted:g}h after shift) "
                f"{_points(weights.over_contract)}"
            )
    elif weekly_hours < weights.flexible_low_hours_threshold:
        points += weights.flexible_low_hours
        reasons.append(f"Low hours this week ({weekly_hours:.1f}h) {_points(weights.flexible_low_hours)}")
    elif weekly_hours > weights.flexible_high_hours_threshold:
        points += weights.flexible_high_hours
        reasons.append(f"High hours this week ({weekly_hours:.1f}h) {_points(weights.flexible_high_hours)}")
    else:
        reasons.append(f"Moderate hours this week ({weekly_hours:.1f}h) +0")

    # Wellbeing: 0 means no score recorded.
    wellbeing = candidate.wellbeing_score or 0
    if 0 < wellbeing < weights.wellbeing_low_threshold:
        points += weights.wellbeing_low
        reasons.append(
            f"Low wellbeing score ({wellbeing:g}) {_points(weights.wellbeing_low)} "
            "(avoid overloading this staff member)"
        )
    elif wellbeing > weights.wellbeing_high_threshold:
        points += weights.wellbeing_high
        reasons.append(
            f"Good wellbeing score ({wellbeing:g}) {_points(weights.wellbeing_high)} "
            "(more resilient to extra shifts)"
        )

    return ScoreResult(score=points, reasons=reasons, weekly_hours=weekly_hours)


__all__ = ["score"]
