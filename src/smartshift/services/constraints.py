"""
Working-time and compliance predicates for a single candidate and shift.

Every predicate is pure and independent: it looks at the candidate's existing
commitments, the candidate shift and an immutable policy, and returns an
``EligibilityVerdict``. Callers that want every reason (rather than the first)
should use :func:`evaluate_eligibility`, which never short-circuits.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Sequence

from smartshift.services.domain import Commitment, EligibilityVerdict, Rule, Shift, ShiftType
from smartshift.services.policy import EligibilityPolicy, load_default_policy
from smartshift.services.shift_time import (
    classify,
    duration_hours,
    overlaps,
    shift_interval,
)


def _describe(commitment: Commitment) -> str:
    return f"{commitment.shift_date} {commitment.start_time or '?'}-{commitment.end_time or '?'}"


def _skipped(rule: Rule, check: str) -> EligibilityVerdict:
    return EligibilityVerdict(
        rule=rule,
        ok=True,
        reason=f"New shift has no valid date; skipping {check} check",
    )


def _window_start(reference_day: date, window_days: int) -> date:
    return reference_day - timedelta(days=window_days - 1)


def weekly_hours_in_window(
    commitments: Iterable[Commitment],
    reference_day: date,
    *,
    window_days: int = 7,
    default_hours: float = 12.0,
) -> float:
    """Hours of commitments starting within the ``window_days`` ending on ``reference_day``."""

    window_start = _window_start(reference_day, window_days)
    total = 0.0
    for commitment in commitments:
        interval = shift_interval(commitment, default_hours=default_hours)
        if interval is None:
            continue
        if window_start <= interval.start.date() <= reference_day:
            total += duration_hours(interval)
    return total


def check_double_booking(
    commitments: Sequence[Commitment], shift: Shift, policy: EligibilityPolicy
) -> EligibilityVerdict:
    new_range = shift_interval(shift, default_hours=policy.default_shift_hours)
    if new_range is None:
        return _skipped(Rule.DOUBLE_BOOKING, "double-booking")

    for commitment in commitments:
        existing = shift_interval(commitment, default_hours=policy.default_shift_hours)
        if existing is not None and overlaps(existing, new_range):
            return EligibilityVerdict(
                rule=Rule.DOUBLE_BOOKING,
                ok=False,
                reason=f"New shift overlaps with an existing assignment ({_describe(commitment)})",
                details={"conflicting_shift": _describe(commitment)},
            )
    return EligibilityVerdict(rule=Rule.DOUBLE_BOOKING, ok=True)


def check_rest_period(
    commitments: Sequence[Commitment], shift: Shift, policy: EligibilityPolicy
) -> EligibilityVerdict:
    """
    Require ``min_rest_hours`` between the end of any earlier shift and the new start.

    Earlier means the commitment starts before the new shift. The closest such
    commitment decides the gap, so a night shift still running when the new shift
    begins reports a negative gap.
    """

    new_range = shift_interval(shift, default_hours=policy.default_shift_hours)
    if new_range is None:
        return _skipped(Rule.REST_PERIOD, "rest-period")

    closest: tuple[float, Commitment] | None = None
    for commitment in commitments:
        previous = shift_interval(commitment, default_hours=policy.default_shift_hours)
        if previous is None or previous.end <= previous.start:
            continue
        if previous.start >= new_range.start:
            continue
        gap = (new_range.start - previous.end).total_seconds() / 3600
        if closest is None or gap < closest[0]:
            closest = (gap, commitment)

    if closest is None or closest[0] >= policy.min_rest_hours:
        return EligibilityVerdict(rule=Rule.REST_PERIOD, ok=True)

    gap, commitment = closest
    previous_type = classify(shift_interval(commitment, default_hours=policy.default_shift_hours))
    new_type = classify(new_range)
    return EligibilityVerdict(
        rule=Rule.REST_PERIOD,
        ok=False,
        reason=(
            f"Insufficient rest between shifts ({gap:.1f}h < {policy.min_rest_hours:g}h). "
            f"Previous shift type: {previous_type.value}, new shift type: {new_type.value}"
        ),
        details={
            "gap_hours": round(gap, 2),
            "previous_shift": _describe(commitment),
            "previous_shift_type": previous_type.value,
            "new_shift_type": new_type.value,
        },
    )


def consecutive_day_streak(worked_days: set[date], start_day: date) -> int:
    streak = 0
    cursor = start_day
    while cursor in worked_days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def check_consecutive_days(
    commitments: Sequence[Commitment], shift: Shift, policy: EligibilityPolicy
) -> EligibilityVerdict:
    new_range = shift_interval(shift, default_hours=policy.default_shift_hours)
    if new_range is None:
        return _skipped(Rule.CONSECUTIVE_DAYS, "consecutive-days")

    worked_days = {new_range.start.date()}
    for commitment in commitments:
        interval = shift_interval(commitment, default_hours=policy.default_shift_hours)
        if interval is not None:
            worked_days.add(interval.start.date())

    streak = consecutive_day_streak(worked_days, new_range.start.date())
    if streak > policy.max_consecutive_days:
        return EligibilityVerdict(
            rule=Rule.CONSECUTIVE_DAYS,
            ok=False,
            reason=f"Consecutive days limit exceeded: {streak} > {policy.max_consecutive_days}",
            details={"streak": streak},
        )
    return EligibilityVerdict(rule=Rule.CONSECUTIVE_DAYS, ok=True, details={"streak": streak})


def check_weekly_hours(
    commitments: Sequence[Commitment], shift: Shift, policy: EligibilityPolicy
) -> EligibilityVerdict:
    new_range = shift_interval(shift, default_hours=policy.default_shift_hours)
    if new_range is None:
        return _skipped(Rule.WEEKLY_HOURS, "weekly hours")

    existing = weekly_hours_in_window(
        commitments,
        new_range.start.date(),
        window_days=policy.weekly_window_days,
        default_hours=policy.default_shift_hours,
    )
    total = existing + duration_hours(new_range)
    details: dict[str, object] = {
        "existing_hours": round(existing, 2),
        "total_hours_with_new": round(total, 2),
    }

    if total > policy.weekly_hard_cap_hours:
        details["breached_hard_cap"] = True
        return EligibilityVerdict(
            rule=Rule.WEEKLY_HOURS,
            ok=False,
            reason=f"Weekly hours hard cap exceeded: {total:.1f}h > {policy.weekly_hard_cap_hours:g}h",
            details=details,
        )

    if total > policy.weekly_soft_threshold_hours:
        details["legal_warning"] = (
            f"Weekly hours above working time guidance ({policy.weekly_soft_threshold_hours:g}h). "
            f"Total with this shift: {total:.1f}h"
        )
    return EligibilityVerdict(rule=Rule.WEEKLY_HOURS, ok=True, details=details)


def check_night_shift_limit(
    commitments: Sequence[Commitment], shift: Shift, policy: EligibilityPolicy
) -> EligibilityVerdict:
    new_range = shift_interval(shift, default_hours=policy.default_shift_hours)
    if new_range is None:
        return _skipped(Rule.NIGHT_SHIFT_LIMIT, "night shift")
    if classify(new_range) is not ShiftType.NIGHT:
        return EligibilityVerdict(rule=Rule.NIGHT_SHIFT_LIMIT, ok=True, details={"total_nights_with_new": 0})

    reference_day = new_range.start.date()
    window_start = _window_start(reference_day, policy.night_window_days)
    nights = 0
    for commitment in commitments:
        interval = shift_interval(commitment, default_hours=policy.default_shift_hours)
        if interval is None:
            continue
        if window_start <= interval.start.date() <= reference_day and classify(interval) is ShiftType.NIGHT:
            nights += 1

    total = nights + 1
    if total > policy.max_night_shifts:
        return EligibilityVerdict(
            rule=Rule.NIGHT_SHIFT_LIMIT,
            ok=False,
            reason=(
                f"Night shift limit exceeded: {total} > {policy.max_night_shifts} "
                f"in {policy.night_window_days} days"
            ),
            details={"total_nights_with_new": total},
        )
    return EligibilityVerdict(rule=Rule.NIGHT_SHIFT_LIMIT, ok=True, details={"total_nights_with_new": total})


def check_mandatory_training(
    training_complete: bool | None, *, manager_override: bool = False
) -> EligibilityVerdict:
    if training_complete is None:
        return EligibilityVerdict(
            rule=Rule.MANDATORY_TRAINING,
            ok=True,
            reason="No training data available; defaulting to allow",
        )
    if training_complete:
        return EligibilityVerdict(rule=Rule.MANDATORY_TRAINING, ok=True)
    if manager_override:
        message = "Mandatory training overdue but manager override is allowed for this operation"
        return EligibilityVerdict(
            rule=Rule.MANDATORY_TRAINING,
            ok=True,
            reason=message,
            details={"warning": message},
        )
    return EligibilityVerdict(
        rule=Rule.MANDATORY_TRAINING,
        ok=False,
        reason="Mandatory training overdue; staff cannot take this shift without manager override",
    )


SCHEDULE_PREDICATES = (
    check_double_booking,
    check_rest_period,
    check_consecutive_days,
    check_weekly_hours,
    check_night_shift_limit,
)


def evaluate_eligibility(
    commitments: Sequence[Commitment],
    shift: Shift,
    policy: EligibilityPolicy | None = None,
    *,
    training_complete: bool | None = None,
    manager_override: bool = False,
) -> list[EligibilityVerdict]:
    """Run every predicate and return one verdict each, in a fixed order."""

    if shift is None:
        raise ValueError("evaluate_eligibility requires a shift")
    policy = policy or load_default_policy().eligibility
    commitments = list(commitments or ())

    verdicts = [predicate(commitments, shift, policy) for predicate in SCHEDULE_PREDICATES]
    verdicts.append(check_mandatory_training(training_complete, manager_override=manager_override))
    return verdicts


__all__ = [
    "SCHEDULE_PREDICATES",
    "check_consecutive_days",
    "check_double_booking",
    "check_mandatory_training",
    "check_night_shift_limit",
    "check_rest_period",
    "check_weekly_hours",
    "consecutive_day_streak",
    "evaluate_eligibility",
    "weekly_hours_in_window",
]
