from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartshift.db.models.roster import Shift, ShiftAssignment, ShiftStatus

# Commitments this far either side of a shift date can affect its eligibility
# (the night-shift window is the widest lookback).
COMMITMENT_LOOKBACK_DAYS = 14
COMMITMENT_LOOKAHEAD_DAYS = 1


async def list_assignments_for_shift(session: AsyncSession, shift_id: int) -> list[ShiftAssignment]:
    result = await session.execute(
        select(ShiftAssignment).where(ShiftAssignment.shift_id == shift_id).order_by(ShiftAssignment.id)
    )
    return list(result.scalars().all())


async def get_assignment(
    session: AsyncSession, shift_id: int, staff_id: int
) -> ShiftAssignment | None:
    result = await session.execute(
        select(ShiftAssignment)
        .where(ShiftAssignment.shift_id == shift_id)
        .where(ShiftAssignment.staff_id == staff_id)
    )
    return result.scalars().first()


async def load_commitment_rows(
    session: AsyncSession,
    staff_ids: Iterable[int],
    reference_date: date,
    *,
    lookback_days: int = COMMITMENT_LOOKBACK_DAYS,
    lookahead_days: int = COMMITMENT_LOOKAHEAD_DAYS,
    exclude_shift_id: int | None = None,
) -> dict[int, list[Shift]]:
    """Shifts each staff member is already assigned to around ``reference_date``."""

    staff_ids = list(staff_ids)
    if not staff_ids:
        return {}

    query = (
        select(ShiftAssignment.staff_id, Shift)
        .join(Shift, Shift.id == ShiftAssignment.shift_id)
        .where(ShiftAssignment.staff_id.in_(staff_ids))
        .where(Shift.shift_date >= reference_date - timedelta(days=lookback_days))
        .where(Shift.shift_date <= reference_date + timedelta(days=lookahead_days))
        .order_by(Shift.shift_date, Shift.start_time)
    )
    if exclude_shift_id is not None:
        query = query.where(Shift.id != exclude_shift_id)

    result = await session.execute(query)
    rows: dict[int, list[Shift]] = defaultdict(list)
    for staff_id, shift in result.all():
        rows[staff_id].append(shift)
    return dict(rows)


async def create_assignment(
    session: AsyncSession, shift: Shift, staff_id: int, *, manager_override: bool = False
) -> ShiftAssignment:
    assignment = ShiftAssignment(shift_id=shift.id, staff_id=staff_id, manager_override=manager_override)
    session.add(assignment)
    shift.filled_count = (shift.filled_count or 0) + 1
    if shift.filled_count >= shift.required_count:
        shift.status = ShiftStatus.FILLED.value
    await session.flush()
    await session.refresh(assignment)
    return assignment
