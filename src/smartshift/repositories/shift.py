from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartshift.db.models.roster import Shift
from smartshift.schemas.roster import ShiftCreate, ShiftUpdate


async def list_shifts(
    session: AsyncSession,
    *,
    organisation_id: int | None = None,
    ward: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Shift]:
    query = select(Shift).order_by(Shift.shift_date, Shift.start_time, Shift.id)
    if organisation_id is not None:
        query = query.where(Shift.organisation_id == organisation_id)
    if ward:
        query = query.where(Shift.ward == ward)
    if status:
        query = query.where(Shift.status == status)
    if date_from:
        query = query.where(Shift.shift_date >= date_from)
    if date_to:
        query = query.where(Shift.shift_date <= date_to)
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_shift(session: AsyncSession, payload: ShiftCreate) -> Shift:
    shift = Shift(**payload.model_dump())
    session.add(shift)
    await session.flush()
    await session.refresh(shift)
    return shift


async def get_shift(session: AsyncSession, shift_id: int) -> Shift | None:
    return await session.get(Shift, shift_id)


async def update_shift(session: AsyncSession, shift: Shift, payload: ShiftUpdate) -> Shift:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(shift, field, value)
    await session.flush()
    await session.refresh(shift)
    return shift


async def delete_shift(session: AsyncSession, shift: Shift) -> None:
    await session.delete(shift)
