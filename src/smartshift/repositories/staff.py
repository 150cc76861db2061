from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartshift.db.models.roster import Staff
from smartshift.schemas.roster import StaffCreate, StaffUpdate


async def list_staff(session: AsyncSession, *, organisation_id: int | None = None) -> list[Staff]:
    query = select(Staff).order_by(Staff.id)
    if organisation_id is not None:
        query = query.where(Staff.organisation_id == organisation_id)
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_staff(session: AsyncSession, payload: StaffCreate) -> Staff:
    staff = Staff(**payload.model_dump())
    session.add(staff)
    await session.flush()
    await session.refresh(staff)
    return staff


async def get_staff(session: AsyncSession, staff_id: int) -> Staff | None:
    return await session.get(Staff, staff_id)


async def update_staff(session: AsyncSession, staff: Staff, payload: StaffUpdate) -> Staff:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(staff, field, value)
    await session.flush()
    await session.refresh(staff)
    return staff


async def delete_staff(session: AsyncSession, staff: Staff) -> None:
    await session.delete(staff)
