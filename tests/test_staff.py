import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from smartshift.repositories import staff as staff_repo
from smartshift.schemas.roster import StaffUpdate

from .factories import build_staff_create


@pytest.mark.anyio("asyncio")
async def test_staff_crud(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        created = await staff_repo.create_staff(session, build_staff_create(name="Amara Okafor"))
        await session.commit()

        assert created.id is not None
        fetched = await staff_repo.get_staff(session, created.id)
        assert fetched is not None
        assert fetched.name == "Amara Okafor"

        updated = await staff_repo.update_staff(
            session, created, StaffUpdate(wellbeing_score=45, preferred_shift="night")
        )
        await session.commit()
        assert updated.wellbeing_score == 45
        assert updated.preferred_shift == "night"
        assert updated.ward == "Alder"

        await staff_repo.delete_staff(session, updated)
        await session.commit()
        assert await staff_repo.list_staff(session) == []


@pytest.mark.anyio("asyncio")
async def test_list_staff_by_organisation(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        await staff_repo.create_staff(session, build_staff_create(name="A"))
        await staff_repo.create_staff(session, build_staff_create(name="B", organisation_id=2))
        await staff_repo.create_staff(session, build_staff_create(name="C"))
        await session.commit()

        members = await staff_repo.list_staff(session, organisation_id=1)

        assert [member.name for member in members] == ["A", "C"]
