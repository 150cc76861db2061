"""Seed a small ward roster for local development and print a sample ranking.

Run this after applying Alembic migrations:

    python -m alembic upgrade head
    python scripts/seed_demo.py --organisation 1
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from smartshift.core.config import get_policy, get_settings
from smartshift.db.models.roster import Shift, ShiftAssignment, Staff
from smartshift.repositories import assignment as assignment_repo
from smartshift.repositories import staff as staff_repo
from smartshift.services.adapters import commitments_from_rows, profile_from_row, shift_from_row
from smartshift.services.domain import Candidate
from smartshift.services.ranking import rank_candidates

WARDS = ("Alder", "Redwood", "Willow")

DEMO_STAFF = (
    # name, ward, preferred shift, staff type, contracted hours, training, wellbeing
    ("Amara Okafor", "Alder", "day", "permanent", 37.5, True, 80),
    ("Ben Clarke", "Alder", "night", "permanent", 37.5, True, 55),
    ("Chloe Evans", "Redwood", "any", "bank", None, True, 65),
    ("Dev Patel", "Willow", "day", "agency", None, None, 0),
    ("Eilidh Ross", "Alder", "day", "permanent", 22.5, False, 25),
    ("Femi Adeyemi", "Redwood", "night", "agency", None, True, 72),
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo staff and shifts for SmartShift.")
    parser.add_argument("--organisation", type=int, default=1, help="Organisation id to seed.")
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=date.today(),
        help="First shift date (YYYY-MM-DD); defaults to today.",
    )
    parser.add_argument("--days", type=int, default=7, help="Number of days of shifts to create.")
    return parser.parse_args()


def _build_shifts(organisation_id: int, start: date, days: int) -> list[Shift]:
    shifts: list[Shift] = []
    for offset in range(days):
        shift_date = start + timedelta(days=offset)
        for ward in WARDS:
            shifts.append(
                Shift(
                    organisation_id=organisation_id,
                    ward=ward,
                    role_required="Registered Nurse",
                    shift_date=shift_date,
                    start_time="07:30",
                    end_time="19:30",
                    required_count=2,
                )
            )
            shifts.append(
                Shift(
                    organisation_id=organisation_id,
                    ward=ward,
                    role_required="Healthcare Assistant",
                    shift_date=shift_date,
                    start_time="19:30",
                    end_time="08:00",
                    required_count=1,
                )
            )
    return shifts


async def seed(organisation_id: int, start: date, days: int) -> None:
    settings = get_settings()
    engine = create_async_engine(settings.database_url, future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        existing_staff = await session.scalar(
            select(func.count(Staff.id)).where(Staff.organisation_id == organisation_id)
        )
        if not existing_staff:
            session.add_all(
                [
                    Staff(
                        organisation_id=organisation_id,
                        name=name,
                        ward=ward,
                        preferred_shift=preferred,
                        staff_type=staff_type,
                        contracted_hours_per_week=hours,
                        mandatory_training_complete=training,
                        wellbeing_score=wellbeing,
                    )
                    for name, ward, preferred, staff_type, hours, training, wellbeing in DEMO_STAFF
                ]
            )

        existing_shifts = await session.scalar(
            select(func.count(Shift.id)).where(Shift.organisation_id == organisation_id)
        )
        if not existing_shifts:
            shifts = _build_shifts(organisation_id, start, days)
            session.add_all(shifts)
            await session.flush()

            # Ben already works the first Alder night.
            ben = await session.scalar(select(Staff).where(Staff.name == "Ben Clarke"))
            first_night = next(s for s in shifts if s.ward == "Alder" and s.start_time == "19:30")
            if ben is not None:
                session.add(ShiftAssignment(shift_id=first_night.id, staff_id=ben.id))
                first_night.filled_count = 1
                first_night.status = "filled"

        await session.commit()

        target = await session.scalar(
            select(Shift)
            .where(Shift.organisation_id == organisation_id)
            .where(Shift.ward == "Alder")
            .where(Shift.start_time == "07:30")
            .order_by(Shift.shift_date)
            .offset(1)
        )
        if target is not None:
            await _print_ranking(session, target)

    await engine.dispose()
    print("Seed data inserted (skipped existing rows).")


async def _print_ranking(session, shift: Shift) -> None:
    policy = get_policy()
    members = await staff_repo.list_staff(session, organisation_id=shift.organisation_id)
    rows = await assignment_repo.load_commitment_rows(
        session, [member.id for member in members], shift.shift_date, exclude_shift_id=shift.id
    )
    candidates = [
        Candidate(profile_from_row(member), tuple(commitments_from_rows(rows.get(member.id, []))))
        for member in members
    ]
    result = rank_candidates(shift_from_row(shift), candidates, policy)

    print(f"Ranking for {shift.ward} {shift.role_required} on {shift.shift_date} {shift.start_time}-{shift.end_time}")
    for ranked in result.all_ranked:
        marker = "eligible" if ranked.eligible else "blocked"
        print(f"  {ranked.score:>6.1f}  {ranked.staff_name or ranked.staff_id:<16} {marker}")
        for reason in ranked.reasons:
            print(f"          - {reason}")
        for violation in ranked.violations:
            print(f"          ! {violation}")


def main() -> None:
    args = _parse_args()
    asyncio.run(seed(args.organisation, args.start, args.days))


if __name__ == "__main__":
    main()
