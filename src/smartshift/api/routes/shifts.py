from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartshift.db.session import get_db_session
from smartshift.repositories import shift as shift_repo
from smartshift.schemas.roster import ShiftCreate, ShiftRead, ShiftStatusLiteral, ShiftUpdate

router = APIRouter()


@router.get("/", response_model=list[ShiftRead])
async def list_shifts(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    organisation_id: int | None = None,
    ward: str | None = None,
    status_filter: Annotated[ShiftStatusLiteral | None, Query(alias="status")] = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ShiftRead]:
    shifts = await shift_repo.list_shifts(
        session,
        organisation_id=organisation_id,
        ward=ward,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
    )
    return [ShiftRead.model_validate(shift) for shift in shifts]


@router.post("/", response_model=ShiftRead, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: ShiftCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> ShiftRead:
    shift = await shift_repo.create_shift(session, payload)
    await session.commit()
    return ShiftRead.model_validate(shift)


@router.get("/{shift_id}", response_model=ShiftRead)
async def get_shift(
    shift_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> ShiftRead:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    return ShiftRead.model_validate(shift)


@router.put("/{shift_id}", response_model=ShiftRead)
async def update_shift(
    shift_id: int,
    payload: ShiftUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ShiftRead:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    changes = payload.model_dump(exclude_unset=True)
    filled = changes.get("filled_count", shift.filled_count)
    required = changes.get("required_count", shift.required_count)
    if filled is not None and required is not None and filled > required:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="filled_count cannot exceed required_count",
        )
    shift = await shift_repo.update_shift(session, shift, payload)
    await session.commit()
    return ShiftRead.model_validate(shift)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    await shift_repo.delete_shift(session, shift)
    await session.commit()
