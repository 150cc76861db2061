from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartshift.db.base import Base


class StaffType(str, Enum):  # type: ignore[call-arg]
    PERMANENT = "permanent"
    BANK = "bank"
    AGENCY = "agency"


class ShiftStatus(str, Enum):  # type: ignore[call-arg]
    OPEN = "open"
    FILLED = "filled"


class Staff(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    organisation_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(32))
    ward: Mapped[Optional[str]] = mapped_column(String(120))
    preferred_shift: Mapped[str] = mapped_column(String(16), default="day")
    staff_type: Mapped[str] = mapped_column(String(16), default=StaffType.PERMANENT.value)
    contracted_hours_per_week: Mapped[Optional[float]] = mapped_column(Numeric(5, 2))
    mandatory_training_complete: Mapped[Optional[bool]] = mapped_column(Boolean)
    wellbeing_score: Mapped[int] = mapped_column(Integer, default=0)

    assignments: Mapped[list["ShiftAssignment"]] = relationship(
        back_populates="staff", cascade="all, delete-orphan"
    )


class Shift(Base):
    __table_args__ = (
        CheckConstraint("filled_count <= required_count", name="ck_shift_filled_within_required"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    organisation_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    ward: Mapped[str] = mapped_column(String(120), nullable=False)
    role_required: Mapped[str] = mapped_column(String(120), nullable=False)
    gender_required: Mapped[str] = mapped_column(String(16), default="any")
    required_count: Mapped[int] = mapped_column(Integer, default=1)
    filled_count: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(String(16), default=ShiftStatus.OPEN.value)
    shift_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    start_time: Mapped[Optional[str]] = mapped_column(String(5))
    end_time: Mapped[Optional[str]] = mapped_column(String(5))

    assignments: Mapped[list["ShiftAssignment"]] = relationship(
        back_populates="shift", cascade="all, delete-orphan"
    )


class ShiftAssignment(Base):
    __table_args__ = (UniqueConstraint("shift_id", "staff_id", name="ux_shiftassignment_shift_staff"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shift_id: Mapped[int] = mapped_column(ForeignKey("shift.id", ondelete="CASCADE"), index=True)
    staff_id: Mapped[int] = mapped_column(ForeignKey("staff.id", ondelete="CASCADE"), index=True)
    manager_override: Mapped[bool] = mapped_column(Boolean, default=False)
    accepted_at: Mapped[datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)

    shift: Mapped[Shift] = relationship(back_populates="assignments")
    staff: Mapped[Staff] = relationship(back_populates="assignments")
