from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from smartshift.services.shift_time import parse_time_of_day

StaffTypeLiteral = Literal["permanent", "bank", "agency"]
ShiftStatusLiteral = Literal["open", "filled"]
GenderLiteral = Literal["any", "male", "female"]


def _validate_time(value: str | None) -> str | None:
    if value is None:
        return None
    parsed = parse_time_of_day(value)
    if parsed is None:
        raise ValueError("time must be HH:MM (24h)")
    return parsed.strftime("%H:%M")


class ShiftBase(BaseModel):
    organisation_id: int
    ward: str
    role_required: str
    gender_required: GenderLiteral = "any"
    required_count: int = Field(default=1, ge=1)
    filled_count: int = Field(default=0, ge=0)
    status: ShiftStatusLiteral = "open"
    shift_date: date
    start_time: str | None = None
    end_time: str | None = None

    normalise_times = field_validator("start_time", "end_time")(_validate_time)

    @model_validator(mode="after")
    def validate_counts(self) -> "ShiftBase":
        if self.filled_count > self.required_count:
            raise ValueError("filled_count cannot exceed required_count")
        return self


class ShiftCreate(ShiftBase):
    pass


class ShiftRead(ShiftBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ShiftUpdate(BaseModel):
    ward: str | None = None
    role_required: str | None = None
    gender_required: GenderLiteral | None = None
    required_count: int | None = Field(default=None, ge=1)
    filled_count: int | None = Field(default=None, ge=0)
    status: ShiftStatusLiteral | None = None
    shift_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None

    normalise_times = field_validator("start_time", "end_time")(_validate_time)


class StaffBase(BaseModel):
    organisation_id: int
    name: str
    phone_number: str | None = None
    ward: str | None = None
    preferred_shift: Literal["day", "night", "any"] = "day"
    staff_type: StaffTypeLiteral = "permanent"
    contracted_hours_per_week: float | None = Field(default=None, gt=0)
    mandatory_training_complete: bool | None = None
    wellbeing_score: int = Field(default=0, ge=0, le=100)


class StaffCreate(StaffBase):
    pass


class StaffRead(StaffBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class StaffUpdate(BaseModel):
    name: str | None = None
    phone_number: str | None = None
    ward: str | None = None
    preferred_shift: Literal["day", "night", "any"] | None = None
    staff_type: StaffTypeLiteral | None = None
    contracted_hours_per_week: float | None = Field(default=None, gt=0)
    mandatory_training_complete: bool | None = None
    wellbeing_score: int | None = Field(default=None, ge=0, le=100)
