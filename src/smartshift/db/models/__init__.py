from .roster import Shift, ShiftAssignment, ShiftStatus, Staff, StaffType

__all__ = [
    "Shift",
    "ShiftAssignment",
    "ShiftStatus",
    "Staff",
    "StaffType",
]
