from fastapi import APIRouter

from . import assignments, shifts, staff

api_router = APIRouter()

api_router.include_router(shifts.router, prefix="/shifts", tags=["shifts"])
api_router.include_router(staff.router, prefix="/staff", tags=["staff"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
