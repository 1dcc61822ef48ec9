from fastapi import APIRouter
from app.api.v1 import doctors, availability, calendar, appointments

api_router = APIRouter()

api_router.include_router(doctors.router, prefix="/doctors", tags=["doctors"])
api_router.include_router(availability.router, prefix="/availability", tags=["availability"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
