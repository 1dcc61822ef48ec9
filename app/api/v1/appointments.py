from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import List
from uuid import UUID

from app.api.deps import get_appointment_service
from app.schemas.appointment import AppointmentCreate
from app.schemas.availability import AppointmentRecord
from app.services.appointment_service import AppointmentService

router = APIRouter()

@router.get("/", response_model=List[AppointmentRecord])
async def read_appointments(
    start_date: date,
    end_date: date,
    doctor_id: List[UUID] = Query(...),
    service: AppointmentService = Depends(get_appointment_service)
):
    return await service.list_appointments(doctor_id, start_date, end_date)

@router.post("/", response_model=AppointmentRecord)
async def create_appointment(
    request: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service)
):
    return await service.create_appointment(request)
