from datetime import date
from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID

from app.api.deps import get_calendar_service, get_clinic_doctor_ids
from app.schemas.availability import AvailabilityResponse, ClassificationResponse
from app.services.calendar_service import CalendarService

router = APIRouter()

@router.get("/doctors/{doctor_id}", response_model=AvailabilityResponse)
async def read_doctor_availability(
    doctor_id: UUID,
    start_date: date,
    end_date: date,
    service: CalendarService = Depends(get_calendar_service)
):
    return await service.get_unavailable_dates([doctor_id], start_date, end_date)

@router.get("/doctors/{doctor_id}/days", response_model=ClassificationResponse)
async def read_doctor_classification(
    doctor_id: UUID,
    start_date: date,
    end_date: date,
    service: CalendarService = Depends(get_calendar_service)
):
    return await service.get_classification([doctor_id], start_date, end_date)

@router.get("/clinics/{tenant_id}", response_model=AvailabilityResponse)
async def read_clinic_availability(
    tenant_id: UUID,
    start_date: date,
    end_date: date,
    doctor_ids: List[UUID] = Depends(get_clinic_doctor_ids),
    service: CalendarService = Depends(get_calendar_service)
):
    return await service.get_unavailable_dates(doctor_ids, start_date, end_date)

@router.get("/clinics/{tenant_id}/days", response_model=ClassificationResponse)
async def read_clinic_classification(
    tenant_id: UUID,
    start_date: date,
    end_date: date,
    doctor_ids: List[UUID] = Depends(get_clinic_doctor_ids),
    service: CalendarService = Depends(get_calendar_service)
):
    return await service.get_classification(doctor_ids, start_date, end_date)
