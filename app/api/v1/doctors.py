from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from uuid import UUID

from app.api.deps import get_doctor_service
from app.schemas.doctor import DoctorCreate, DoctorResponse
from app.schemas.schedule import LeaveCreate, LeaveResponse, ScheduleCreate, ScheduleResponse
from app.services.doctor_service import DoctorService

router = APIRouter()

@router.post("/{tenant_id}/doctors", response_model=DoctorResponse)
async def create_doctor(
    tenant_id: UUID,
    doctor: DoctorCreate,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.create_doctor(tenant_id, doctor)

@router.get("/{tenant_id}/doctors", response_model=List[DoctorResponse])
async def read_doctors(
    tenant_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_doctors(tenant_id)

@router.put("/{doctor_id}/schedule", response_model=List[ScheduleResponse])
async def set_weekly_schedule(
    doctor_id: UUID,
    schedules: List[ScheduleCreate],
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.set_weekly_schedule(doctor_id, schedules)

@router.get("/{doctor_id}/schedule", response_model=List[ScheduleResponse])
async def read_weekly_schedule(
    doctor_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_weekly_schedule(doctor_id)

@router.post("/{doctor_id}/leaves", response_model=LeaveResponse)
async def add_leave(
    doctor_id: UUID,
    leave: LeaveCreate,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.add_leave(doctor_id, leave)

@router.post("/{doctor_id}/leaves/quick", response_model=LeaveResponse)
async def quick_add_leave(
    doctor_id: UUID,
    days_from_today: int = Query(default=1, ge=0),
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.quick_add_leave(doctor_id, days_from_today)

@router.get("/{doctor_id}/leaves", response_model=List[LeaveResponse])
async def read_leaves(
    doctor_id: UUID,
    from_date: Optional[date] = None,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_leaves(doctor_id, from_date)

@router.delete("/leaves/{leave_id}")
async def delete_leave(
    leave_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.delete_leave(leave_id)
