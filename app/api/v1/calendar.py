from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import List, Literal, Optional
from uuid import UUID

from app.api.deps import get_calendar_service, get_clinic_doctor_ids
from app.core.utils import view_bounds
from app.schemas.calendar import CalendarViewState
from app.services.calendar_service import CalendarService

router = APIRouter()

CalendarView = Literal["day", "week", "month"]

@router.get("/doctors/{doctor_id}", response_model=CalendarViewState)
async def read_doctor_calendar(
    doctor_id: UUID,
    selected: Optional[date] = Query(default=None, alias="date"),
    view: CalendarView = "month",
    service: CalendarService = Depends(get_calendar_service)
):
    selected = selected or date.today()
    start, end = view_bounds(selected, view)
    return await service.get_calendar_view([doctor_id], start, end, selected)

@router.get("/clinics/{tenant_id}", response_model=CalendarViewState)
async def read_clinic_calendar(
    tenant_id: UUID,
    selected: Optional[date] = Query(default=None, alias="date"),
    view: CalendarView = "month",
    doctor_ids: List[UUID] = Depends(get_clinic_doctor_ids),
    service: CalendarService = Depends(get_calendar_service)
):
    selected = selected or date.today()
    start, end = view_bounds(selected, view)
    return await service.get_calendar_view(doctor_ids, start, end, selected)
