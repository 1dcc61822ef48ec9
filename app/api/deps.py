from typing import List, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.redis import AvailabilityCache, get_availability_cache
from app.db.session import get_session
from app.services.appointment_service import AppointmentService
from app.services.appointment_store import AppointmentStore
from app.services.calendar_service import CalendarService
from app.services.doctor_service import DoctorService
from app.services.schedule_store import ScheduleStore

async def get_doctor_service(
    session: AsyncSession = Depends(get_session),
    cache: Optional[AvailabilityCache] = Depends(get_availability_cache)
) -> DoctorService:
    return DoctorService(session, cache)

async def get_calendar_service(
    session: AsyncSession = Depends(get_session),
    cache: Optional[AvailabilityCache] = Depends(get_availability_cache)
) -> CalendarService:
    return CalendarService(ScheduleStore(session), AppointmentStore(session), cache)

async def get_appointment_service(session: AsyncSession = Depends(get_session)) -> AppointmentService:
    return AppointmentService(session)

async def get_clinic_doctor_ids(
    tenant_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
) -> List[UUID]:
    return await service.get_doctor_ids(tenant_id)
