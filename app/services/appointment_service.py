from datetime import date
from typing import List
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import logger
from app.db.models import Appointment, Doctor, Patient
from app.schemas.appointment import AppointmentCreate
from app.schemas.availability import AppointmentRecord
from app.services.appointment_store import AppointmentStore
from app.services.availability_resolver import resolve
from app.services.schedule_store import ScheduleStore

class AppointmentService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.schedule_store = ScheduleStore(session)
        self.appointment_store = AppointmentStore(session)

    async def list_appointments(self, doctor_ids: List[UUID], start: date, end: date) -> List[AppointmentRecord]:
        if start > end:
            raise HTTPException(status_code=400, detail="start_date must not be after end_date")
        return await self.appointment_store.fetch_appointments(doctor_ids, start, end)

    async def create_appointment(self, data: AppointmentCreate) -> AppointmentRecord:
        # 1. Validate Doctor and Patient
        doctor = await self.session.get(Doctor, data.doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")

        patient = await self.session.get(Patient, data.patient_id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")

        # 2. Refuse dates the doctor is unavailable on
        day = data.appointment_date
        schedules = await self.schedule_store.fetch_weekly_schedules([doctor.id])
        leaves = await self.schedule_store.fetch_leaves([doctor.id], day, day)
        marks = resolve([doctor.id], day, day, schedules, leaves)
        if marks:
            raise HTTPException(
                status_code=409,
                detail=f"Doctor is not available on {day.isoformat()}: {marks[0].reason}"
            )

        # 3. Create Appointment
        appointment = Appointment(
            tenant_id=doctor.tenant_id,
            doctor_id=doctor.id,
            patient_id=patient.id,
            appointment_date=day,
            appointment_time=data.appointment_time,
            status="scheduled",
            reason=data.reason
        )
        self.session.add(appointment)
        await self.session.commit()
        await self.session.refresh(appointment)

        logger.info(f"Appointment {appointment.id} booked with doctor {doctor.id} on {day} at {appointment.appointment_time}")

        record = AppointmentRecord.model_validate(appointment)
        return record.model_copy(update={"patient_name": patient.full_name})
