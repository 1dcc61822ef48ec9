from datetime import date
from typing import Iterable, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import UpstreamFetchError
from app.core.logger import logger
from app.db.models import Appointment, Patient
from app.schemas.availability import AppointmentRecord

class AppointmentStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_appointments(self, doctor_ids: Iterable[UUID], range_start: date, range_end: date) -> List[AppointmentRecord]:
        stmt = select(Appointment, Patient.full_name).join(
            Patient, Patient.id == Appointment.patient_id, isouter=True
        ).where(
            Appointment.doctor_id.in_(list(doctor_ids)),
            Appointment.appointment_date >= range_start,
            Appointment.appointment_date <= range_end
        ).order_by(Appointment.appointment_date, Appointment.appointment_time)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Appointment fetch failed: {e}")
            raise UpstreamFetchError("appointments", e) from e

        records = []
        for appointment, patient_name in result.all():
            record = AppointmentRecord.model_validate(appointment)
            records.append(record.model_copy(update={"patient_name": patient_name}))
        return records
