from datetime import date
from typing import Iterable, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import UpstreamFetchError
from app.core.logger import logger
from app.db.models import DoctorLeave, DoctorSchedule
from app.schemas.availability import LeaveRecord, WeeklyScheduleEntry

class ScheduleStore:
    """Read-only access to weekly schedules and leaves, filtered by doctor."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_weekly_schedules(self, doctor_ids: Iterable[UUID]) -> List[WeeklyScheduleEntry]:
        stmt = select(DoctorSchedule).where(
            DoctorSchedule.doctor_id.in_(list(doctor_ids))
        ).order_by(DoctorSchedule.doctor_id, DoctorSchedule.day_of_week, DoctorSchedule.updated_at)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Weekly schedule fetch failed: {e}")
            raise UpstreamFetchError("weekly schedules", e) from e
        return [WeeklyScheduleEntry.model_validate(row) for row in result.scalars().all()]

    async def fetch_leaves(self, doctor_ids: Iterable[UUID], range_start: date, range_end: date) -> List[LeaveRecord]:
        stmt = select(DoctorLeave).where(
            DoctorLeave.doctor_id.in_(list(doctor_ids)),
            DoctorLeave.leave_date >= range_start,
            DoctorLeave.leave_date <= range_end
        ).order_by(DoctorLeave.leave_date, DoctorLeave.created_at)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Leave fetch failed: {e}")
            raise UpstreamFetchError("leaves", e) from e
        return [LeaveRecord.model_validate(row) for row in result.scalars().all()]
