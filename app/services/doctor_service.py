from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from app.core.logger import logger
from app.core.redis import AvailabilityCache
from app.db.models import Doctor, DoctorLeave, DoctorSchedule, Tenant
from app.schemas.availability import LeaveType
from app.schemas.doctor import DoctorCreate
from app.schemas.schedule import LeaveCreate, ScheduleCreate

class DoctorService:
    def __init__(self, session: AsyncSession, cache: Optional[AvailabilityCache] = None):
        self.session = session
        self.cache = cache

    async def _get_doctor(self, doctor_id: UUID) -> Doctor:
        doctor = await self.session.get(Doctor, doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor

    async def _invalidate(self, doctor_id: UUID):
        if self.cache is None:
            return
        try:
            deleted = await self.cache.invalidate_doctor(doctor_id)
            logger.info(f"Dropped {deleted} cached availability entries for doctor {doctor_id}")
        except RedisError as e:
            logger.warning(f"Could not invalidate availability cache for doctor {doctor_id}: {e}")

    async def create_doctor(self, tenant_id: UUID, data: DoctorCreate) -> Doctor:
        # Verify tenant exists
        tenant = await self.session.get(Tenant, tenant_id)
        if not tenant:
            raise HTTPException(status_code=404, detail="Clinic not found")

        doctor = Doctor(tenant_id=tenant_id, **data.model_dump())
        self.session.add(doctor)
        await self.session.commit()
        await self.session.refresh(doctor)
        return doctor

    async def get_doctors(self, tenant_id: UUID) -> List[Doctor]:
        query = select(Doctor).where(Doctor.tenant_id == tenant_id).order_by(Doctor.name)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_doctor_ids(self, tenant_id: UUID) -> List[UUID]:
        tenant = await self.session.get(Tenant, tenant_id)
        if not tenant:
            raise HTTPException(status_code=404, detail="Clinic not found")
        query = select(Doctor.id).where(Doctor.tenant_id == tenant_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_weekly_schedule(self, doctor_id: UUID, schedules: List[ScheduleCreate]) -> List[DoctorSchedule]:
        await self._get_doctor(doctor_id)

        # Group input schedules by day
        schedules_by_day = {}
        for s in schedules:
            schedules_by_day.setdefault(s.day_of_week, []).append(s)

        new_schedules = []

        for day, day_schedules in schedules_by_day.items():
            # Replace whatever is stored for this weekday
            stmt = delete(DoctorSchedule).where(
                DoctorSchedule.doctor_id == doctor_id,
                DoctorSchedule.day_of_week == day
            )
            await self.session.execute(stmt)

            for schedule_data in day_schedules:
                schedule = DoctorSchedule(doctor_id=doctor_id, **schedule_data.model_dump())
                self.session.add(schedule)
                new_schedules.append(schedule)

        await self.session.commit()
        for schedule in new_schedules:
            await self.session.refresh(schedule)

        await self._invalidate(doctor_id)
        return new_schedules

    async def get_weekly_schedule(self, doctor_id: UUID) -> List[DoctorSchedule]:
        await self._get_doctor(doctor_id)
        stmt = select(DoctorSchedule).where(
            DoctorSchedule.doctor_id == doctor_id
        ).order_by(DoctorSchedule.day_of_week)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def add_leave(self, doctor_id: UUID, data: LeaveCreate) -> DoctorLeave:
        await self._get_doctor(doctor_id)

        leave = DoctorLeave(
            doctor_id=doctor_id,
            leave_date=data.leave_date,
            leave_type=data.leave_type.value,
            reason=data.reason or None
        )
        self.session.add(leave)
        await self.session.commit()
        await self.session.refresh(leave)

        logger.info(f"Leave added for doctor {doctor_id} on {leave.leave_date} ({leave.leave_type})")
        await self._invalidate(doctor_id)
        return leave

    async def quick_add_leave(self, doctor_id: UUID, days_from_today: int = 1) -> DoctorLeave:
        """Mark the doctor off for a whole day relative to today ("Off Tomorrow")."""
        target = date.today() + timedelta(days=days_from_today)
        return await self.add_leave(doctor_id, LeaveCreate(leave_date=target, leave_type=LeaveType.FULL_DAY))

    async def delete_leave(self, leave_id: UUID) -> dict:
        leave = await self.session.get(DoctorLeave, leave_id)
        if not leave:
            raise HTTPException(status_code=404, detail="Leave not found")

        doctor_id = leave.doctor_id
        await self.session.delete(leave)
        await self.session.commit()

        logger.info(f"Leave {leave_id} removed for doctor {doctor_id}")
        await self._invalidate(doctor_id)
        return {"message": "Leave cancelled successfully"}

    async def get_leaves(self, doctor_id: UUID, from_date: Optional[date] = None) -> List[DoctorLeave]:
        await self._get_doctor(doctor_id)
        from_date = from_date or date.today()
        stmt = select(DoctorLeave).where(
            DoctorLeave.doctor_id == doctor_id,
            DoctorLeave.leave_date >= from_date
        ).order_by(DoctorLeave.leave_date)
        result = await self.session.execute(stmt)
        return result.scalars().all()
