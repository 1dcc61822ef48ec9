from datetime import date
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from redis.exceptions import RedisError

from app.core.exceptions import EmptyDoctorSetError, InvalidRangeError, UpstreamFetchError
from app.core.logger import logger
from app.core.redis import AvailabilityCache
from app.schemas.availability import (
    AppointmentRecord,
    AvailabilityResponse,
    ClassificationResponse,
    DayClassification,
    UnavailabilityMark,
)
from app.schemas.calendar import CalendarViewState
from app.services.appointment_index import index_by_date
from app.services.appointment_store import AppointmentStore
from app.services.availability_resolver import classify_range, resolve
from app.services.calendar_projection import project
from app.services.schedule_store import ScheduleStore

INCOMPLETE_WARNING = "Could not load {source}; availability may be incomplete"

class CalendarService:
    def __init__(
        self,
        schedule_store: ScheduleStore,
        appointment_store: AppointmentStore,
        cache: Optional[AvailabilityCache] = None,
    ):
        self.schedule_store = schedule_store
        self.appointment_store = appointment_store
        self.cache = cache

    async def _cache_key(self, doctor_ids: List[UUID], start: date, end: date) -> Optional[str]:
        if self.cache is None:
            return None
        try:
            return await self.cache.snapshot_key(doctor_ids, start, end)
        except RedisError as e:
            logger.warning(f"Availability cache unavailable: {e}")
            return None

    async def _cached_marks(self, key: Optional[str]) -> Optional[List[UnavailabilityMark]]:
        if key is None:
            return None
        try:
            return await self.cache.get_marks(key)
        except RedisError as e:
            logger.warning(f"Availability cache read failed: {e}")
            return None

    async def _store_marks(self, key: Optional[str], marks: List[UnavailabilityMark]):
        if key is None:
            return
        try:
            await self.cache.set_marks(key, marks)
        except RedisError as e:
            logger.warning(f"Availability cache write failed: {e}")

    async def compute_marks(self, doctor_ids: Iterable[UUID], start: date, end: date) -> Tuple[List[UnavailabilityMark], List[str]]:
        """
        Resolve unavailable dates for the doctor set, returning (marks, warnings).

        A failed schedule or leave fetch degrades to an empty data set and adds
        a warning. Degraded results are not cached.
        """
        doctor_ids = sorted(set(doctor_ids), key=str)
        if not doctor_ids:
            raise EmptyDoctorSetError()
        if start > end:
            raise InvalidRangeError(start, end)

        # Read generations before fetching; a write during the fetch orphans this key
        cache_key = await self._cache_key(doctor_ids, start, end)
        cached = await self._cached_marks(cache_key)
        if cached is not None:
            return cached, []

        warnings = []
        try:
            schedules = await self.schedule_store.fetch_weekly_schedules(doctor_ids)
        except UpstreamFetchError as e:
            logger.warning(f"Proceeding without weekly schedules: {e}")
            schedules = []
            warnings.append(INCOMPLETE_WARNING.format(source=e.source))

        try:
            leaves = await self.schedule_store.fetch_leaves(doctor_ids, start, end)
        except UpstreamFetchError as e:
            logger.warning(f"Proceeding without leaves: {e}")
            leaves = []
            warnings.append(INCOMPLETE_WARNING.format(source=e.source))

        marks = resolve(doctor_ids, start, end, schedules, leaves)

        if not warnings:
            await self._store_marks(cache_key, marks)
        return marks, warnings

    async def get_unavailable_dates(self, doctor_ids: Iterable[UUID], start: date, end: date) -> AvailabilityResponse:
        doctor_ids = sorted(set(doctor_ids), key=str)
        marks, warnings = await self.compute_marks(doctor_ids, start, end)
        return AvailabilityResponse(
            doctor_ids=doctor_ids,
            start_date=start,
            end_date=end,
            marks=marks,
            warnings=warnings
        )

    async def get_classification(self, doctor_ids: Iterable[UUID], start: date, end: date) -> ClassificationResponse:
        doctor_ids = sorted(set(doctor_ids), key=str)
        marks, warnings = await self.compute_marks(doctor_ids, start, end)
        reasons = {mark.date: mark.reason for mark in marks}
        classified = classify_range(marks, start, end)
        return ClassificationResponse(
            doctor_ids=doctor_ids,
            start_date=start,
            end_date=end,
            days=[
                DayClassification(date=day, classification=value, reason=reasons.get(day))
                for day, value in classified.items()
            ],
            warnings=warnings
        )

    async def get_calendar_view(self, doctor_ids: Iterable[UUID], start: date, end: date, selected_date: date) -> CalendarViewState:
        doctor_ids = sorted(set(doctor_ids), key=str)
        marks, warnings = await self.compute_marks(doctor_ids, start, end)

        try:
            appointments: List[AppointmentRecord] = await self.appointment_store.fetch_appointments(doctor_ids, start, end)
        except UpstreamFetchError as e:
            logger.warning(f"Proceeding without appointments: {e}")
            appointments = []
            warnings = warnings + [INCOMPLETE_WARNING.format(source=e.source)]

        view = project(marks, index_by_date(appointments), selected_date)
        return view.model_copy(update={
            "doctor_ids": doctor_ids,
            "start_date": start,
            "end_date": end,
            "warnings": warnings,
        })
