import datetime as dt
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

class LeaveType(str, Enum):
    FULL_DAY = "full_day"
    PARTIAL_DAY = "partial_day"
    HALF_DAY_MORNING = "half_day_morning"
    HALF_DAY_EVENING = "half_day_evening"

class MarkKind(str, Enum):
    LEAVE = "leave"
    DAY_OFF = "day_off"

class DateClassification(str, Enum):
    LEAVE = "leave"
    DAY_OFF = "day_off"
    AVAILABLE = "available"

class WeeklyScheduleEntry(BaseModel):
    doctor_id: UUID
    day_of_week: int # 0=Sunday..6=Saturday, checked by the resolver
    is_available: bool = True

    class Config:
        from_attributes = True
        frozen = True

class LeaveRecord(BaseModel):
    doctor_id: UUID
    leave_date: dt.date
    # Kept as a plain string so unknown stored kinds are ignored, not rejected
    leave_type: str = LeaveType.FULL_DAY.value
    reason: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True

    @property
    def is_full_day(self) -> bool:
        return self.leave_type == LeaveType.FULL_DAY.value

class AppointmentRecord(BaseModel):
    id: Optional[UUID] = None
    doctor_id: UUID
    appointment_date: dt.date
    appointment_time: str # HH:mm, 24-hour
    status: str = "scheduled"
    patient_id: Optional[UUID] = None
    patient_name: Optional[str] = None
    reason: Optional[str] = None

    class Config:
        from_attributes = True

    @field_validator("appointment_date", mode="before")
    @classmethod
    def naive_calendar_date(cls, value):
        # Truncate timestamps to their calendar date; no timezone conversion
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    @field_validator("appointment_time", mode="before")
    @classmethod
    def clock_string(cls, value):
        if isinstance(value, dt.time):
            return value.strftime("%H:%M")
        return value

class UnavailabilityMark(BaseModel):
    date: dt.date
    kind: MarkKind
    reason: str

    class Config:
        frozen = True

class DayClassification(BaseModel):
    date: dt.date
    classification: DateClassification
    reason: Optional[str] = None

class AvailabilityResponse(BaseModel):
    doctor_ids: List[UUID]
    start_date: dt.date
    end_date: dt.date
    marks: List[UnavailabilityMark]
    warnings: List[str] = []

class ClassificationResponse(BaseModel):
    doctor_ids: List[UUID]
    start_date: dt.date
    end_date: dt.date
    days: List[DayClassification]
    warnings: List[str] = []
