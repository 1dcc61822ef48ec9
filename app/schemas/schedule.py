from pydantic import BaseModel, Field
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from app.schemas.availability import LeaveType

class ScheduleCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6) # 0=Sunday..6=Saturday
    is_available: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None

class ScheduleResponse(ScheduleCreate):
    id: UUID
    doctor_id: UUID
    updated_at: datetime

    class Config:
        from_attributes = True

class LeaveCreate(BaseModel):
    leave_date: date
    leave_type: LeaveType = LeaveType.FULL_DAY
    reason: Optional[str] = Field(default=None, max_length=300)

class LeaveResponse(BaseModel):
    id: UUID
    doctor_id: UUID
    leave_date: date
    leave_type: str
    reason: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
