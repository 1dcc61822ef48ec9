import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from app.schemas.availability import AppointmentRecord, MarkKind

class DateBadge(BaseModel):
    date: dt.date
    kind: MarkKind

class CalendarDay(BaseModel):
    date: dt.date
    badge: Optional[MarkKind] = None
    reason: Optional[str] = None
    appointment_count: int = 0
    has_appointments: bool = False
    is_selectable: bool = True

class SelectedDateView(BaseModel):
    date: dt.date
    appointments: List[AppointmentRecord] = []
    unavailable_reason: Optional[str] = None
    is_selectable: bool = True

class CalendarViewState(BaseModel):
    badges: List[DateBadge]
    days: List[CalendarDay]
    selected: SelectedDateView
    doctor_ids: List[UUID] = []
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    warnings: List[str] = []
