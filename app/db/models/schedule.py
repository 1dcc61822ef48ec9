from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime, time
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor

class DoctorSchedule(SQLModel, table=True):
    __tablename__ = "doctor_schedules"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    day_of_week: int # 0=Sunday..6=Saturday
    is_available: bool = Field(default=True)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    doctor: "Doctor" = Relationship(back_populates="schedules")
