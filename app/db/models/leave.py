from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import date, datetime
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor

class DoctorLeave(SQLModel, table=True):
    __tablename__ = "doctor_leaves"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    leave_date: date = Field(index=True)
    leave_type: str = Field(default="full_day") # full_day, partial_day, half_day_morning, half_day_evening
    reason: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    doctor: "Doctor" = Relationship(back_populates="leaves")
