from pydantic import BaseModel, Field
from uuid import UUID
from datetime import date
from typing import Optional

class AppointmentCreate(BaseModel):
    doctor_id: UUID
    patient_id: UUID
    appointment_date: date
    appointment_time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$") # HH:mm
    reason: Optional[str] = None
