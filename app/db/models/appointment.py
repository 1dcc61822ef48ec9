from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import date, datetime
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .tenant import Tenant
    from .doctor import Doctor
    from .patient import Patient

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id")
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    patient_id: UUID = Field(foreign_key="patients.id")
    appointment_date: date = Field(index=True)
    appointment_time: str # HH:mm
    status: str = Field(default="scheduled") # scheduled, confirmed, in_progress, completed, cancelled
    reason: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    tenant: "Tenant" = Relationship(back_populates="appointments")
    doctor: "Doctor" = Relationship(back_populates="appointments")
    patient: "Patient" = Relationship(back_populates="appointments")
