from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

class DoctorBase(BaseModel):
    name: str
    specialty: Optional[str] = None
    consult_duration_minutes: int = 15

class DoctorCreate(DoctorBase):
    pass

class DoctorResponse(DoctorBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
