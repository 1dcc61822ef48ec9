from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .doctor import Doctor
    from .patient import Patient
    from .appointment import Appointment

class Tenant(SQLModel, table=True):
    __tablename__ = "tenants"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    slug: str = Field(unique=True, index=True)
    city: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    doctors: List["Doctor"] = Relationship(back_populates="tenant")
    patients: List["Patient"] = Relationship(back_populates="tenant")
    appointments: List["Appointment"] = Relationship(back_populates="tenant")
