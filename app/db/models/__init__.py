from sqlmodel import SQLModel
from .tenant import Tenant
from .patient import Patient
from .doctor import Doctor
from .schedule import DoctorSchedule
from .leave import DoctorLeave
from .appointment import Appointment

__all__ = [
    "SQLModel",
    "Tenant",
    "Patient",
    "Doctor",
    "DoctorSchedule",
    "DoctorLeave",
    "Appointment",
]
