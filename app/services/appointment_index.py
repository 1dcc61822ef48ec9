from datetime import date
from typing import Dict, Iterable, List

from app.schemas.availability import AppointmentRecord

def index_by_date(appointments: Iterable[AppointmentRecord]) -> Dict[date, List[AppointmentRecord]]:
    """
    Group appointments by calendar date.

    Input order is preserved within each date. Sorting by time is left to the
    consumer.
    """
    index: Dict[date, List[AppointmentRecord]] = {}
    for appointment in appointments:
        index.setdefault(appointment.appointment_date, []).append(appointment)
    return index
