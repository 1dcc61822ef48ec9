from datetime import date
from typing import Dict, Iterable, List

from app.schemas.availability import AppointmentRecord, MarkKind, UnavailabilityMark
from app.schemas.calendar import CalendarDay, CalendarViewState, DateBadge, SelectedDateView

def _marks_by_date(marks: Iterable[UnavailabilityMark]) -> Dict[date, UnavailabilityMark]:
    by_date: Dict[date, UnavailabilityMark] = {}
    for mark in marks:
        existing = by_date.get(mark.date)
        # Leave outranks day off if both ever reach us for one date
        if existing is None or (mark.kind == MarkKind.LEAVE and existing.kind != MarkKind.LEAVE):
            by_date[mark.date] = mark
    return by_date

def project(
    marks: Iterable[UnavailabilityMark],
    density: Dict[date, List[AppointmentRecord]],
    selected_date: date,
) -> CalendarViewState:
    """
    Build the calendar display state from resolver marks and the appointment index.

    Every marked date gets a badge. Every date with a mark or with
    appointments gets a day entry. The selected date carries its appointments
    sorted by time and the reason it is unavailable, if any.
    """
    by_date = _marks_by_date(marks)

    badges = [DateBadge(date=d, kind=by_date[d].kind) for d in sorted(by_date)]

    days = []
    for current in sorted(set(by_date) | set(density)):
        mark = by_date.get(current)
        count = len(density.get(current, []))
        days.append(CalendarDay(
            date=current,
            badge=mark.kind if mark else None,
            reason=mark.reason if mark else None,
            appointment_count=count,
            has_appointments=count > 0,
            is_selectable=mark is None,
        ))

    selected_mark = by_date.get(selected_date)
    # HH:mm is fixed width, so string order is time order
    selected_appointments = sorted(
        density.get(selected_date, []),
        key=lambda appointment: appointment.appointment_time,
    )
    selected = SelectedDateView(
        date=selected_date,
        appointments=selected_appointments,
        unavailable_reason=selected_mark.reason if selected_mark else None,
        is_selectable=selected_mark is None,
    )

    return CalendarViewState(badges=badges, days=days, selected=selected)
