"""
Availability resolution for one doctor or a whole clinic.

Works on materialized schedule and leave lists; fetching them is the job of
the store adapters. Everything here is pure and synchronous.

Precedence rules:
    - A full-day leave marks the date as `leave`. Partial-day leaves are ignored.
    - A weekday flagged unavailable marks the date as `day_off`, unless the
      date is already a leave.
    - For several doctors, a weekday is only a day off when every doctor has
      it flagged unavailable. Any single doctor's leave still marks the date
      as `leave`.
"""

from datetime import date
from typing import Dict, Iterable, List, Set
from uuid import UUID

from app.core.exceptions import DataIntegrityError, EmptyDoctorSetError, InvalidRangeError
from app.core.utils import iter_dates, to_db_weekday, weekday_name
from app.schemas.availability import (
    DateClassification,
    LeaveRecord,
    MarkKind,
    UnavailabilityMark,
    WeeklyScheduleEntry,
)

DEFAULT_LEAVE_REASON = "On Leave"


def _check_range(range_start: date, range_end: date) -> None:
    if range_start > range_end:
        raise InvalidRangeError(range_start, range_end)


def weekdays_off(schedules: Iterable[WeeklyScheduleEntry]) -> Dict[UUID, Set[int]]:
    """
    Collect the unavailable weekdays of each doctor.

    Duplicate rows for the same doctor and weekday are OR-ed: one row with
    `is_available=False` is enough to take the weekday off.
    """
    off: Dict[UUID, Set[int]] = {}
    for entry in schedules:
        if not 0 <= entry.day_of_week <= 6:
            raise DataIntegrityError(
                f"Invalid day_of_week {entry.day_of_week} for doctor {entry.doctor_id}"
            )
        doctor_off = off.setdefault(entry.doctor_id, set())
        if not entry.is_available:
            doctor_off.add(entry.day_of_week)
    return off


def _leave_marks(
    leaves: Iterable[LeaveRecord],
    range_start: date,
    range_end: date,
) -> Dict[date, UnavailabilityMark]:
    # date -> doctor -> first reason seen
    on_leave: Dict[date, Dict[UUID, str | None]] = {}
    for leave in leaves:
        if not leave.is_full_day:
            continue
        if leave.leave_date < range_start or leave.leave_date > range_end:
            continue
        doctors = on_leave.setdefault(leave.leave_date, {})
        if not doctors.get(leave.doctor_id):
            doctors[leave.doctor_id] = leave.reason

    marks = {}
    for leave_date, doctors in on_leave.items():
        if len(doctors) == 1:
            reason = next(iter(doctors.values())) or DEFAULT_LEAVE_REASON
        else:
            reason = DEFAULT_LEAVE_REASON
        marks[leave_date] = UnavailabilityMark(date=leave_date, kind=MarkKind.LEAVE, reason=reason)
    return marks


def resolve(
    doctor_ids: Iterable[UUID],
    range_start: date,
    range_end: date,
    schedules: Iterable[WeeklyScheduleEntry],
    leaves: Iterable[LeaveRecord],
) -> List[UnavailabilityMark]:
    """
    Compute the unavailable dates of a doctor set within an inclusive range.

    `schedules` and `leaves` must already be restricted to `doctor_ids`.
    Returns at most one mark per date, sorted by date. An empty result means
    the whole range is available.
    """
    doctor_ids = set(doctor_ids)
    if not doctor_ids:
        raise EmptyDoctorSetError()
    _check_range(range_start, range_end)

    off_by_doctor = weekdays_off(schedules)
    marks = _leave_marks(leaves, range_start, range_end)

    # A doctor without schedule rows works every weekday
    common_off = set(range(7))
    for doctor_id in doctor_ids:
        common_off &= off_by_doctor.get(doctor_id, set())

    if common_off:
        clinic_wide = len(doctor_ids) > 1
        for current in iter_dates(range_start, range_end):
            if current in marks:
                continue
            day = to_db_weekday(current)
            if day not in common_off:
                continue
            if clinic_wide:
                reason = f"All doctors off on {weekday_name(day)}"
            else:
                reason = f"{weekday_name(day)} Off"
            marks[current] = UnavailabilityMark(date=current, kind=MarkKind.DAY_OFF, reason=reason)

    return [marks[key] for key in sorted(marks)]


def classify_range(
    marks: Iterable[UnavailabilityMark],
    range_start: date,
    range_end: date,
) -> Dict[date, DateClassification]:
    """Classify every date of the range, defaulting to available."""
    _check_range(range_start, range_end)

    by_date: Dict[date, UnavailabilityMark] = {}
    for mark in marks:
        existing = by_date.get(mark.date)
        if existing is None or mark.kind == MarkKind.LEAVE:
            by_date[mark.date] = mark

    result = {}
    for current in iter_dates(range_start, range_end):
        mark = by_date.get(current)
        if mark is None:
            result[current] = DateClassification.AVAILABLE
        elif mark.kind == MarkKind.LEAVE:
            result[current] = DateClassification.LEAVE
        else:
            result[current] = DateClassification.DAY_OFF
    return result
