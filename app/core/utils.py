import calendar
from datetime import date, timedelta
from typing import Iterator, Tuple

# Weekday names indexed by the DB convention (0=Sunday..6=Saturday)
DAYS_OF_WEEK = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

def to_db_weekday(value: date) -> int:
    # Python weekday() is 0=Monday..6=Sunday
    python_day = value.weekday()
    return 0 if python_day == 6 else python_day + 1

def weekday_name(day_of_week: int) -> str:
    return DAYS_OF_WEEK[day_of_week]

def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)

def week_bounds(value: date) -> Tuple[date, date]:
    # Weeks start on Sunday
    start = value - timedelta(days=to_db_weekday(value))
    return start, start + timedelta(days=6)

def month_bounds(value: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=1), value.replace(day=last_day)

def view_bounds(value: date, view: str) -> Tuple[date, date]:
    if view == "day":
        return value, value
    if view == "week":
        return week_bounds(value)
    if view == "month":
        return month_bounds(value)
    raise ValueError(f"Unknown calendar view: {view}")
