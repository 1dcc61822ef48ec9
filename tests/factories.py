from datetime import date
from fnmatch import fnmatchcase
from types import SimpleNamespace
from uuid import uuid4

from app.core.exceptions import UpstreamFetchError
from app.core.redis import AvailabilityCache
from app.schemas.availability import AppointmentRecord, LeaveRecord, WeeklyScheduleEntry


class FakeScheduleStore:
    def __init__(self, schedules=None, leaves=None, fail_schedules=False, fail_leaves=False):
        self.schedules = schedules or []
        self.leaves = leaves or []
        self.fail_schedules = fail_schedules
        self.fail_leaves = fail_leaves
        self.calls = 0

    async def fetch_weekly_schedules(self, doctor_ids):
        self.calls += 1
        if self.fail_schedules:
            raise UpstreamFetchError("weekly schedules")
        wanted = set(doctor_ids)
        return [s for s in self.schedules if s.doctor_id in wanted]

    async def fetch_leaves(self, doctor_ids, range_start, range_end):
        self.calls += 1
        if self.fail_leaves:
            raise UpstreamFetchError("leaves")
        wanted = set(doctor_ids)
        return [
            leave for leave in self.leaves
            if leave.doctor_id in wanted and range_start <= leave.leave_date <= range_end
        ]


class FakeAppointmentStore:
    def __init__(self, appointments=None, fail=False):
        self.appointments = appointments or []
        self.fail = fail

    async def fetch_appointments(self, doctor_ids, range_start, range_end):
        if self.fail:
            raise UpstreamFetchError("appointments")
        wanted = set(doctor_ids)
        return [
            a for a in self.appointments
            if a.doctor_id in wanted and range_start <= a.appointment_date <= range_end
        ]


class FakeRedis:
    """Dict-backed stand-in for the handful of redis.asyncio calls the cache makes."""

    def __init__(self):
        self.store = {}
        self.expiry = {}

    async def get(self, key):
        return self.store.get(key)

    async def mget(self, keys):
        return [self.store.get(key) for key in keys]

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiry[key] = ex
        return True

    async def incr(self, key):
        value = int(self.store.get(key) or 0) + 1
        self.store[key] = str(value)
        return value

    async def delete(self, *keys):
        deleted = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                self.expiry.pop(key, None)
                deleted += 1
        return deleted

    async def scan_iter(self, match=None):
        for key in list(self.store):
            if match is None or fnmatchcase(key, match):
                yield key


def make_cache(fake_redis=None, ttl_seconds=60):
    return AvailabilityCache(SimpleNamespace(redis=fake_redis or FakeRedis()), ttl_seconds)


def cached_mark_keys(cache):
    return [key for key in cache.client.redis.store if key.startswith("availability:marks:")]


def day_off(doctor_id, day_of_week):
    return WeeklyScheduleEntry(doctor_id=doctor_id, day_of_week=day_of_week, is_available=False)


def working(doctor_id, day_of_week):
    return WeeklyScheduleEntry(doctor_id=doctor_id, day_of_week=day_of_week, is_available=True)


def leave(doctor_id, leave_date, leave_type="full_day", reason=None):
    return LeaveRecord(doctor_id=doctor_id, leave_date=leave_date, leave_type=leave_type, reason=reason)


def appointment(doctor_id, appointment_date, appointment_time, **kwargs):
    return AppointmentRecord(
        id=uuid4(),
        doctor_id=doctor_id,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        **kwargs
    )


# Sunday 2025-06-08 .. Saturday 2025-06-14
WEEK_START = date(2025, 6, 8)
WEEK_END = date(2025, 6, 14)
