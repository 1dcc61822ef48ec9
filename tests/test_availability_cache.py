from datetime import date
from uuid import uuid4

import pytest

from app.schemas.availability import MarkKind, UnavailabilityMark

from factories import WEEK_END, WEEK_START, FakeRedis, cached_mark_keys, make_cache


@pytest.mark.asyncio
async def test_marks_round_trip_with_ttl(doctor_id):
    fake_redis = FakeRedis()
    cache = make_cache(fake_redis, ttl_seconds=120)
    marks = [
        UnavailabilityMark(date=date(2025, 6, 8), kind=MarkKind.DAY_OFF, reason="Sunday Off"),
        UnavailabilityMark(date=date(2025, 6, 10), kind=MarkKind.LEAVE, reason="Conference"),
    ]
    key = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)

    await cache.set_marks(key, marks)

    assert await cache.get_marks(key) == marks
    assert fake_redis.expiry[key] == 120


@pytest.mark.asyncio
async def test_missing_entry_reads_as_none(doctor_id):
    cache = make_cache()
    key = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)

    assert await cache.get_marks(key) is None


@pytest.mark.asyncio
async def test_empty_marks_are_a_hit(doctor_id):
    cache = make_cache()
    key = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)

    await cache.set_marks(key, [])

    assert await cache.get_marks(key) == []


@pytest.mark.asyncio
async def test_invalidation_moves_snapshot_key(doctor_id, other_doctor_id):
    cache = make_cache()
    before = await cache.snapshot_key([doctor_id, other_doctor_id], WEEK_START, WEEK_END)
    other_before = await cache.snapshot_key([other_doctor_id], WEEK_START, WEEK_END)

    await cache.invalidate_doctor(doctor_id)

    assert await cache.snapshot_key([doctor_id, other_doctor_id], WEEK_START, WEEK_END) != before
    assert await cache.snapshot_key([other_doctor_id], WEEK_START, WEEK_END) == other_before


@pytest.mark.asyncio
async def test_invalidation_deletes_only_entries_naming_the_doctor(doctor_id, other_doctor_id):
    cache = make_cache()
    third = uuid4()
    own = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)
    shared = await cache.snapshot_key([doctor_id, other_doctor_id], WEEK_START, WEEK_END)
    unrelated = await cache.snapshot_key([other_doctor_id, third], WEEK_START, WEEK_END)
    for key in (own, shared, unrelated):
        await cache.set_marks(key, [])

    deleted = await cache.invalidate_doctor(doctor_id)

    assert deleted == 2
    assert cached_mark_keys(cache) == [unrelated]
    assert cache.client.redis.store[cache.generation_key(doctor_id)] == "1"


@pytest.mark.asyncio
async def test_entry_written_under_old_generation_is_not_read(doctor_id):
    cache = make_cache()
    stale_key = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)

    await cache.invalidate_doctor(doctor_id)
    # Late write from a query that read the old generation
    await cache.set_marks(stale_key, [])

    fresh_key = await cache.snapshot_key([doctor_id], WEEK_START, WEEK_END)
    assert await cache.get_marks(fresh_key) is None
