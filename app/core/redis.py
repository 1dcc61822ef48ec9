import json
from typing import Dict, Iterable, List, Optional
from uuid import UUID
from datetime import date

import redis.asyncio as redis

from app.core.config import settings
from app.schemas.availability import UnavailabilityMark

class RedisClient:
    def __init__(self):
        self.redis = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)

    async def close(self):
        await self.redis.aclose()

class AvailabilityCache:
    """
    Memoizes resolver output per (doctor set, start, end).

    Each doctor has a generation counter that every schedule or leave write
    bumps. Cache keys embed the generations read before the fetch, so marks
    computed from data older than a write land under a key no later query
    reads.
    """

    prefix = "availability"

    def __init__(self, client: RedisClient, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    def generation_key(self, doctor_id) -> str:
        return f"{self.prefix}:gen:{doctor_id}"

    def key(self, doctor_ids: Iterable[UUID], start: date, end: date, generations: Optional[Dict[str, int]] = None) -> str:
        generations = generations or {}
        ids = sorted(str(doctor_id) for doctor_id in doctor_ids)
        parts = ",".join(f"{doctor_id}@{generations.get(doctor_id, 0)}" for doctor_id in ids)
        return f"{self.prefix}:marks:{parts}:{start.isoformat()}:{end.isoformat()}"

    async def snapshot_key(self, doctor_ids: Iterable[UUID], start: date, end: date) -> str:
        """Build the cache key from the doctors' current generations. Call once, before fetching."""
        ids = sorted(str(doctor_id) for doctor_id in doctor_ids)
        values = await self.client.redis.mget([self.generation_key(doctor_id) for doctor_id in ids])
        generations = {doctor_id: int(value or 0) for doctor_id, value in zip(ids, values)}
        return self.key(ids, start, end, generations)

    async def get_marks(self, key: str) -> Optional[List[UnavailabilityMark]]:
        raw = await self.client.redis.get(key)
        if raw is None:
            return None
        return [UnavailabilityMark.model_validate(item) for item in json.loads(raw)]

    async def set_marks(self, key: str, marks: List[UnavailabilityMark]):
        payload = json.dumps([mark.model_dump(mode="json") for mark in marks])
        await self.client.redis.set(key, payload, ex=self.ttl_seconds)

    async def invalidate_doctor(self, doctor_id: UUID) -> int:
        await self.client.redis.incr(self.generation_key(doctor_id))
        # Entries under old generations are unreachable now; drop them early
        deleted = 0
        async for key in self.client.redis.scan_iter(match=f"{self.prefix}:marks:*{doctor_id}*"):
            deleted += await self.client.redis.delete(key)
        return deleted

redis_client = RedisClient()

def get_availability_cache() -> Optional[AvailabilityCache]:
    if settings.AVAILABILITY_CACHE_TTL_SECONDS <= 0:
        return None
    return AvailabilityCache(redis_client, settings.AVAILABILITY_CACHE_TTL_SECONDS)
