"""
Response caching for read-heavy booking endpoints.

Cached payloads are JSON-serialisable dicts keyed by string. Every backend takes
its TTL (and capacity, where it applies) from the caller; routes receive one
through a FastAPI dependency, so tests can swap or disable it.
"""
import json
import logging
import time
from collections import OrderedDict
from typing import Any, Iterable, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.config.redis import RedisKeys

logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def invalidate_prefixes(self, prefixes: Iterable[str]) -> int:
        ...


async def invalidate_salon(cache: ResponseCache, salon_id) -> int:
    """Drop every cached response of a salon after one of its bookings changed"""
    removed = await cache.invalidate_prefixes(RedisKeys.salon_prefixes(salon_id))
    logger.debug(f"Invalidated {removed} cached responses for salon {salon_id}")
    return removed


class RedisResponseCache:
    """Redis cache wrapper with JSON serialization"""

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None

        if value is None:
            logger.debug(f"Cache MISS: {key}")
            return None

        logger.debug(f"Cache HIT: {key}")
        return json.loads(value)

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.client.setex(key, self.ttl_seconds, json.dumps(value, default=str))
        except RedisError as e:
            logger.error(f"Cache set error for {key}: {e}")

    async def invalidate_prefixes(self, prefixes: Iterable[str]) -> int:
        removed = 0
        try:
            for prefix in prefixes:
                keys = [key async for key in self.client.scan_iter(match=f"{prefix}*")]
                if keys:
                    removed += await self.client.delete(*keys)
        except RedisError as e:
            logger.error(f"Cache invalidation error: {e}")
        return removed


class InMemoryResponseCache:
    """Process-local TTL cache with LRU eviction once capacity is reached"""

    def __init__(self, ttl_seconds: int, max_entries: int = 1000, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, tuple]" = OrderedDict()

    def __len__(self):
        return len(self._entries)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, payload = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return json.loads(payload)

    async def set(self, key: str, value: Any) -> None:
        # stored serialized so callers never share mutable state with the cache
        self._entries[key] = (self._clock() + self.ttl_seconds, json.dumps(value, default=str))
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    async def invalidate_prefixes(self, prefixes: Iterable[str]) -> int:
        prefixes = tuple(prefixes)
        stale = [key for key in self._entries if key.startswith(prefixes)]
        for key in stale:
            del self._entries[key]
        return len(stale)


class NullResponseCache:
    """Caching disabled"""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any) -> None:
        return None

    async def invalidate_prefixes(self, prefixes: Iterable[str]) -> int:
        return 0
