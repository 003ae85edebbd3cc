# app/config/redis.py
"""Redis configuration and connection setup"""
import redis.asyncio as redis
from typing import Optional

from app.config.settings import get_settings

settings = get_settings()

# Redis connection pool
_redis_pool: Optional[redis.ConnectionPool] = None


def get_redis_pool() -> redis.ConnectionPool:
    """Get or create Redis connection pool"""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = redis.ConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            retry_on_timeout=True,
            decode_responses=True,
        )
    return _redis_pool


# Redis key patterns for different data types
class RedisKeys:
    """Redis key patterns for consistent naming"""

    # Cached API responses, one prefix per salon
    AVAILABILITY = "availability:{salon_id}:"
    BOOKINGS = "bookings:{salon_id}:"
    STATS = "stats:{salon_id}:"

    @classmethod
    def salon_prefixes(cls, salon_id) -> list:
        """Every cached response prefix owned by one salon"""
        return [
            cls.AVAILABILITY.format(salon_id=salon_id),
            cls.BOOKINGS.format(salon_id=salon_id),
            cls.STATS.format(salon_id=salon_id),
        ]
