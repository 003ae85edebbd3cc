# ============================================================================
# FILE: app/api/dependencies.py
# Engine and cache dependencies shared by the owner and public routes
# ============================================================================
import logging
from typing import Optional

import redis.asyncio as redis
from fastapi import HTTPException, status

from app.config.database import SessionLocal
from app.config.redis import get_redis_pool
from app.config.settings import settings
from app.core.exceptions import (
    ArchiveNotAllowed,
    AvailabilityLookupError,
    BookingConflict,
    BookingNotBookable,
    BookingNotFound,
    InvalidStatusTransition,
    SalonBookingError,
    SalonNotFound,
    ServiceNotFound,
    WorkingHoursValidationError,
)
from app.services.availability.availability_service import AvailabilityService
from app.services.availability.store import SqlAvailabilityStore
from app.services.cache.response_cache import (
    InMemoryResponseCache,
    NullResponseCache,
    RedisResponseCache,
    ResponseCache,
)

logger = logging.getLogger(__name__)

_response_cache: Optional[ResponseCache] = None


def build_response_cache(backend: str) -> ResponseCache:
    """Create the cache selected by CACHE_BACKEND"""
    if backend == "redis":
        return RedisResponseCache(
            redis.Redis(connection_pool=get_redis_pool()),
            ttl_seconds=settings.CACHE_TTL_SECONDS,
        )
    if backend == "memory":
        return InMemoryResponseCache(
            ttl_seconds=settings.CACHE_TTL_SECONDS,
            max_entries=settings.CACHE_MAX_ENTRIES,
        )
    return NullResponseCache()


def get_response_cache() -> ResponseCache:
    """Dependency returning the process-wide response cache"""
    global _response_cache
    if _response_cache is None:
        _response_cache = build_response_cache(settings.CACHE_BACKEND)
        logger.info(f"Response cache backend: {settings.CACHE_BACKEND}")
    return _response_cache


def get_availability_service() -> AvailabilityService:
    """Dependency returning an engine backed by the SQL store"""
    return AvailabilityService(
        SqlAvailabilityStore(SessionLocal),
        default_slot_interval=settings.DEFAULT_SLOT_INTERVAL,
    )


def to_http_exception(error: SalonBookingError) -> HTTPException:
    """Translate a domain error into the HTTP response the routes return"""
    if isinstance(error, BookingConflict):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": "BOOKING_CONFLICT",
                "message": str(error),
                "conflictingBookings": [
                    {
                        "id": str(b.id),
                        "time": b.booking_time,
                        "duration": b.duration_minutes,
                        "customer": b.customer_name,
                    }
                    for b in error.conflicts
                ],
            },
        )

    if isinstance(error, (SalonNotFound, ServiceNotFound, BookingNotFound)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, BookingNotBookable):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": error.code, "message": error.details or error.code},
        )

    if isinstance(error, WorkingHoursValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "VALIDATION_FAILED", "details": error.errors},
        )

    if isinstance(error, AvailabilityLookupError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Availability lookup failed",
        )

    if isinstance(error, (InvalidStatusTransition, ArchiveNotAllowed, ValueError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
