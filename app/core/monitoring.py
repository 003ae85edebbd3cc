"""Health checks and monitoring endpoints"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_response_cache
from app.config.database import get_db
from app.config.settings import settings
from app.services.cache.response_cache import ResponseCache

logger = logging.getLogger(__name__)

health_router = APIRouter()

_PROBE_KEY = "health:probe"


@health_router.get("/")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "salon-booking-api"}


@health_router.get("/detailed")
async def detailed_health_check(
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Detailed health check with dependencies"""
    checks = {
        "api": "healthy",
        "database": "unknown",
        "cache": "unknown",
        "overall": "unknown"
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = f"unhealthy: {str(e)}"

    # cache backends log and swallow their own errors, so probe with a round trip
    if settings.CACHE_BACKEND == "none":
        checks["cache"] = "disabled"
    else:
        await cache.set(_PROBE_KEY, {"ok": True})
        checks["cache"] = "healthy" if await cache.get(_PROBE_KEY) == {"ok": True} else "unhealthy"

    if all(status in ("healthy", "disabled") for status in checks.values() if status != "unknown"):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
