# app/api/v1/owner/availability.py
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.dependencies import get_availability_service, get_response_cache, to_http_exception
from app.api.v1.availability_response import availability_response
from app.core.exceptions import SalonBookingError
from app.schemas.availability import ResourceType
from app.services.availability.availability_service import AvailabilityService
from app.services.cache.response_cache import ResponseCache

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/owner/salons/{salon_id}")


@router.get("/availability")
async def get_available_slots(
        salon_id: UUID,
        date: date,
        service_id: Optional[UUID] = None,
        home_service_id: Optional[UUID] = None,
        duration_minutes: Optional[int] = Query(None, gt=0),
        employee_id: Optional[UUID] = None,
        type: Optional[ResourceType] = None,
        engine: AvailabilityService = Depends(get_availability_service),
        cache: ResponseCache = Depends(get_response_cache)
):
    """
    Bookable start times for a day, as the owner booking form offers them.

    Service slots win over the salon's manual slots, which win over slots
    generated from working hours. Committed bookings and the break are excluded.
    """
    try:
        return await availability_response(
            engine,
            cache,
            salon_id,
            date,
            service_id=service_id,
            home_service_id=home_service_id,
            duration_minutes=duration_minutes,
            employee_id=employee_id,
            resource_type=type,
        )
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error computing availability for salon {salon_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to compute availability")
