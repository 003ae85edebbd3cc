# app/api/v1/public/bookings.py
"""
Public booking endpoints (no authentication)
Customers see the same availability the owner sees and submit pending booking requests.
"""
import logging
from datetime import date
from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_availability_service, get_response_cache, to_http_exception
from app.api.v1.availability_response import availability_response
from app.config.database import get_db
from app.config.settings import settings
from app.core.exceptions import SalonBookingError
from app.schemas.availability import ResourceType
from app.schemas.booking import PublicBookingCreate, PublicHomeServiceBookingCreate
from app.services.availability.availability_service import AvailabilityService
from app.services.booking.booking_service import BookingService
from app.services.cache.response_cache import ResponseCache, invalidate_salon

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/public/salons/{salon_id}")


@router.get("/availability")
async def get_public_availability(
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
        logger.error(f"Error computing public availability for salon {salon_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to compute availability")


async def _create_public_booking(
        salon_id: UUID,
        booking_data: Union[PublicBookingCreate, PublicHomeServiceBookingCreate],
        db: Session,
        cache: ResponseCache
):
    try:
        booking = await run_in_threadpool(
            BookingService.create_public_booking,
            db,
            salon_id,
            booking_data,
            settings.DEFAULT_BOOKING_DURATION,
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Booking request received. The salon will confirm it shortly.",
            "booking": BookingService.serialize_booking(booking)
        }

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating public booking for salon {salon_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create booking")


@router.post("/bookings", status_code=201)
async def create_booking(
        salon_id: UUID,
        booking_data: PublicBookingCreate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Request an in-salon booking. It stays pending until the owner confirms it."""
    return await _create_public_booking(salon_id, booking_data, db, cache)


@router.post("/home-service-bookings", status_code=201)
async def create_home_service_booking(
        salon_id: UUID,
        booking_data: PublicHomeServiceBookingCreate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Request a home visit. It stays pending until the owner confirms it."""
    return await _create_public_booking(salon_id, booking_data, db, cache)
