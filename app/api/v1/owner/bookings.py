# app/api/v1/owner/bookings.py
"""
Booking Management API Endpoints
Owner-side listing, creation, status changes and archiving of salon and home-service bookings
"""
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_response_cache, to_http_exception
from app.config.database import get_db
from app.config.redis import RedisKeys
from app.config.settings import settings
from app.core.exceptions import SalonBookingError
from app.schemas.availability import ResourceType
from app.schemas.booking import BookingUpdate, OwnerBookingCreate
from app.services.booking.booking_service import BookingService
from app.services.cache.response_cache import ResponseCache, invalidate_salon

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/owner/salons/{salon_id}/bookings")


# ============================================================================
# Queries
# ============================================================================

@router.get("")
async def list_bookings(
        salon_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        status: Optional[str] = Query(None, pattern="^(pending|confirmed|cancelled|completed)$"),
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
        include_archived: bool = False,
        archived_only: bool = False,
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """
    Get bookings of a salon with filtering and pagination.
    Archived bookings are hidden unless include_archived or archived_only is set.
    """
    cache_key = (
        f"{RedisKeys.BOOKINGS.format(salon_id=salon_id)}{type.value}:{status}:{start_date}:{end_date}:"
        f"{search}:{include_archived}:{archived_only}:{page}:{limit}"
    )

    try:
        cached = await cache.get(cache_key)
        if cached is not None:
            return cached

        response = await run_in_threadpool(
            BookingService.list_bookings,
            db,
            salon_id,
            resource_type=type,
            status=status,
            start_date=start_date,
            end_date=end_date,
            search=search,
            include_archived=include_archived,
            archived_only=archived_only,
            page=page,
            limit=limit,
        )
        await cache.set(cache_key, response)
        return response

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error listing bookings for salon {salon_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch bookings")


@router.get("/stats/overview")
async def get_booking_stats(
        salon_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Booking counts by status, revenue and the most booked services"""
    cache_key = f"{RedisKeys.STATS.format(salon_id=salon_id)}{start_date}:{end_date}"

    try:
        cached = await cache.get(cache_key)
        if cached is not None:
            return cached

        response = await run_in_threadpool(
            BookingService.get_booking_stats, db, salon_id, start_date, end_date
        )
        await cache.set(cache_key, response)
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing booking stats for salon {salon_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch booking statistics")


@router.get("/{booking_id}")
async def get_booking(
        salon_id: UUID,
        booking_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db)
):
    try:
        booking = await run_in_threadpool(BookingService.get_booking, db, salon_id, booking_id, type)
        return {"booking": BookingService.serialize_booking(booking)}

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch booking")


# ============================================================================
# Writes
# ============================================================================

@router.post("", status_code=201)
async def create_booking(
        salon_id: UUID,
        booking_data: OwnerBookingCreate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """
    Create a booking for a walk-in or phone customer.
    Defaults to confirmed; overlapping committed bookings return 409.
    """
    try:
        booking = await run_in_threadpool(
            BookingService.create_owner_booking,
            db,
            salon_id,
            booking_data,
            settings.DEFAULT_BOOKING_DURATION,
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Booking created successfully",
            "booking": BookingService.serialize_booking(booking)
        }

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating booking for salon {salon_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create booking")


@router.patch("/{booking_id}")
async def update_booking(
        salon_id: UUID,
        booking_id: UUID,
        booking_data: BookingUpdate,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Reschedule or edit a booking, or move it through its status lifecycle"""
    try:
        booking = await run_in_threadpool(
            BookingService.update_booking, db, salon_id, booking_id, booking_data, type
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Booking updated successfully",
            "booking": BookingService.serialize_booking(booking)
        }

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating booking {booking_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update booking")


@router.post("/{booking_id}/cancel")
async def cancel_booking(
        salon_id: UUID,
        booking_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    try:
        booking = await run_in_threadpool(
            BookingService.cancel_booking, db, salon_id, booking_id, type
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Booking cancelled successfully",
            "booking": BookingService.serialize_booking(booking)
        }

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error cancelling booking {booking_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to cancel booking")


async def _set_archived(salon_id, booking_id, archived, type, db, cache):
    try:
        changed = await run_in_threadpool(
            BookingService.set_archived, db, salon_id, booking_id, archived, type
        )
        if changed:
            await invalidate_salon(cache, salon_id)

        state = "archived" if archived else "unarchived"
        return {
            "message": f"Booking {state} successfully" if changed else f"Booking already {state}",
            "archived": archived
        }

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error archiving booking {booking_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update archive state")


@router.post("/{booking_id}/archive")
async def archive_booking(
        salon_id: UUID,
        booking_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Hide a completed booking from the default list"""
    return await _set_archived(salon_id, booking_id, True, type, db, cache)


@router.post("/{booking_id}/unarchive")
async def unarchive_booking(
        salon_id: UUID,
        booking_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    return await _set_archived(salon_id, booking_id, False, type, db, cache)


@router.delete("/{booking_id}")
async def delete_booking(
        salon_id: UUID,
        booking_id: UUID,
        type: ResourceType = Query(ResourceType.SALON),
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """
    Delete a booking permanently.
    Cancelling keeps the record; use this only for entries made by mistake.
    """
    try:
        customer_name = await run_in_threadpool(
            BookingService.delete_booking, db, salon_id, booking_id, type
        )
        await invalidate_salon(cache, salon_id)

        return {"message": f"Booking for {customer_name} deleted successfully"}

    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting booking {booking_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to delete booking")
