# app/api/v1/owner/schedule.py
"""
Schedule configuration endpoints
Working hours and the explicit slot lists that narrow availability
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_response_cache, to_http_exception
from app.config.database import get_db
from app.config.settings import settings
from app.core.exceptions import SalonBookingError
from app.schemas.schedule import SalonSlotsUpdate, SlotsUpdate, WorkingHoursUpdate
from app.services.cache.response_cache import ResponseCache, invalidate_salon
from app.services.salon.salon_service import SalonService
from app.services.schedule.slot_override_service import SlotOverrideService
from app.services.schedule.working_hours_service import WorkingHoursService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/owner/salons/{salon_id}")


def _rollback_and_500(db: Session, action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}", exc_info=True)
    db.rollback()
    return HTTPException(status_code=500, detail=f"Failed {action}")


# ============================================================================
# Working hours
# ============================================================================

@router.get("/working-hours")
async def get_working_hours(salon_id: UUID, db: Session = Depends(get_db)):
    """Weekly schedule; a salon without one gets the default week"""
    try:
        rows = await run_in_threadpool(
            WorkingHoursService.get_working_hours, db, salon_id, settings.DEFAULT_SLOT_INTERVAL
        )
        return {
            "working_hours": [row.to_dict() for row in rows],
            "timezone": settings.DEFAULT_TIMEZONE
        }
    except HTTPException:
        raise
    except Exception as e:
        raise _rollback_and_500(db, "fetching working hours", e)


@router.put("/working-hours")
async def update_working_hours(
        salon_id: UUID,
        payload: WorkingHoursUpdate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Replace all seven days. Closed days have their times cleared."""
    try:
        rows = await run_in_threadpool(
            WorkingHoursService.update_working_hours,
            db,
            salon_id,
            payload.working_hours,
            settings.DEFAULT_SLOT_INTERVAL,
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Working hours updated successfully",
            "working_hours": [row.to_dict() for row in rows],
            "timezone": payload.timezone or settings.DEFAULT_TIMEZONE
        }
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "updating working hours", e)


@router.post("/working-hours/reset")
async def reset_working_hours(
        salon_id: UUID,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    try:
        rows = await run_in_threadpool(
            WorkingHoursService.reset_working_hours, db, salon_id, settings.DEFAULT_SLOT_INTERVAL
        )
        await invalidate_salon(cache, salon_id)

        return {
            "message": "Working hours reset to default successfully",
            "working_hours": [row.to_dict() for row in rows]
        }
    except HTTPException:
        raise
    except Exception as e:
        raise _rollback_and_500(db, "resetting working hours", e)


# ============================================================================
# Salon manual slots (per day of week)
# ============================================================================

@router.get("/time-slots")
async def list_time_slots(
        salon_id: UUID,
        day: Optional[int] = Query(None),
        db: Session = Depends(get_db)
):
    try:
        slots = await run_in_threadpool(SlotOverrideService.list_salon_slots, db, salon_id, day)
        return {
            "slots": SlotOverrideService.group_by_day(slots),
            "raw": [slot.to_dict() for slot in slots]
        }
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "fetching time slots", e)


@router.put("/time-slots")
async def replace_time_slots(
        salon_id: UUID,
        payload: SalonSlotsUpdate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """Replace the manual slots of one day; an empty list clears them"""
    try:
        slots = await run_in_threadpool(
            SlotOverrideService.replace_salon_slots, db, salon_id, payload.day_of_week, payload.slots
        )
        await invalidate_salon(cache, salon_id)

        return {
            "day_of_week": payload.day_of_week,
            "slots": [slot.to_dict() for slot in slots]
        }
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "saving time slots", e)


@router.delete("/time-slots/{slot_id}")
async def delete_time_slot(
        salon_id: UUID,
        slot_id: UUID,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    try:
        deleted = await run_in_threadpool(SlotOverrideService.delete_salon_slot, db, salon_id, slot_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Time slot not found")

        await invalidate_salon(cache, salon_id)
        return {"message": "Time slot deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise _rollback_and_500(db, "deleting time slot", e)


# ============================================================================
# Service and home-service slots
# ============================================================================

@router.get("/services/{service_id}/time-slots")
async def list_service_time_slots(salon_id: UUID, service_id: UUID, db: Session = Depends(get_db)):
    try:
        def load():
            SalonService.get_service(db, salon_id, service_id, active_only=False)
            return SlotOverrideService.list_service_slots(db, service_id)

        slots = await run_in_threadpool(load)
        return {"service_id": str(service_id), "slots": [slot.to_dict() for slot in slots]}
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "fetching service time slots", e)


@router.put("/services/{service_id}/time-slots")
async def replace_service_time_slots(
        salon_id: UUID,
        service_id: UUID,
        payload: SlotsUpdate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    """These slots take precedence over the salon's own slots and working hours"""
    try:
        def replace():
            SalonService.get_service(db, salon_id, service_id, active_only=False)
            return SlotOverrideService.replace_service_slots(db, service_id, payload.slots)

        slots = await run_in_threadpool(replace)
        await invalidate_salon(cache, salon_id)
        return {"service_id": str(service_id), "slots": [slot.to_dict() for slot in slots]}
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "saving service time slots", e)


@router.get("/home-services/{home_service_id}/time-slots")
async def list_home_service_time_slots(
        salon_id: UUID, home_service_id: UUID, db: Session = Depends(get_db)
):
    try:
        def load():
            SalonService.get_home_service(db, salon_id, home_service_id, active_only=False)
            return SlotOverrideService.list_home_service_slots(db, home_service_id)

        slots = await run_in_threadpool(load)
        return {"home_service_id": str(home_service_id), "slots": [slot.to_dict() for slot in slots]}
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "fetching home service time slots", e)


@router.put("/home-services/{home_service_id}/time-slots")
async def replace_home_service_time_slots(
        salon_id: UUID,
        home_service_id: UUID,
        payload: SlotsUpdate,
        db: Session = Depends(get_db),
        cache: ResponseCache = Depends(get_response_cache)
):
    try:
        def replace():
            SalonService.get_home_service(db, salon_id, home_service_id, active_only=False)
            return SlotOverrideService.replace_home_service_slots(db, home_service_id, payload.slots)

        slots = await run_in_threadpool(replace)
        await invalidate_salon(cache, salon_id)
        return {"home_service_id": str(home_service_id), "slots": [slot.to_dict() for slot in slots]}
    except HTTPException:
        raise
    except SalonBookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise _rollback_and_500(db, "saving home service time slots", e)
