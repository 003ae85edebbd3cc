"""
Availability lookup shared by the owner and public routes.
Resolves the requested duration, runs the engine and caches the response per salon.
"""
import logging
from datetime import date
from typing import Any, Dict, Optional
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from app.config.database import SessionLocal
from app.config.redis import RedisKeys
from app.config.settings import settings
from app.schemas.availability import ResourceType
from app.services.availability.availability_service import AvailabilityService
from app.services.cache.response_cache import ResponseCache
from app.services.salon.salon_service import SalonService

logger = logging.getLogger(__name__)


def resolve_request(
        salon_id: UUID,
        service_id: Optional[UUID],
        home_service_id: Optional[UUID],
        duration_minutes: Optional[int],
        resource_type: Optional[ResourceType]
):
    """Booking type, service whose slots apply and duration, as the route would book it"""
    resource_type = resource_type or (ResourceType.HOME if home_service_id else ResourceType.SALON)
    entity_id = home_service_id if resource_type == ResourceType.HOME else service_id

    with SessionLocal() as db:
        SalonService.get_active_salon(db, salon_id)

        duration = duration_minutes
        if entity_id and not duration:
            if resource_type == ResourceType.HOME:
                catalogue_item = SalonService.get_home_service(db, salon_id, entity_id)
            else:
                catalogue_item = SalonService.get_service(db, salon_id, entity_id)
            duration = catalogue_item.duration_minutes

    return resource_type, entity_id, duration or settings.DEFAULT_BOOKING_DURATION


def availability_cache_key(salon_id, resource_type, target_date, entity_id, employee_id, duration) -> str:
    prefix = RedisKeys.AVAILABILITY.format(salon_id=salon_id)
    return f"{prefix}{resource_type.value}:{target_date.isoformat()}:{entity_id}:{employee_id}:{duration}"


async def availability_response(
        engine: AvailabilityService,
        cache: ResponseCache,
        salon_id: UUID,
        target_date: date,
        service_id: Optional[UUID] = None,
        home_service_id: Optional[UUID] = None,
        duration_minutes: Optional[int] = None,
        employee_id: Optional[UUID] = None,
        resource_type: Optional[ResourceType] = None
) -> Dict[str, Any]:
    resource_type, entity_id, duration = await run_in_threadpool(
        resolve_request,
        salon_id,
        service_id,
        home_service_id,
        duration_minutes,
        resource_type,
    )

    cache_key = availability_cache_key(
        salon_id, resource_type, target_date, entity_id, employee_id, duration
    )
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    result = await engine.compute_availability(
        salon_id,
        target_date,
        duration,
        service_id=entity_id,
        employee_id=employee_id,
        resource_type=resource_type,
    )

    response = {
        "date": target_date.isoformat(),
        "duration_minutes": duration,
        "type": resource_type.value,
        "available_slots": result.slots,
        "source": result.source.value,
        "entity_slots_defined": result.entity_slots_defined,
        "manual_slots_defined": result.manual_slots_defined,
    }

    if result.is_closed:
        response["details"] = "Salon is closed on this day"
    else:
        day = result.working_day
        response["working_hours"] = {
            "open_time": day.open_time,
            "close_time": day.close_time,
            "break_start": day.break_start,
            "break_end": day.break_end,
            "slot_interval": day.slot_interval,
        }

    await cache.set(cache_key, response)
    return response
