# app/services/availability/availability_service.py
"""
Availability and booking-conflict engine.

Pure computation over three storage lookups (working day, slot overrides,
committed bookings). The lookups have no data dependency on each other and are
awaited together; if any of them fails the whole computation fails.
"""
import asyncio
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from app.core.exceptions import (
    AvailabilityLookupError,
    InvalidAvailabilityRequest,
    SalonBookingError,
)
from app.schemas.availability import (
    AvailabilityResult,
    ConflictResult,
    ResourceType,
    SlotScope,
)
from app.services.availability.busy_windows import build_busy_windows
from app.services.availability.calendar_resolver import (
    CLOSED,
    DEFAULT_SLOT_INTERVAL,
    day_of_week_for,
    resolve_working_day,
)
from app.services.availability.conflict_checker import find_conflicts
from app.services.availability.slot_sources import build_strategies, select_slots
from app.services.availability.store import AvailabilityStore
from app.services.availability.time_utils import to_minutes

logger = logging.getLogger(__name__)


async def _nothing():
    return []


def _validate_request(target_date: Optional[date], duration_minutes: Optional[int]) -> None:
    if target_date is None:
        raise InvalidAvailabilityRequest("date is required")
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidAvailabilityRequest("duration_minutes must be greater than 0")


class AvailabilityService:
    """Computes bookable slots and booking conflicts for a salon calendar"""

    def __init__(self, store: AvailabilityStore, default_slot_interval: int = DEFAULT_SLOT_INTERVAL):
        self.store = store
        self.default_slot_interval = default_slot_interval

    async def _gather(self, *lookups):
        try:
            return await asyncio.gather(*lookups)
        except SalonBookingError:
            raise
        except Exception as e:
            logger.error(f"Availability lookup failed: {e}", exc_info=True)
            raise AvailabilityLookupError(str(e)) from e

    async def compute_availability(
            self,
            resource_id: UUID,
            target_date: date,
            duration_minutes: int,
            service_id: Optional[UUID] = None,
            employee_id: Optional[UUID] = None,
            resource_type: ResourceType = ResourceType.SALON
    ) -> AvailabilityResult:
        """
        Ordered bookable start times for one salon day.

        Args:
            resource_id: Salon whose calendar applies
            target_date: Day to compute
            duration_minutes: Length of the requested booking
            service_id: Service (or home service, for home bookings) whose own slots take precedence
            employee_id: Only bookings of this employee (or of no employee) block slots
            resource_type: Which booking table holds the committed bookings

        Returns:
            AvailabilityResult with the slots and the strategy that produced them
        """
        _validate_request(target_date, duration_minutes)

        day_of_week = day_of_week_for(target_date)
        entity_scope = SlotScope.HOME_SERVICE if resource_type == ResourceType.HOME else SlotScope.SERVICE

        working_day, bookings, manual_overrides, entity_overrides = await self._gather(
            self.store.get_working_day(resource_id, day_of_week),
            self.store.get_committed_bookings(resource_type, resource_id, target_date),
            self.store.get_active_slot_overrides(SlotScope.SALON_DAY, resource_id, day_of_week),
            self.store.get_active_slot_overrides(entity_scope, service_id) if service_id else _nothing(),
        )

        result = AvailabilityResult(
            working_day=working_day,
            duration_minutes=duration_minutes,
            entity_slots_defined=len(entity_overrides),
            manual_slots_defined=len(manual_overrides),
        )

        bounds = resolve_working_day(working_day, self.default_slot_interval)
        if bounds is CLOSED:
            logger.info(f"Salon {resource_id} closed on {target_date}")
            return result

        result.is_closed = False
        busy_windows = build_busy_windows(bookings, duration_minutes, employee_id)
        strategies = build_strategies(
            bounds,
            busy_windows,
            duration_minutes,
            entity_overrides=entity_overrides,
            manual_overrides=manual_overrides,
        )
        source, slots = select_slots(strategies)

        logger.info(
            f"Computed {len(slots)} slots for salon {resource_id} on {target_date} "
            f"from {source.value} ({len(busy_windows)} busy windows)"
        )

        result.source = source
        result.slots = slots
        return result

    async def check_conflict(
            self,
            resource_id: UUID,
            target_date: date,
            time: str,
            duration_minutes: int,
            employee_id: Optional[UUID] = None,
            exclude_booking_id: Optional[UUID] = None,
            resource_type: ResourceType = ResourceType.SALON
    ) -> ConflictResult:
        """Whether [time, time + duration) overlaps a committed booking of the day"""
        _validate_request(target_date, duration_minutes)
        if not time:
            raise InvalidAvailabilityRequest("time is required")
        to_minutes(time)  # malformed times fail before any lookup

        (bookings,) = await self._gather(
            self.store.get_committed_bookings(resource_type, resource_id, target_date),
        )

        return find_conflicts(
            bookings,
            time,
            duration_minutes,
            employee_id=employee_id,
            exclude_booking_id=exclude_booking_id,
        )

