"""
Storage collaborator for the availability engine.

The engine depends only on the AvailabilityStore protocol. SqlAvailabilityStore
backs it with SQLAlchemy; each lookup opens its own short-lived session and runs
in the Starlette threadpool so independent lookups can be awaited concurrently.
"""
import logging
from datetime import date
from typing import Callable, List, Optional, Protocol
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import AvailabilityLookupError
from app.models.booking import Booking, HomeServiceBooking, COMMITTED_STATUSES
from app.models.time_slot import ServiceTimeSlot, HomeServiceTimeSlot, SalonTimeSlot
from app.models.working_hours import WorkingHours
from app.schemas.availability import (
    BookingRecord,
    ResourceType,
    SlotOverride,
    SlotScope,
    WorkingDay,
)

logger = logging.getLogger(__name__)


class AvailabilityStore(Protocol):
    async def get_working_day(self, resource_id: UUID, day_of_week: int) -> Optional[WorkingDay]:
        ...

    async def get_active_slot_overrides(
            self,
            scope: SlotScope,
            owner_entity_id: UUID,
            day_of_week: Optional[int] = None
    ) -> List[SlotOverride]:
        ...

    async def get_committed_bookings(
            self,
            resource_type: ResourceType,
            resource_id: UUID,
            booking_date: date
    ) -> List[BookingRecord]:
        ...


def booking_model_for(resource_type: ResourceType):
    """ORM model holding bookings of the given resource type"""
    return HomeServiceBooking if resource_type == ResourceType.HOME else Booking


def working_day_from_row(row: WorkingHours) -> WorkingDay:
    return WorkingDay(
        resource_id=row.salon_id,
        day_of_week=row.day_of_week,
        is_closed=bool(row.is_closed),
        open_time=row.open_time,
        close_time=row.close_time,
        break_start=row.break_start,
        break_end=row.break_end,
        slot_interval=row.slot_interval or 30,
    )


def booking_record_from_row(row) -> BookingRecord:
    return BookingRecord(
        id=row.id,
        resource_id=row.salon_id,
        employee_id=row.employee_id,
        booking_date=row.booking_date,
        booking_time=row.booking_time,
        duration_minutes=row.duration_minutes,
        status=row.status,
        customer_name=row.customer_name,
    )


def query_committed_bookings(
        db: Session,
        resource_type: ResourceType,
        resource_id: UUID,
        booking_date: date
) -> List[BookingRecord]:
    """Committed bookings of one salon/day, ordered by start time"""
    model = booking_model_for(resource_type)
    rows = db.query(model).filter(
        model.salon_id == resource_id,
        model.booking_date == booking_date,
        model.status.in_(COMMITTED_STATUSES)
    ).order_by(model.booking_time.asc()).all()
    return [booking_record_from_row(row) for row in rows]


class SqlAvailabilityStore:
    """AvailabilityStore over the relational database"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def _run(self, lookup_name: str, fn):
        def call():
            db = self.session_factory()
            try:
                return fn(db)
            finally:
                db.close()

        try:
            return await run_in_threadpool(call)
        except SQLAlchemyError as e:
            logger.error(f"{lookup_name} lookup failed: {e}", exc_info=True)
            raise AvailabilityLookupError(f"{lookup_name} lookup failed") from e

    async def get_working_day(self, resource_id: UUID, day_of_week: int) -> Optional[WorkingDay]:
        def lookup(db: Session):
            row = db.query(WorkingHours).filter(
                WorkingHours.salon_id == resource_id,
                WorkingHours.day_of_week == day_of_week
            ).first()
            return working_day_from_row(row) if row else None

        return await self._run("working_hours", lookup)

    async def get_active_slot_overrides(
            self,
            scope: SlotScope,
            owner_entity_id: UUID,
            day_of_week: Optional[int] = None
    ) -> List[SlotOverride]:
        def lookup(db: Session):
            if scope == SlotScope.SERVICE:
                model, owner_column = ServiceTimeSlot, ServiceTimeSlot.service_id
            elif scope == SlotScope.HOME_SERVICE:
                model, owner_column = HomeServiceTimeSlot, HomeServiceTimeSlot.home_service_id
            else:
                model, owner_column = SalonTimeSlot, SalonTimeSlot.salon_id

            query = db.query(model).filter(
                owner_column == owner_entity_id,
                model.is_active == True  # noqa: E712
            )
            if scope == SlotScope.SALON_DAY:
                query = query.filter(SalonTimeSlot.day_of_week == day_of_week)

            return [
                SlotOverride(
                    owner_entity_id=owner_entity_id,
                    slot_time=row.slot_time,
                    duration_minutes=row.duration_minutes or 30,
                    is_active=row.is_active,
                )
                for row in query.order_by(model.slot_time.asc()).all()
            ]

        return await self._run(f"{scope.value}_slots", lookup)

    async def get_committed_bookings(
            self,
            resource_type: ResourceType,
            resource_id: UUID,
            booking_date: date
    ) -> List[BookingRecord]:
        return await self._run(
            "bookings",
            lambda db: query_committed_bookings(db, resource_type, resource_id, booking_date),
        )
