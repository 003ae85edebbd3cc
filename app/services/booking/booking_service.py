# ============================================================================
# app/services/booking/booking_service.py
# Booking writes and owner queries - no FastAPI dependencies
# ============================================================================
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config.database import lock_booking_day
from app.core.exceptions import BookingConflict, BookingNotBookable, BookingNotFound
from app.models.booking import Booking, HomeServiceBooking, COMMITTED_STATUSES
from app.schemas.availability import ResourceType
from app.schemas.booking import (
    BookingUpdate,
    OwnerBookingCreate,
    PublicBookingCreate,
    PublicHomeServiceBookingCreate,
)
from app.services.availability.calendar_resolver import CLOSED, day_of_week_for, resolve_working_day
from app.services.availability.conflict_checker import find_conflicts
from app.services.availability.store import (
    booking_model_for,
    query_committed_bookings,
    working_day_from_row,
)
from app.services.availability.time_utils import to_minutes
from app.services.booking.booking_status import apply_status_transition, set_archived
from app.services.salon.salon_service import SalonService
from app.services.schedule.working_hours_service import WorkingHoursService

logger = logging.getLogger(__name__)

AnyBooking = Union[Booking, HomeServiceBooking]


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class BookingService:
    """Handles booking operations for both salon and home-service bookings"""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_bookings(
            db: Session,
            salon_id: UUID,
            resource_type: ResourceType = ResourceType.SALON,
            status: Optional[str] = None,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            search: Optional[str] = None,
            include_archived: bool = False,
            archived_only: bool = False,
            page: int = 1,
            limit: int = 20
    ) -> Dict[str, Any]:
        """Get paginated list of bookings with filters."""
        model = booking_model_for(resource_type)
        query = db.query(model).filter(model.salon_id == salon_id)

        if status:
            query = query.filter(model.status == status)
        if start_date:
            query = query.filter(model.booking_date >= start_date)
        if end_date:
            query = query.filter(model.booking_date <= end_date)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                model.customer_name.ilike(pattern),
                model.customer_phone.ilike(pattern),
                model.customer_email.ilike(pattern),
            ))

        if archived_only:
            query = query.filter(model.archived == True)  # noqa: E712
        elif not include_archived:
            query = query.filter(model.archived == False)  # noqa: E712

        query = query.order_by(model.booking_date.desc(), model.booking_time.desc())
        total = query.count()
        bookings = query.offset((page - 1) * limit).limit(limit).all()

        return {
            "salon_id": str(salon_id),
            "type": resource_type.value,
            "bookings": [BookingService.serialize_booking(b) for b in bookings],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "filters": {
                "status": status,
                "start_date": _iso(start_date),
                "end_date": _iso(end_date),
                "search": search,
                "include_archived": include_archived or archived_only,
                "archived_only": archived_only
            }
        }

    @staticmethod
    def get_booking(
            db: Session,
            salon_id: UUID,
            booking_id: UUID,
            resource_type: ResourceType = ResourceType.SALON
    ) -> AnyBooking:
        model = booking_model_for(resource_type)
        booking = db.query(model).filter(
            model.id == booking_id,
            model.salon_id == salon_id
        ).first()

        if not booking:
            raise BookingNotFound(f"Booking {booking_id} not found")
        return booking

    @staticmethod
    def get_booking_stats(
            db: Session,
            salon_id: UUID,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Status counts, revenue and the five most booked services."""
        by_status: Dict[str, int] = {}
        service_counts: Dict[str, Dict[str, Any]] = {}
        total_bookings = 0
        total_revenue = 0.0

        for resource_type in ResourceType:
            model = booking_model_for(resource_type)
            query = db.query(model).filter(model.salon_id == salon_id)
            if start_date:
                query = query.filter(model.booking_date >= start_date)
            if end_date:
                query = query.filter(model.booking_date <= end_date)

            for booking in query.all():
                total_bookings += 1
                by_status[booking.status] = by_status.get(booking.status, 0) + 1

                if booking.status not in ("confirmed", "completed"):
                    continue

                total_revenue += float(booking.total_price or 0)

                catalogue_item = (
                    booking.home_service if resource_type == ResourceType.HOME else booking.service
                )
                if catalogue_item is None:
                    continue

                key = f"{resource_type.value}_{catalogue_item.id}"
                entry = service_counts.setdefault(
                    key, {"name": catalogue_item.name, "count": 0, "type": resource_type.value}
                )
                entry["count"] += 1

        popular_services = sorted(
            service_counts.values(), key=lambda s: s["count"], reverse=True
        )[:5]

        return {
            "stats": {
                "total_bookings": total_bookings,
                "total_revenue": round(total_revenue, 2),
                "by_status": by_status,
                "popular_services": popular_services
            },
            "period": {
                "start_date": _iso(start_date),
                "end_date": _iso(end_date)
            }
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    def _ensure_no_conflict(
            db: Session,
            resource_type: ResourceType,
            salon_id: UUID,
            booking_date: date,
            booking_time: str,
            duration_minutes: int,
            employee_id: Optional[UUID] = None,
            exclude_booking_id: Optional[UUID] = None
    ) -> None:
        """
        Conflict check for a write. Takes the salon/day lock first so the check
        and the following insert or update commit as one unit. This skips
        AvailabilityService.check_conflict, whose lookups open their own sessions
        outside the lock; both paths share find_conflicts.
        """
        lock_booking_day(db, resource_type.value, salon_id, booking_date)

        committed = query_committed_bookings(db, resource_type, salon_id, booking_date)
        result = find_conflicts(
            committed,
            booking_time,
            duration_minutes,
            employee_id=employee_id,
            exclude_booking_id=exclude_booking_id,
        )
        if result.has_conflict:
            logger.info(
                f"Booking conflict for salon {salon_id} on {booking_date} {booking_time}: "
                f"{len(result.conflicts)} overlapping"
            )
            raise BookingConflict(result.conflicts)

    @staticmethod
    def _ensure_within_working_hours(
            db: Session,
            salon_id: UUID,
            booking_date: date,
            booking_time: str,
            duration_minutes: int
    ) -> None:
        row = WorkingHoursService.get_day(db, salon_id, day_of_week_for(booking_date))

        bounds = resolve_working_day(working_day_from_row(row) if row else None)
        if bounds is CLOSED:
            raise BookingNotBookable("SALON_CLOSED", "Selected day is not available for bookings")

        start = to_minutes(booking_time)
        end = start + duration_minutes
        if not bounds.contains(start, end):
            raise BookingNotBookable("OUTSIDE_WORKING_HOURS")
        if bounds.overlaps_break(start, end):
            raise BookingNotBookable("BOOKING_DURING_BREAK")

    @staticmethod
    def _insert(db: Session, booking: AnyBooking) -> AnyBooking:
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def create_owner_booking(
            db: Session,
            salon_id: UUID,
            data: OwnerBookingCreate,
            default_duration: int = 30
    ) -> AnyBooking:
        """
        Create a booking entered by the owner.
        A home_service_id without a service_id makes it a home-service booking.
        """
        resource_type = (
            ResourceType.HOME if data.home_service_id and not data.service_id else ResourceType.SALON
        )

        if resource_type == ResourceType.HOME:
            catalogue_item = SalonService.get_home_service(
                db, salon_id, data.home_service_id, active_only=False
            )
        else:
            catalogue_item = SalonService.get_service(db, salon_id, data.service_id, active_only=False)

        duration, price = SalonService.resolve_duration_and_price(
            catalogue_item, data.duration_minutes, data.total_price, default_duration
        )

        try:
            BookingService._ensure_no_conflict(
                db, resource_type, salon_id, data.booking_date, data.booking_time,
                duration, employee_id=data.employee_id
            )

            fields = dict(
                salon_id=salon_id,
                employee_id=data.employee_id,
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                customer_phone=data.customer_phone,
                customer_notes=data.customer_notes,
                booking_date=data.booking_date,
                booking_time=data.booking_time,
                duration_minutes=duration,
                total_price=price,
                status=data.status,
                source="owner",
                confirmed_at=datetime.now(timezone.utc) if data.status == "confirmed" else None,
            )
            if resource_type == ResourceType.HOME:
                booking = HomeServiceBooking(
                    home_service_id=data.home_service_id,
                    customer_address=data.customer_address,
                    **fields
                )
            else:
                booking = Booking(service_id=data.service_id, **fields)

            booking = BookingService._insert(db, booking)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Owner created {resource_type.value} booking {booking.id} for salon {salon_id}")
        return booking

    @staticmethod
    def create_public_booking(
            db: Session,
            salon_id: UUID,
            data: Union[PublicBookingCreate, PublicHomeServiceBookingCreate],
            default_duration: int = 30
    ) -> AnyBooking:
        """
        Create a customer booking request (status pending).
        Unlike owner bookings it must fall inside working hours and outside the break.
        """
        SalonService.get_active_salon(db, salon_id)

        if isinstance(data, PublicHomeServiceBookingCreate):
            resource_type = ResourceType.HOME
            catalogue_item = SalonService.get_home_service(db, salon_id, data.home_service_id)
        else:
            resource_type = ResourceType.SALON
            catalogue_item = SalonService.get_service(db, salon_id, data.service_id)

        duration, price = SalonService.resolve_duration_and_price(
            catalogue_item, data.duration_minutes, data.total_price, default_duration
        )

        BookingService._ensure_within_working_hours(
            db, salon_id, data.booking_date, data.booking_time, duration
        )

        try:
            BookingService._ensure_no_conflict(
                db, resource_type, salon_id, data.booking_date, data.booking_time,
                duration, employee_id=data.employee_id
            )

            fields = dict(
                salon_id=salon_id,
                employee_id=data.employee_id,
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                customer_phone=data.customer_phone,
                customer_notes=data.customer_notes,
                booking_date=data.booking_date,
                booking_time=data.booking_time,
                duration_minutes=duration,
                total_price=price,
                status="pending",
                source="public",
            )
            if resource_type == ResourceType.HOME:
                booking = HomeServiceBooking(
                    home_service_id=data.home_service_id,
                    customer_address=data.customer_address,
                    **fields
                )
            else:
                booking = Booking(service_id=data.service_id, **fields)

            booking = BookingService._insert(db, booking)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Public {resource_type.value} booking {booking.id} requested for salon {salon_id}")
        return booking

    @staticmethod
    def update_booking(
            db: Session,
            salon_id: UUID,
            booking_id: UUID,
            data: BookingUpdate,
            resource_type: ResourceType = ResourceType.SALON
    ) -> AnyBooking:
        """Reschedule, edit or change the status of a booking."""
        booking = BookingService.get_booking(db, salon_id, booking_id, resource_type)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        target_status = changes.pop("status", None)

        try:
            resulting_status = target_status or booking.status
            if data.reschedules and resulting_status in COMMITTED_STATUSES:
                BookingService._ensure_no_conflict(
                    db,
                    resource_type,
                    salon_id,
                    data.booking_date or booking.booking_date,
                    data.booking_time or booking.booking_time,
                    data.duration_minutes or booking.duration_minutes,
                    employee_id=data.employee_id or booking.employee_id,
                    exclude_booking_id=booking.id,
                )

            if target_status:
                apply_status_transition(booking, target_status)

            for field, value in changes.items():
                setattr(booking, field, value)

            db.commit()
            db.refresh(booking)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Updated booking {booking_id} for salon {salon_id}")
        return booking

    @staticmethod
    def cancel_booking(
            db: Session,
            salon_id: UUID,
            booking_id: UUID,
            resource_type: ResourceType = ResourceType.SALON
    ) -> AnyBooking:
        return BookingService.update_booking(
            db, salon_id, booking_id, BookingUpdate(status="cancelled"), resource_type
        )

    @staticmethod
    def set_archived(
            db: Session,
            salon_id: UUID,
            booking_id: UUID,
            archived: bool,
            resource_type: ResourceType = ResourceType.SALON
    ) -> bool:
        """Archive or unarchive a completed booking. Returns False if it already was."""
        booking = BookingService.get_booking(db, salon_id, booking_id, resource_type)
        changed = set_archived(booking, archived)
        if changed:
            db.commit()
        return changed

    @staticmethod
    def delete_booking(
            db: Session,
            salon_id: UUID,
            booking_id: UUID,
            resource_type: ResourceType = ResourceType.SALON
    ) -> str:
        """Hard delete. Returns the customer name for the confirmation message."""
        booking = BookingService.get_booking(db, salon_id, booking_id, resource_type)
        customer_name = booking.customer_name

        db.delete(booking)
        db.commit()

        logger.info(f"Hard deleted booking {booking_id} for salon {salon_id}")
        return customer_name

    @staticmethod
    def serialize_booking(booking: AnyBooking) -> Dict[str, Any]:
        """Convert a booking row to a dictionary."""
        data = {
            "id": str(booking.id),
            "salon_id": str(booking.salon_id),
            "employee_id": str(booking.employee_id) if booking.employee_id else None,
            "customer_name": booking.customer_name,
            "customer_email": booking.customer_email,
            "customer_phone": booking.customer_phone,
            "customer_notes": booking.customer_notes,
            "booking_date": booking.booking_date.isoformat(),
            "booking_time": booking.booking_time,
            "duration_minutes": booking.duration_minutes,
            "total_price": float(booking.total_price) if booking.total_price is not None else None,
            "status": booking.status,
            "source": booking.source,
            "archived": booking.archived,
            "confirmed_at": _iso(booking.confirmed_at),
            "cancelled_at": _iso(booking.cancelled_at),
            "completed_at": _iso(booking.completed_at),
            "archived_at": _iso(booking.archived_at),
            "created_at": _iso(booking.created_at),
            "updated_at": _iso(booking.updated_at),
        }

        if isinstance(booking, HomeServiceBooking):
            data.update({
                "type": ResourceType.HOME.value,
                "home_service_id": str(booking.home_service_id),
                "customer_address": booking.customer_address,
                "home_service": booking.home_service.to_dict() if booking.home_service else None,
            })
        else:
            data.update({
                "type": ResourceType.SALON.value,
                "service_id": str(booking.service_id),
                "service": booking.service.to_dict() if booking.service else None,
            })

        return data
