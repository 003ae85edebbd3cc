# ============================================================================
# app/services/schedule/slot_override_service.py
# Explicit start times configured per service, home service or salon day
# ============================================================================
import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import SlotValidationError
from app.models.time_slot import HomeServiceTimeSlot, SalonTimeSlot, ServiceTimeSlot
from app.schemas.schedule import SlotInput
from app.services.availability.time_utils import is_valid_time, to_clock_string, to_minutes

logger = logging.getLogger(__name__)


def normalize_slots(slots: List[SlotInput]) -> List[Dict]:
    """
    Validate a submitted slot list and return plain column values.
    Times are stored as HH:MM so 09:00 and 09:00:00 count as the same slot.
    """
    cleaned = []
    seen = set()

    for slot in slots:
        if not slot.slot_time:
            raise SlotValidationError("slot_time is required for each slot")
        if not is_valid_time(slot.slot_time.strip()):
            raise SlotValidationError(f"Invalid time format: {slot.slot_time}")

        slot_time = to_clock_string(to_minutes(slot.slot_time.strip()))
        if slot_time in seen:
            raise SlotValidationError(f"Duplicate slot_time: {slot_time}")
        seen.add(slot_time)

        if slot.duration_minutes <= 0:
            raise SlotValidationError("duration_minutes must be greater than 0")

        cleaned.append({
            "slot_time": slot_time,
            "duration_minutes": slot.duration_minutes,
            "is_active": slot.is_active,
        })

    return cleaned


def validate_day_of_week(day_of_week: Optional[int]) -> int:
    if day_of_week is None or not 0 <= day_of_week <= 6:
        raise SlotValidationError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")
    return day_of_week


class SlotOverrideService:
    """Replace-all editing of slot overrides; callers check ownership first"""

    @staticmethod
    def _replace(db: Session, model, owner_filter: Dict, slots: List[SlotInput]) -> List:
        cleaned = normalize_slots(slots)

        try:
            db.query(model).filter_by(**owner_filter).delete(synchronize_session=False)
            rows = [model(**owner_filter, **slot) for slot in cleaned]
            db.add_all(rows)
            db.commit()
        except Exception:
            db.rollback()
            raise

        return sorted(rows, key=lambda row: to_minutes(row.slot_time))

    # Service slots

    @staticmethod
    def list_service_slots(db: Session, service_id: UUID) -> List[ServiceTimeSlot]:
        return db.query(ServiceTimeSlot).filter(
            ServiceTimeSlot.service_id == service_id
        ).order_by(ServiceTimeSlot.slot_time).all()

    @staticmethod
    def replace_service_slots(db: Session, service_id: UUID, slots: List[SlotInput]) -> List[ServiceTimeSlot]:
        rows = SlotOverrideService._replace(db, ServiceTimeSlot, {"service_id": service_id}, slots)
        logger.info(f"Replaced time slots of service {service_id} ({len(rows)} slots)")
        return rows

    # Home service slots

    @staticmethod
    def list_home_service_slots(db: Session, home_service_id: UUID) -> List[HomeServiceTimeSlot]:
        return db.query(HomeServiceTimeSlot).filter(
            HomeServiceTimeSlot.home_service_id == home_service_id
        ).order_by(HomeServiceTimeSlot.slot_time).all()

    @staticmethod
    def replace_home_service_slots(
            db: Session, home_service_id: UUID, slots: List[SlotInput]
    ) -> List[HomeServiceTimeSlot]:
        rows = SlotOverrideService._replace(
            db, HomeServiceTimeSlot, {"home_service_id": home_service_id}, slots
        )
        logger.info(f"Replaced time slots of home service {home_service_id} ({len(rows)} slots)")
        return rows

    # Salon manual slots

    @staticmethod
    def list_salon_slots(
            db: Session, salon_id: UUID, day_of_week: Optional[int] = None
    ) -> List[SalonTimeSlot]:
        query = db.query(SalonTimeSlot).filter(SalonTimeSlot.salon_id == salon_id)
        if day_of_week is not None:
            query = query.filter(SalonTimeSlot.day_of_week == validate_day_of_week(day_of_week))
        return query.order_by(SalonTimeSlot.day_of_week, SalonTimeSlot.slot_time).all()

    @staticmethod
    def replace_salon_slots(
            db: Session, salon_id: UUID, day_of_week: int, slots: List[SlotInput]
    ) -> List[SalonTimeSlot]:
        day_of_week = validate_day_of_week(day_of_week)
        rows = SlotOverrideService._replace(
            db, SalonTimeSlot, {"salon_id": salon_id, "day_of_week": day_of_week}, slots
        )
        logger.info(f"Replaced manual slots of salon {salon_id} for day {day_of_week} ({len(rows)} slots)")
        return rows

    @staticmethod
    def delete_salon_slot(db: Session, salon_id: UUID, slot_id: UUID) -> bool:
        deleted = db.query(SalonTimeSlot).filter(
            SalonTimeSlot.id == slot_id,
            SalonTimeSlot.salon_id == salon_id
        ).delete(synchronize_session=False)
        db.commit()
        return deleted > 0

    @staticmethod
    def group_by_day(slots: List[SalonTimeSlot]) -> Dict[int, List[Dict]]:
        grouped: Dict[int, List[Dict]] = {}
        for slot in slots:
            grouped.setdefault(slot.day_of_week, []).append(slot.to_dict())
        return grouped
