# ============================================================================
# app/services/schedule/working_hours_service.py
# Weekly working hours of a salon
# ============================================================================
import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import WorkingHoursValidationError
from app.models.working_hours import WorkingHours
from app.schemas.schedule import WorkingHoursDay
from app.services.availability.time_utils import is_valid_time, to_minutes

logger = logging.getLogger(__name__)

DEFAULT_WEEK: List[Dict] = [
    {"day_of_week": 0, "is_closed": False, "open_time": "09:00", "close_time": "18:00",
     "break_start": "13:00", "break_end": "14:00"},
    {"day_of_week": 1, "is_closed": False, "open_time": "09:00", "close_time": "18:00",
     "break_start": "13:00", "break_end": "14:00"},
    {"day_of_week": 2, "is_closed": False, "open_time": "09:00", "close_time": "18:00",
     "break_start": "13:00", "break_end": "14:00"},
    {"day_of_week": 3, "is_closed": False, "open_time": "09:00", "close_time": "18:00",
     "break_start": "13:00", "break_end": "14:00"},
    {"day_of_week": 4, "is_closed": False, "open_time": "09:00", "close_time": "18:00",
     "break_start": "13:00", "break_end": "14:00"},
    # Friday
    {"day_of_week": 5, "is_closed": True, "open_time": None, "close_time": None,
     "break_start": None, "break_end": None},
    {"day_of_week": 6, "is_closed": False, "open_time": "10:00", "close_time": "16:00",
     "break_start": "13:00", "break_end": "14:00"},
]


def validate_week(days: List[WorkingHoursDay]) -> List[str]:
    """Collect every problem of a submitted week instead of stopping at the first."""
    errors: List[str] = []

    if len(days) != 7:
        return ["Working hours must include all 7 days of the week"]

    seen = set()
    for index, day in enumerate(days):
        if day.day_of_week is None:
            errors.append(f"Missing day_of_week at index {index}")
            continue
        if day.day_of_week in seen:
            errors.append(f"Duplicate day_of_week: {day.day_of_week}")
        seen.add(day.day_of_week)

        if not 0 <= day.day_of_week <= 6:
            errors.append(f"Invalid day_of_week: {day.day_of_week} at index {index}. Must be between 0-6")
            continue

        if day.is_closed is None:
            errors.append(f"Missing is_closed for day {day.day_of_week}")
            continue

        if day.is_closed:
            continue

        errors.extend(_validate_open_day(day))

    for dow in range(7):
        if dow not in seen:
            errors.append(f"Missing day_of_week: {dow}")

    return errors


def _validate_open_day(day: WorkingHoursDay) -> List[str]:
    errors = []
    dow = day.day_of_week

    for field in ("open_time", "close_time"):
        value = getattr(day, field)
        if not value:
            errors.append(f"Missing {field} for day {dow}")
        elif not is_valid_time(value):
            errors.append(f"Invalid {field} format for day {dow}: {value}")
    if errors:
        return errors

    open_minutes = to_minutes(day.open_time)
    close_minutes = to_minutes(day.close_time)
    if open_minutes >= close_minutes:
        errors.append(f"Close time must be after open time for day {dow}")
        return errors

    if bool(day.break_start) != bool(day.break_end):
        errors.append(f"Break needs both break_start and break_end for day {dow}")
        return errors

    if day.break_start:
        for field in ("break_start", "break_end"):
            value = getattr(day, field)
            if not is_valid_time(value):
                errors.append(f"Invalid {field} format for day {dow}: {value}")
        if errors:
            return errors

        break_start = to_minutes(day.break_start)
        break_end = to_minutes(day.break_end)
        if break_start >= break_end:
            errors.append(f"Break end must be after break start for day {dow}")
        elif break_start < open_minutes or break_end > close_minutes:
            errors.append(f"Break must fall within working hours for day {dow}")

    return errors


class WorkingHoursService:
    """Read, replace and reset the weekly schedule of a salon"""

    @staticmethod
    def _rows(db: Session, salon_id: UUID) -> List[WorkingHours]:
        return db.query(WorkingHours).filter(
            WorkingHours.salon_id == salon_id
        ).order_by(WorkingHours.day_of_week).all()

    @staticmethod
    def _upsert(db: Session, salon_id: UUID, days: List[Dict], default_interval: int) -> None:
        existing = {row.day_of_week: row for row in WorkingHoursService._rows(db, salon_id)}

        for day in days:
            is_closed = bool(day["is_closed"])
            row = existing.get(day["day_of_week"])
            if row is None:
                row = WorkingHours(salon_id=salon_id, day_of_week=day["day_of_week"])
                db.add(row)

            row.is_closed = is_closed
            row.open_time = None if is_closed else day.get("open_time")
            row.close_time = None if is_closed else day.get("close_time")
            row.break_start = None if is_closed else (day.get("break_start") or None)
            row.break_end = None if is_closed else (day.get("break_end") or None)
            row.slot_interval = day.get("slot_interval") or row.slot_interval or default_interval

    @staticmethod
    def get_working_hours(db: Session, salon_id: UUID, default_interval: int = 30) -> List[WorkingHours]:
        """Return the week, seeding the default schedule the first time"""
        rows = WorkingHoursService._rows(db, salon_id)
        if rows:
            return rows

        logger.info(f"No working hours for salon {salon_id}, initializing defaults")
        WorkingHoursService.reset_working_hours(db, salon_id, default_interval)
        return WorkingHoursService._rows(db, salon_id)

    @staticmethod
    def update_working_hours(
            db: Session,
            salon_id: UUID,
            days: List[WorkingHoursDay],
            default_interval: int = 30
    ) -> List[WorkingHours]:
        errors = validate_week(days)
        if errors:
            raise WorkingHoursValidationError(errors)

        try:
            WorkingHoursService._upsert(
                db, salon_id, [day.model_dump() for day in days], default_interval
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Working hours updated for salon {salon_id}")
        return WorkingHoursService._rows(db, salon_id)

    @staticmethod
    def reset_working_hours(
            db: Session,
            salon_id: UUID,
            default_interval: int = 30
    ) -> List[WorkingHours]:
        try:
            WorkingHoursService._upsert(db, salon_id, DEFAULT_WEEK, default_interval)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Default working hours initialized for salon {salon_id}")
        return WorkingHoursService._rows(db, salon_id)

    @staticmethod
    def get_day(db: Session, salon_id: UUID, day_of_week: int) -> Optional[WorkingHours]:
        return db.query(WorkingHours).filter(
            WorkingHours.salon_id == salon_id,
            WorkingHours.day_of_week == day_of_week
        ).first()
