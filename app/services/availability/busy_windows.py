"""Project committed bookings into occupied intervals"""
from dataclasses import dataclass
from typing import Iterable, List, Optional
from uuid import UUID

from app.models.booking import COMMITTED_STATUSES
from app.schemas.availability import BookingRecord
from app.services.availability.time_utils import to_minutes


@dataclass(frozen=True)
class BusyWindow:
    start: int
    end: int
    employee_id: Optional[UUID] = None


def blocks_employee(booking: BookingRecord, employee_id: Optional[UUID]) -> bool:
    """
    Whether a booking occupies the calendar of the requested employee.

    A booking without an employee holds the shared calendar of every employee.
    """
    if employee_id is None or booking.employee_id is None:
        return True
    return booking.employee_id == employee_id


def booking_window(booking: BookingRecord, fallback_duration: int) -> BusyWindow:
    start = to_minutes(booking.booking_time)
    return BusyWindow(
        start=start,
        end=start + (booking.duration_minutes or fallback_duration),
        employee_id=booking.employee_id,
    )


def build_busy_windows(
        bookings: Iterable[BookingRecord],
        fallback_duration: int,
        employee_id: Optional[UUID] = None
) -> List[BusyWindow]:
    """Busy windows of the committed bookings that block the given employee."""
    return [
        booking_window(booking, fallback_duration)
        for booking in bookings
        if booking.status in COMMITTED_STATUSES and blocks_employee(booking, employee_id)
    ]
