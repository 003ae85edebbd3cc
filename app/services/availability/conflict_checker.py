"""Decide whether a proposed booking overlaps a committed one"""
from typing import Iterable, List, Optional
from uuid import UUID

from app.models.booking import COMMITTED_STATUSES
from app.schemas.availability import BookingRecord, ConflictResult
from app.services.availability.busy_windows import blocks_employee, booking_window
from app.services.availability.time_utils import overlaps, to_minutes


def find_conflicts(
        bookings: Iterable[BookingRecord],
        time: str,
        duration_minutes: int,
        employee_id: Optional[UUID] = None,
        exclude_booking_id: Optional[UUID] = None
) -> ConflictResult:
    """
    Committed bookings overlapping [time, time + duration).

    Uses the same busy-window projection and overlap test as the availability
    filter, so a free slot there is conflict-free here and vice versa.
    """
    start = to_minutes(time)
    end = start + duration_minutes

    conflicts: List[BookingRecord] = []
    for booking in bookings:
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if booking.status not in COMMITTED_STATUSES:
            continue
        if not blocks_employee(booking, employee_id):
            continue

        window = booking_window(booking, duration_minutes)
        if overlaps(start, end, window.start, window.end):
            conflicts.append(booking)

    return ConflictResult(has_conflict=bool(conflicts), conflicts=conflicts)
