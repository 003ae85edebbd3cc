"""Booking status lifecycle"""
from datetime import datetime, timezone
from typing import Optional

from app.core.exceptions import ArchiveNotAllowed, InvalidStatusTransition

# cancelled and completed are terminal
ALLOWED_TRANSITIONS = {
    "pending": {"confirmed", "cancelled", "completed"},
    "confirmed": {"cancelled", "completed"},
    "cancelled": set(),
    "completed": set(),
}

TIMESTAMP_FIELDS = {
    "confirmed": "confirmed_at",
    "cancelled": "cancelled_at",
    "completed": "completed_at",
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def apply_status_transition(booking, target: str, now: Optional[datetime] = None) -> bool:
    """
    Move a booking to a new status, stamping the matching timestamp.

    Completing a booking also archives it. Returns False when the booking is
    already in the target status.
    """
    if booking.status == target:
        return False

    if not can_transition(booking.status, target):
        raise InvalidStatusTransition(booking.status, target)

    now = now or datetime.now(timezone.utc)
    booking.status = target
    setattr(booking, TIMESTAMP_FIELDS[target], now)

    if target == "completed":
        booking.archived = True
        booking.archived_at = now

    return True


def set_archived(booking, archived: bool, now: Optional[datetime] = None) -> bool:
    """Archive or unarchive a completed booking. Returns False if nothing changed."""
    if booking.status != "completed":
        raise ArchiveNotAllowed("Only completed bookings can be archived")

    if bool(booking.archived) == archived:
        return False

    booking.archived = archived
    booking.archived_at = (now or datetime.now(timezone.utc)) if archived else None
    return True
