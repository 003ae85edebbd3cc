"""Resolve the working window of one salon day"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from app.schemas.availability import WorkingDay
from app.services.availability.time_utils import to_minutes, overlaps

DEFAULT_SLOT_INTERVAL = 30


@dataclass(frozen=True)
class DayBounds:
    """Open/close/break of a working day, in minutes since midnight"""
    open: int
    close: int
    break_start: Optional[int] = None
    break_end: Optional[int] = None
    slot_interval: int = DEFAULT_SLOT_INTERVAL

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None

    def contains(self, start: int, end: int) -> bool:
        return start >= self.open and end <= self.close

    def overlaps_break(self, start: int, end: int) -> bool:
        if not self.has_break:
            return False
        return overlaps(start, end, self.break_start, self.break_end)


class _Closed:
    """Sentinel for a day without bookable hours"""

    def __bool__(self):
        return False

    def __repr__(self):
        return "CLOSED"


CLOSED = _Closed()


def day_of_week_for(target_date: date) -> int:
    """0=Sunday .. 6=Saturday, the convention used by working_hours rows."""
    return (target_date.weekday() + 1) % 7


def resolve_working_day(
        working_day: Optional[WorkingDay],
        default_interval: int = DEFAULT_SLOT_INTERVAL
) -> Union[DayBounds, _Closed]:
    """Turn a WorkingDay row into DayBounds, or CLOSED when nothing is bookable."""
    if working_day is None or working_day.is_closed:
        return CLOSED

    if not working_day.open_time or not working_day.close_time:
        return CLOSED

    open_minutes = to_minutes(working_day.open_time)
    close_minutes = to_minutes(working_day.close_time)
    if open_minutes >= close_minutes:
        return CLOSED

    break_start = break_end = None
    if working_day.break_start and working_day.break_end:
        break_start = to_minutes(working_day.break_start)
        break_end = to_minutes(working_day.break_end)

    interval = working_day.slot_interval or default_interval
    if interval <= 0:
        interval = default_interval

    return DayBounds(
        open=open_minutes,
        close=close_minutes,
        break_start=break_start,
        break_end=break_end,
        slot_interval=interval,
    )
