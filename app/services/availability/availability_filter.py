"""Drop candidate start times that cannot host a booking"""
from typing import Iterable, List, Sequence

from app.services.availability.busy_windows import BusyWindow
from app.services.availability.calendar_resolver import DayBounds
from app.services.availability.time_utils import overlaps, to_clock_string


def collides(busy_windows: Sequence[BusyWindow], start: int, end: int) -> bool:
    return any(overlaps(start, end, window.start, window.end) for window in busy_windows)


def is_slot_available(
        bounds: DayBounds,
        busy_windows: Sequence[BusyWindow],
        start: int,
        duration: int,
        check_bounds: bool = True
) -> bool:
    end = start + duration

    if check_bounds and not bounds.contains(start, end):
        return False

    if bounds.overlaps_break(start, end):
        return False

    return not collides(busy_windows, start, end)


def filter_candidates(
        candidates: Iterable[int],
        bounds: DayBounds,
        busy_windows: Sequence[BusyWindow],
        duration: int,
        check_bounds: bool = True
) -> List[str]:
    """
    Surviving candidates as ascending, de-duplicated "HH:MM" strings.

    Generated candidates already respect open/close through their loop bounds,
    so callers pass check_bounds=False for them.
    """
    surviving = {
        start for start in candidates
        if is_slot_available(bounds, busy_windows, start, duration, check_bounds)
    }
    return [to_clock_string(start) for start in sorted(surviving)]
