"""
Candidate slot sources and the precedence cascade between them.

Strategies are tried in order: entity-specific overrides, salon manual slots,
then slots generated from working hours. The first one with at least one slot
left after filtering wins. A source whose slots are all taken falls through to
the next, coarser one; generated slots are the final answer even when empty.
"""
import logging
from typing import Callable, List, NamedTuple, Sequence, Tuple

from app.schemas.availability import SlotOverride, SlotSource
from app.services.availability.availability_filter import filter_candidates
from app.services.availability.busy_windows import BusyWindow
from app.services.availability.calendar_resolver import DayBounds
from app.services.availability.time_utils import to_minutes

logger = logging.getLogger(__name__)


class SlotStrategy(NamedTuple):
    source: SlotSource
    produce: Callable[[], List[str]]


def generate_candidates(bounds: DayBounds, duration: int) -> List[int]:
    """Every start time s with s + duration <= close, stepping by the slot interval."""
    candidates = []
    start = bounds.open
    while start + duration <= bounds.close:
        candidates.append(start)
        start += bounds.slot_interval
    return candidates


def override_candidates(overrides: Sequence[SlotOverride]) -> List[int]:
    return [to_minutes(slot.slot_time) for slot in overrides if slot.is_active]


def override_strategy(
        source: SlotSource,
        overrides: Sequence[SlotOverride],
        bounds: DayBounds,
        busy_windows: Sequence[BusyWindow],
        duration: int
) -> SlotStrategy:
    return SlotStrategy(
        source,
        lambda: filter_candidates(
            override_candidates(overrides), bounds, busy_windows, duration, check_bounds=True
        ),
    )


def working_hours_strategy(
        bounds: DayBounds,
        busy_windows: Sequence[BusyWindow],
        duration: int
) -> SlotStrategy:
    return SlotStrategy(
        SlotSource.WORKING_HOURS,
        lambda: filter_candidates(
            generate_candidates(bounds, duration), bounds, busy_windows, duration, check_bounds=False
        ),
    )


def build_strategies(
        bounds: DayBounds,
        busy_windows: Sequence[BusyWindow],
        duration: int,
        entity_overrides: Sequence[SlotOverride] = (),
        manual_overrides: Sequence[SlotOverride] = ()
) -> List[SlotStrategy]:
    """The cascade in precedence order. Empty override lists are skipped."""
    strategies = []
    if entity_overrides:
        strategies.append(override_strategy(
            SlotSource.ENTITY_SPECIFIC, entity_overrides, bounds, busy_windows, duration
        ))
    if manual_overrides:
        strategies.append(override_strategy(
            SlotSource.RESOURCE_MANUAL, manual_overrides, bounds, busy_windows, duration
        ))
    strategies.append(working_hours_strategy(bounds, busy_windows, duration))
    return strategies


def select_slots(strategies: Sequence[SlotStrategy]) -> Tuple[SlotSource, List[str]]:
    """Run strategies in order and return the first non-empty result."""
    if not strategies:
        raise ValueError("At least one slot strategy is required")

    for strategy in strategies[:-1]:
        slots = strategy.produce()
        if slots:
            return strategy.source, slots
        logger.debug(f"No surviving slots from {strategy.source.value}, falling back")

    last = strategies[-1]
    return last.source, last.produce()
