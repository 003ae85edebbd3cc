"""
Value schemas consumed and produced by the availability engine.
The engine never sees ORM rows; the store converts rows into these.
"""
from datetime import date
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ResourceType(str, Enum):
    """Which booking table governs the calendar"""
    SALON = "salon"
    HOME = "home"


class SlotSource(str, Enum):
    """Which strategy produced the returned slots"""
    ENTITY_SPECIFIC = "entity_specific"
    RESOURCE_MANUAL = "resource_manual"
    WORKING_HOURS = "working_hours"


class SlotScope(str, Enum):
    """Owning entity of a slot override"""
    SERVICE = "service"
    HOME_SERVICE = "home_service"
    SALON_DAY = "salon_day"


class WorkingDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource_id: UUID
    day_of_week: int = Field(..., ge=0, le=6)
    is_closed: bool = False
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    slot_interval: int = 30


class SlotOverride(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_entity_id: UUID
    slot_time: str
    duration_minutes: int = Field(30, gt=0)
    is_active: bool = True


class BookingRecord(BaseModel):
    """A stored booking as seen by the conflict and busy-window logic"""
    model_config = ConfigDict(frozen=True)

    id: UUID
    resource_id: UUID
    employee_id: Optional[UUID] = None
    booking_date: date
    booking_time: str
    duration_minutes: Optional[int] = None
    status: str = "pending"
    customer_name: Optional[str] = None


class AvailabilityResult(BaseModel):
    slots: List[str] = Field(default_factory=list)
    source: SlotSource = SlotSource.WORKING_HOURS
    working_day: Optional[WorkingDay] = None
    duration_minutes: int
    entity_slots_defined: int = 0
    manual_slots_defined: int = 0
    # false only once the day resolves to usable open/close bounds
    is_closed: bool = True


class ConflictResult(BaseModel):
    has_conflict: bool = False
    conflicts: List[BookingRecord] = Field(default_factory=list)
