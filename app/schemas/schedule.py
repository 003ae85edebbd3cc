"""
Pydantic schemas for working hours and slot override configuration.
Field checks that need the whole week (duplicates, missing days) happen in the service layer.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkingHoursDay(BaseModel):
    day_of_week: Optional[int] = None
    is_closed: Optional[bool] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    slot_interval: Optional[int] = Field(None, gt=0)


class WorkingHoursUpdate(BaseModel):
    working_hours: List[WorkingHoursDay]
    timezone: Optional[str] = None


class SlotInput(BaseModel):
    slot_time: Optional[str] = None
    duration_minutes: int = 30
    is_active: bool = True


class SlotsUpdate(BaseModel):
    slots: List[SlotInput]


class SalonSlotsUpdate(SlotsUpdate):
    day_of_week: int
