# app/schemas/__init__.py
from .availability import (
    ResourceType,
    SlotSource,
    SlotScope,
    WorkingDay,
    SlotOverride,
    BookingRecord,
    AvailabilityResult,
    ConflictResult
)

from .booking import (
    OwnerBookingCreate,
    PublicBookingCreate,
    PublicHomeServiceBookingCreate,
    BookingUpdate
)

from .schedule import (
    WorkingHoursDay,
    WorkingHoursUpdate,
    SlotInput,
    SlotsUpdate,
    SalonSlotsUpdate
)
