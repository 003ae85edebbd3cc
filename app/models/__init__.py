# app/models/__init__.py
from .base import Base
from .salon import Salon, Employee
from .service import Service, HomeService
from .working_hours import WorkingHours
from .time_slot import ServiceTimeSlot, HomeServiceTimeSlot, SalonTimeSlot
from .booking import Booking, HomeServiceBooking, COMMITTED_STATUSES

__all__ = [
    "Base",
    "Salon",
    "Employee",
    "Service",
    "HomeService",
    "WorkingHours",
    "ServiceTimeSlot",
    "HomeServiceTimeSlot",
    "SalonTimeSlot",
    "Booking",
    "HomeServiceBooking",
    "COMMITTED_STATUSES",
]
