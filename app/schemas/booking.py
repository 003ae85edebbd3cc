"""
Pydantic schemas for booking requests
"""
from datetime import date
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.services.availability.time_utils import is_valid_time, to_clock_string, to_minutes


def _check_time(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not is_valid_time(v):
        raise ValueError(f"Invalid time format: {v}")
    return to_clock_string(to_minutes(v))


def _strip_optional(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class CustomerFields(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., min_length=1, max_length=30)
    customer_email: Optional[str] = Field(None, max_length=200)
    customer_notes: Optional[str] = None

    @field_validator('customer_name', 'customer_phone')
    @classmethod
    def strip_required(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v

    @field_validator('customer_email', 'customer_notes')
    @classmethod
    def strip_optional(cls, v):
        return _strip_optional(v)


class BookingSlotFields(BaseModel):
    booking_date: date
    booking_time: str
    duration_minutes: Optional[int] = Field(None, gt=0, description="Defaults to the service duration")
    employee_id: Optional[UUID] = None
    total_price: Optional[float] = Field(None, ge=0, description="Defaults to the service price")

    @field_validator('booking_time')
    @classmethod
    def validate_time(cls, v):
        return _check_time(v)


class OwnerBookingCreate(CustomerFields, BookingSlotFields):
    """
    Booking entered by the salon owner.
    Either service_id or home_service_id must be provided.
    """
    service_id: Optional[UUID] = None
    home_service_id: Optional[UUID] = None
    customer_address: Optional[str] = None
    status: Literal["pending", "confirmed"] = "confirmed"

    @model_validator(mode='after')
    def require_service(self):
        if not self.service_id and not self.home_service_id:
            raise ValueError('Either service_id or home_service_id must be provided')
        return self


class PublicBookingCreate(CustomerFields, BookingSlotFields):
    service_id: UUID


class PublicHomeServiceBookingCreate(CustomerFields, BookingSlotFields):
    home_service_id: UUID
    customer_address: Optional[str] = None


class BookingUpdate(BaseModel):
    """All fields optional - only send what should change"""
    customer_name: Optional[str] = Field(None, min_length=1, max_length=200)
    customer_phone: Optional[str] = Field(None, min_length=1, max_length=30)
    customer_email: Optional[str] = None
    customer_notes: Optional[str] = None
    booking_date: Optional[date] = None
    booking_time: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    employee_id: Optional[UUID] = None
    total_price: Optional[float] = Field(None, ge=0)
    status: Optional[Literal["pending", "confirmed", "cancelled", "completed"]] = None

    @field_validator('booking_time')
    @classmethod
    def validate_time(cls, v):
        return _check_time(v)

    @property
    def reschedules(self) -> bool:
        return any(
            value is not None
            for value in (self.booking_date, self.booking_time, self.duration_minutes, self.employee_id)
        )
