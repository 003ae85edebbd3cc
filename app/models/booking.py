# app/models/booking.py
from sqlalchemy import Column, String, Integer, Text, Boolean, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy.sql import func
from app.models.base import Base
import uuid

# Bookings in these states hold their slot
COMMITTED_STATUSES = ("pending", "confirmed")


class BookingMixin:
    """Columns shared by in-salon and home-service bookings"""

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    @declared_attr
    def salon_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("salons.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )

    @declared_attr
    def employee_id(cls):
        return Column(UUID(as_uuid=True), ForeignKey("employees.id"), nullable=True)

    # Customer info
    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(200), nullable=True)
    customer_phone = Column(String(30), nullable=False)
    customer_notes = Column(Text, nullable=True)

    # Booking details
    booking_date = Column(Date, nullable=False, index=True)
    booking_time = Column(String(8), nullable=False)  # HH:MM or HH:MM:SS
    duration_minutes = Column(Integer, nullable=False, default=30)
    total_price = Column(Numeric(10, 2), nullable=True)

    # Status tracking
    status = Column(String(20), default="pending", nullable=False)  # pending, confirmed, cancelled, completed
    source = Column(String(20), default="owner")  # owner, public
    archived = Column(Boolean, default=False, nullable=False)

    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    archived_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, date={self.booking_date}, time={self.booking_time})>"


class Booking(BookingMixin, Base):
    __tablename__ = "bookings"

    service_id = Column(UUID(as_uuid=True), ForeignKey("services.id"), nullable=False)

    service = relationship("Service")


class HomeServiceBooking(BookingMixin, Base):
    __tablename__ = "home_service_bookings"

    home_service_id = Column(UUID(as_uuid=True), ForeignKey("home_services.id"), nullable=False)
    customer_address = Column(Text, nullable=True)

    home_service = relationship("HomeService")
