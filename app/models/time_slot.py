# app/models/time_slot.py
"""
Slot overrides: explicit allowed start times configured by the owner.
Replaced wholesale on every edit (delete-all-then-insert).
"""
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from app.models.base import Base
import uuid


class SlotOverrideMixin:
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slot_time = Column(String(8), nullable=False)
    duration_minutes = Column(Integer, default=30, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def to_dict(self):
        """JSON-ready representation"""
        return {
            "id": str(self.id),
            "slot_time": self.slot_time,
            "duration_minutes": self.duration_minutes,
            "is_active": self.is_active,
        }


class ServiceTimeSlot(SlotOverrideMixin, Base):
    __tablename__ = "service_time_slots"
    __table_args__ = (
        UniqueConstraint("service_id", "slot_time", name="uq_service_slot_time"),
    )

    service_id = Column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )


class HomeServiceTimeSlot(SlotOverrideMixin, Base):
    __tablename__ = "home_service_time_slots"
    __table_args__ = (
        UniqueConstraint("home_service_id", "slot_time", name="uq_home_service_slot_time"),
    )

    home_service_id = Column(
        UUID(as_uuid=True),
        ForeignKey("home_services.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )


class SalonTimeSlot(SlotOverrideMixin, Base):
    __tablename__ = "salon_time_slots"
    __table_args__ = (
        UniqueConstraint("salon_id", "day_of_week", "slot_time", name="uq_salon_day_slot_time"),
    )

    salon_id = Column(
        UUID(as_uuid=True),
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday

    def to_dict(self):
        data = super().to_dict()
        data["day_of_week"] = self.day_of_week
        return data
