# app/models/working_hours.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from app.models.base import Base


class WorkingHours(Base):
    """One row per (salon, day of week). Upserted by the owner, never deleted."""
    __tablename__ = "working_hours"
    __table_args__ = (
        UniqueConstraint("salon_id", "day_of_week", name="uq_working_hours_salon_day"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    salon_id = Column(
        UUID(as_uuid=True),
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    is_closed = Column(Boolean, default=False, nullable=False)

    open_time = Column(String(8), nullable=True)  # HH:MM or HH:MM:SS
    close_time = Column(String(8), nullable=True)
    break_start = Column(String(8), nullable=True)
    break_end = Column(String(8), nullable=True)
    slot_interval = Column(Integer, default=30)

    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<WorkingHours(salon_id={self.salon_id}, day={self.day_of_week})>"

    def to_dict(self):
        """JSON-ready representation"""
        return {
            "day_of_week": self.day_of_week,
            "is_closed": self.is_closed,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "break_start": self.break_start,
            "break_end": self.break_end,
            "slot_interval": self.slot_interval,
        }
