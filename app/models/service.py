# app/models/service.py
"""
Service models - in-salon services and home services.
Both are the source of truth for default price and duration of a booking.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Service(Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    salon_id = Column(
        UUID(as_uuid=True),
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, salon_id={self.salon_id})>"

    def to_dict(self):
        """JSON-ready representation"""
        return {
            "id": str(self.id),
            "name": self.name,
            "price": float(self.price) if self.price is not None else None,
            "duration_minutes": self.duration_minutes,
        }


class HomeService(Base):
    __tablename__ = "home_services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    salon_id = Column(
        UUID(as_uuid=True),
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<HomeService(id={self.id}, name={self.name}, salon_id={self.salon_id})>"

    def to_dict(self):
        """JSON-ready representation"""
        return {
            "id": str(self.id),
            "name": self.name,
            "category": self.category,
            "price": float(self.price) if self.price is not None else None,
            "duration_minutes": self.duration_minutes,
        }
