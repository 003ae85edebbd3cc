# app/models/salon.py
"""
Salon and Employee models.
A salon is the tenant: every calendar, slot and booking row hangs off it.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Salon(Base):
    __tablename__ = "salons"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    phone_number = Column(String(20), nullable=True)
    timezone = Column(String(50), default="Asia/Riyadh")

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    employees = relationship("Employee", back_populates="salon")

    def __repr__(self):
        return f"<Salon(id={self.id}, name={self.name})>"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    salon_id = Column(
        UUID(as_uuid=True),
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = Column(String(200), nullable=False)
    is_active = Column(Boolean, default=True)

    salon = relationship("Salon", back_populates="employees")

    def __repr__(self):
        return f"<Employee(id={self.id}, salon_id={self.salon_id})>"
