"""Lookups of the salon catalogue rows a booking depends on"""
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import SalonNotFound, ServiceNotFound
from app.models.salon import Salon
from app.models.service import Service, HomeService


class SalonService:
    """Read-only access to salons and their services"""

    @staticmethod
    def get_active_salon(db: Session, salon_id: UUID) -> Salon:
        salon = db.query(Salon).filter(
            Salon.id == salon_id,
            Salon.is_active == True  # noqa: E712
        ).first()
        if not salon:
            raise SalonNotFound(f"Salon {salon_id} not found")
        return salon

    @staticmethod
    def get_service(db: Session, salon_id: UUID, service_id: UUID, active_only: bool = True) -> Service:
        query = db.query(Service).filter(
            Service.id == service_id,
            Service.salon_id == salon_id
        )
        if active_only:
            query = query.filter(Service.is_active == True)  # noqa: E712
        service = query.first()
        if not service:
            raise ServiceNotFound("SERVICE_NOT_FOUND")
        return service

    @staticmethod
    def get_home_service(
            db: Session, salon_id: UUID, home_service_id: UUID, active_only: bool = True
    ) -> HomeService:
        query = db.query(HomeService).filter(
            HomeService.id == home_service_id,
            HomeService.salon_id == salon_id
        )
        if active_only:
            query = query.filter(HomeService.is_active == True)  # noqa: E712
        home_service = query.first()
        if not home_service:
            raise ServiceNotFound("HOME_SERVICE_NOT_FOUND")
        return home_service

    @staticmethod
    def resolve_duration_and_price(
            service,
            duration_minutes: Optional[int],
            total_price: Optional[float],
            default_duration: int = 30
    ) -> Tuple[int, Optional[float]]:
        """Request values win, then the service's own, then the salon default"""
        duration = duration_minutes or service.duration_minutes or default_duration
        if total_price is not None:
            price = total_price
        elif service.price is not None:
            price = float(service.price)
        else:
            price = None
        return duration, price
