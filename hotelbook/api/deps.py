# hotelbook/api/deps.py
"""
Dependencies shared by the API routers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hotelbook.api import deps

    router = APIRouter()

    @router.get("/bookings/{booking_id}")
    def read_booking(service = Depends(deps.get_booking_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hotelbook.db.session import get_db
from hotelbook.services.booking.booking_calendar_service import BookingCalendarService
from hotelbook.services.booking.booking_pricing_service import BookingPricingService
from hotelbook.services.booking.booking_service import BookingService
from hotelbook.services.room.room_availability_service import RoomAvailabilityService


def get_availability_service(db: Session = Depends(get_db)) -> RoomAvailabilityService:
    return RoomAvailabilityService(db)


def get_pricing_service(db: Session = Depends(get_db)) -> BookingPricingService:
    return BookingPricingService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_calendar_service(db: Session = Depends(get_db)) -> BookingCalendarService:
    return BookingCalendarService(db)


__all__ = [
    "get_db",
    "get_availability_service",
    "get_pricing_service",
    "get_booking_service",
    "get_calendar_service",
]
