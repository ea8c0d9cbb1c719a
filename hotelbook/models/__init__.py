"""
Database models for the hotel booking service.

Importing this package registers every table with ``Base.metadata``.
"""

from hotelbook.models.base import Base, BaseModel, BookingStatus, RoomStatus
from hotelbook.models.booking import Booking
from hotelbook.models.hotel import Hotel
from hotelbook.models.room import Room, RoomType

__all__ = [
    "Base",
    "BaseModel",
    "BookingStatus",
    "RoomStatus",
    "Hotel",
    "RoomType",
    "Room",
    "Booking",
]
