"""
Repository layer over the relational store.
"""

from hotelbook.repositories.base import BaseRepository
from hotelbook.repositories.booking import BookingRepository
from hotelbook.repositories.hotel import HotelRepository
from hotelbook.repositories.room import RoomRepository, RoomTypeRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "HotelRepository",
    "RoomRepository",
    "RoomTypeRepository",
]
