# hotelbook/services/room/room_availability_service.py
"""
Room availability service.

A room is free for a stay when no confirmed or checked-in booking on it
overlaps the half-open stay interval. Pending, cancelled and checked-out
bookings never block. The check is a read-time predicate with no locking;
booking creation re-runs it inside its own transaction.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hotelbook.core.exceptions import RoomNotFoundError, RoomTypeNotFoundError
from hotelbook.core.logging import get_logger
from hotelbook.models.base.enums import BookingStatus
from hotelbook.models.booking.booking import Booking
from hotelbook.models.hotel.hotel import Hotel
from hotelbook.models.room.room import Room
from hotelbook.repositories.booking.booking_repository import BookingRepository
from hotelbook.repositories.hotel.hotel_repository import HotelRepository
from hotelbook.repositories.room.room_repository import RoomRepository
from hotelbook.repositories.room.room_type_repository import RoomTypeRepository
from hotelbook.utils.date_utils import StayInterval


class RoomAvailabilityService:
    """
    Service for date-range room availability.

    Responsibilities:
    - Check a single room against a stay
    - List the hotel's free rooms for a stay
    - Pick a free room of a type for the guest booking flow
    """

    def __init__(self, session: Session):
        self.session = session
        self.hotel_repository = HotelRepository(session)
        self.room_repository = RoomRepository(session)
        self.room_type_repository = RoomTypeRepository(session)
        self.booking_repository = BookingRepository(session)
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    # ==================== LOOKUPS ====================

    def get_hotel(self, hotel_id: str) -> Hotel:
        return self.hotel_repository.get_by_id(hotel_id)

    def get_room(self, room_id: str, hotel_id: str) -> Room:
        """
        Resolve a room scoped to a hotel.

        Raises:
            HotelNotFoundError: If the hotel does not exist
            RoomNotFoundError: If the room does not exist in that hotel
        """
        self.get_hotel(hotel_id)
        room = self.room_repository.find_in_hotel(room_id, hotel_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    # ==================== AVAILABILITY ====================

    def is_room_available(
        self,
        room_id: str,
        hotel_id: str,
        requested: StayInterval,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        True when no blocking booking on the room overlaps ``requested``.

        The room's administrative status is not considered here.
        """
        room = self.get_room(room_id, hotel_id)
        available = not self.booking_repository.has_overlap(
            room.id,
            requested,
            exclude_booking_id=exclude_booking_id,
        )

        self._logger.debug(
            "Room availability checked",
            extra={
                "room_id": room.id,
                "hotel_id": hotel_id,
                "check_in": requested.check_in.isoformat(),
                "check_out": requested.check_out.isoformat(),
                "available": available,
            },
        )
        return available

    def find_conflicts(
        self,
        room_id: str,
        hotel_id: str,
        requested: StayInterval,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        room = self.get_room(room_id, hotel_id)
        return self.booking_repository.find_overlapping(
            room.id,
            requested,
            exclude_booking_id=exclude_booking_id,
        )

    def find_available_rooms(
        self,
        hotel_id: str,
        requested: StayInterval,
        room_type_id: Optional[str] = None,
    ) -> List[Room]:
        """
        Rooms with status ``available`` and no overlapping blocking booking.

        Args:
            hotel_id: Hotel to search
            requested: Stay interval
            room_type_id: Restrict to one room type

        Returns:
            Rooms sorted by room number
        """
        self.get_hotel(hotel_id)
        if room_type_id is not None:
            room_type = self.room_type_repository.get_by_id(room_type_id)
            if room_type.hotel_id != hotel_id:
                raise RoomTypeNotFoundError(room_type_id)

        rooms = self.room_repository.find_available(hotel_id, requested, room_type_id)

        self._logger.info(
            f"Found {len(rooms)} available rooms",
            extra={
                "hotel_id": hotel_id,
                "check_in": requested.check_in.isoformat(),
                "check_out": requested.check_out.isoformat(),
            },
        )
        return rooms

    def find_available_room_for_type(
        self,
        hotel_id: str,
        room_type_id: str,
        requested: StayInterval,
    ) -> Optional[Room]:
        """
        First free room of a type for a guest booking.

        Rooms with an overlapping pending booking are only picked when no
        other free room of the type is left. Pending bookings still do not
        hold a room.
        """
        rooms = self.find_available_rooms(hotel_id, requested, room_type_id)
        if not rooms:
            return None

        requested_room_ids = self.booking_repository.find_booked_room_ids(
            hotel_id,
            requested,
            statuses=(BookingStatus.PENDING,),
        )
        for room in rooms:
            if room.id not in requested_room_ids:
                return room
        return rooms[0]
