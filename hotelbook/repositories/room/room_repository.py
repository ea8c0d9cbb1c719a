"""
Room repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from hotelbook.core.exceptions import RoomNotFoundError
from hotelbook.models.base.enums import RoomStatus
from hotelbook.models.room.room import Room
from hotelbook.repositories.base.base_repository import BaseRepository
from hotelbook.repositories.booking.booking_repository import BookingRepository
from hotelbook.utils.date_utils import StayInterval


def room_number_key(room: Room):
    """Sort key ordering numeric room numbers numerically, others after."""
    number = (room.room_number or "").strip()
    if number.isdigit():
        return (0, int(number), number)
    return (1, 0, number)


class RoomRepository(BaseRepository[Room]):
    """Repository for rooms."""

    not_found_error = RoomNotFoundError

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def find_in_hotel(self, room_id: str, hotel_id: str) -> Optional[Room]:
        query = select(Room).where(Room.id == room_id, Room.hotel_id == hotel_id)
        return self.db.execute(query).scalar_one_or_none()

    def find_by_hotel(
        self,
        hotel_id: str,
        room_type_id: Optional[str] = None,
        status: Optional[RoomStatus] = None,
    ) -> List[Room]:
        """List rooms of a hotel sorted by room number."""
        query = select(Room).where(Room.hotel_id == hotel_id).options(
            joinedload(Room.room_type),
        )
        if room_type_id is not None:
            query = query.where(Room.room_type_id == room_type_id)
        if status is not None:
            query = query.where(Room.status == status)

        rooms = list(self.db.execute(query).scalars().unique().all())
        return sorted(rooms, key=room_number_key)

    def find_available(
        self,
        hotel_id: str,
        interval: StayInterval,
        room_type_id: Optional[str] = None,
    ) -> List[Room]:
        """
        Rooms marked available that no blocking booking holds for the stay.

        Returns:
            Rooms sorted by room number
        """
        booked = BookingRepository(self.db).booked_room_ids_subquery(hotel_id, interval)

        query = select(Room).where(
            Room.hotel_id == hotel_id,
            Room.status == RoomStatus.AVAILABLE,
            Room.id.not_in(booked),
        ).options(
            joinedload(Room.room_type),
        )
        if room_type_id is not None:
            query = query.where(Room.room_type_id == room_type_id)

        rooms = list(self.db.execute(query).scalars().unique().all())
        return sorted(rooms, key=room_number_key)
